import logging

from taskmanager.schemas.base import load
from taskmanager.schemas.user_schemas import LoginSchema, RegistrationSchema
from taskmanager.utils.errors import ConflictError, InvalidCredentialsError
from taskmanager.utils.security import issue_access_token


logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users, hasher):
        self.users = users
        self.hasher = hasher

    def register(self, payload):
        """Create an account and return its public identity with an access token."""
        form = load(RegistrationSchema, payload)

        if self.users.get_by_email(form.email) is not None:
            raise ConflictError()

        password_hash = self.hasher.hash(form.password)
        user = self.users.create(name=form.name, email=form.email, password_hash=password_hash)
        token = issue_access_token(user.id)

        logger.info("New user registered: %s (ID: %s)", user.email, user.id)
        return user.to_identity(token)

    def login(self, payload):
        """Check credentials; unknown emails and wrong passwords fail identically."""
        form = load(LoginSchema, payload)

        user = self.users.get_by_email(form.email)
        if user is None:
            self.hasher.burn(form.password)
            logger.warning("Failed login attempt for email: %s", form.email)
            raise InvalidCredentialsError()

        if not self.hasher.verify(form.password, user.password_hash):
            logger.warning("Failed login attempt for email: %s", form.email)
            raise InvalidCredentialsError()

        token = issue_access_token(user.id)
        logger.info("User logged in: %s (ID: %s)", user.email, user.id)
        return user.to_identity(token)
