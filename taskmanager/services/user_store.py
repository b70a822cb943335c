from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from taskmanager.models.user_model import User
from taskmanager.utils.db import db
from taskmanager.utils.errors import ConflictError


class UserStore:
    """Credential store: user rows keyed by a unique, lowercased email."""

    def get_by_email(self, email):
        return db.session.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def create(self, name, email, password_hash):
        user = User(name=name, email=email, password_hash=password_hash)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            db.session.rollback()
            raise ConflictError()
        db.session.refresh(user)
        return user
