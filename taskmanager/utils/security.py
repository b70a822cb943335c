import base64
import hashlib

import bcrypt
from flask_jwt_extended import create_access_token, create_refresh_token


class PasswordHasher:
    """bcrypt with a SHA-256 pre-hash.

    The pre-hash is base64 encoded so bcrypt sees 44 printable bytes, which
    keeps every character of passwords longer than bcrypt's 72-byte limit.
    """

    def __init__(self, rounds=12):
        self.rounds = rounds
        self._dummy_hash = None

    @staticmethod
    def _prehash(password):
        return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())

    def hash(self, password):
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._prehash(password), salt).decode("utf-8")

    def verify(self, password, password_hash):
        try:
            return bcrypt.checkpw(self._prehash(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    def burn(self, password):
        """Spend one verify on a throwaway hash so unknown accounts cost the same as known ones."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy-password-for-timing")
        self.verify(password, self._dummy_hash)
        return False


def issue_access_token(user_id):
    return create_access_token(identity=str(user_id))


def issue_refresh_token(user_id):
    # Not exchanged by any endpoint yet
    return create_refresh_token(identity=str(user_id))
