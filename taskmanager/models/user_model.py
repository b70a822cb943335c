from taskmanager.utils.datetime_utils import isoformat, utcnow
from taskmanager.utils.db import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tasks = db.relationship(
        "Task",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_identity(self, token=None):
        """Public view of the account; the password hash never leaves the model."""
        data = {
            "userId": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": isoformat(self.created_at),
        }
        if token is not None:
            data["token"] = token
        return data

    def __repr__(self):
        return f"<User {self.email}>"
