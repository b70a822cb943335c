import re

from pydantic import Field, ValidationInfo, field_validator

from taskmanager.schemas.base import Schema, sanitize_text


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_COMPLEXITY = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def normalize_email(value):
    return sanitize_text(value.strip()).lower()


class RegistrationSchema(Schema):
    name: str
    email: str
    password: str
    confirm_password: str = Field(alias="confirmPassword")

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        value = sanitize_text(value)
        if not 2 <= len(value) <= 100:
            raise ValueError("Name must be between 2 and 100 characters")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        value = value.strip()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please provide a valid email address")
        if len(value) > 255:
            raise ValueError("Email cannot exceed 255 characters")
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        if not 6 <= len(value) <= 128:
            raise ValueError("Password must be between 6 and 128 characters")
        if not PASSWORD_COMPLEXITY.match(value):
            raise ValueError(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number"
            )
        return value

    @field_validator("confirm_password")
    @classmethod
    def check_confirmation(cls, value, info: ValidationInfo):
        # Only compared once the password itself passed its own checks
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords do not match")
        return value


class LoginSchema(Schema):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        if not value.strip():
            raise ValueError("Email cannot be empty")
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        if not value.strip():
            raise ValueError("Password cannot be empty")
        return value
