from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from taskmanager.models.task_model import STATUS_TODO, TASK_STATUSES
from taskmanager.schemas.base import Schema, sanitize_text
from taskmanager.utils.datetime_utils import to_utc_naive
from taskmanager.utils.errors import ValidationError


TITLE_MAX = 255
DESCRIPTION_MAX = 1000
STATUS_MESSAGE = "Status must be one of: " + ", ".join(TASK_STATUSES)


def _clean_title(value):
    if value is None:
        raise ValueError("Task title is required")
    value = sanitize_text(value)
    if not value:
        raise ValueError("Task title cannot be empty")
    if len(value) > TITLE_MAX:
        raise ValueError(f"Title must be between 1 and {TITLE_MAX} characters")
    return value


def _clean_description(value):
    if value is None:
        return ""
    value = sanitize_text(value)
    if len(value) > DESCRIPTION_MAX:
        raise ValueError(f"Description cannot exceed {DESCRIPTION_MAX} characters")
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _clean_timestamp(value):
    try:
        return to_utc_naive(value)
    except OverflowError:
        # Valid offsets near the calendar's edge cannot be shifted to UTC
        raise ValueError("Invalid timestamp")


class TaskCreateSchema(Schema):
    title: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[datetime] = None
    reminder_time: Optional[datetime] = None

    # Runs for a missing title too, so an absent title is reported like an empty one
    @field_validator("title", mode="after")
    @classmethod
    def check_title(cls, value):
        return _clean_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value):
        return _clean_description(value)

    @field_validator("status")
    @classmethod
    def check_status(cls, value):
        if value is None:
            return STATUS_TODO
        if value not in TASK_STATUSES:
            raise ValueError(STATUS_MESSAGE)
        return value

    @field_validator("deadline", "reminder_time", mode="before")
    @classmethod
    def blank_timestamp(cls, value):
        return _blank_to_none(value)

    @field_validator("deadline", "reminder_time")
    @classmethod
    def normalize_timestamp(cls, value):
        return _clean_timestamp(value)

    def to_fields(self):
        return {
            "title": self.title,
            "description": self.description if self.description is not None else "",
            "status": self.status or STATUS_TODO,
            "deadline": self.deadline,
            "reminder_time": self.reminder_time,
        }


class TaskUpdateSchema(Schema):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[datetime] = None
    reminder_time: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return _clean_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value):
        return _clean_description(value)

    @field_validator("status")
    @classmethod
    def check_status(cls, value):
        if value not in TASK_STATUSES:
            raise ValueError(STATUS_MESSAGE)
        return value

    @field_validator("deadline", "reminder_time", mode="before")
    @classmethod
    def blank_timestamp(cls, value):
        return _blank_to_none(value)

    @field_validator("deadline", "reminder_time")
    @classmethod
    def normalize_timestamp(cls, value):
        return _clean_timestamp(value)

    def to_updates(self):
        """Only the keys the client actually sent; an explicit null clears a timestamp."""
        updates = {name: getattr(self, name) for name in self.model_fields_set}
        if not updates:
            raise ValidationError("No fields to update")
        return updates


def parse_status_filter(value):
    """Unknown status filters are ignored rather than rejected."""
    return value if value in TASK_STATUSES else None
