# tests/test_schemas.py

from __future__ import annotations

from datetime import datetime

import pytest

from taskmanager.schemas.base import load, sanitize_text
from taskmanager.schemas.task_schemas import (
    TaskCreateSchema,
    TaskUpdateSchema,
    parse_status_filter,
)
from taskmanager.schemas.user_schemas import LoginSchema, RegistrationSchema
from taskmanager.utils.errors import ValidationError


def _fields(exc: ValidationError) -> set[str]:
    return {e["field"] for e in exc.errors}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  plain  ", "plain"),
        ("<b>bold</b>", "bbold/b"),
        ("JavaScript:alert(1)", "alert(1)"),
        ('x onclick="y"', 'x "y"'),
        ("ONLOAD=go", "go"),
    ],
)
def test_sanitize_text(raw, expected):
    assert sanitize_text(raw) == expected


def test_sanitize_text_leaves_non_strings_alone():
    assert sanitize_text(5) == 5
    assert sanitize_text(None) is None


def test_registration_normalizes_email_and_trims_name():
    form = load(
        RegistrationSchema,
        {
            "name": "  Ann  ",
            "email": "  Ann@Example.COM ",
            "password": "Abc123",
            "confirmPassword": "Abc123",
        },
    )
    assert form.name == "Ann"
    assert form.email == "ann@example.com"


def test_registration_collects_every_violation():
    with pytest.raises(ValidationError) as info:
        load(
            RegistrationSchema,
            {"name": "A", "email": "not-an-email", "password": "short"},
        )
    assert _fields(info.value) == {"name", "email", "password", "confirmPassword"}
    assert info.value.status_code == 400
    assert info.value.code == "VALIDATION_ERROR"


@pytest.mark.parametrize("password", ["abc123", "ABC123", "Abcdef", "Ab1", "A" * 60 + "a1" * 40])
def test_registration_rejects_weak_or_out_of_range_passwords(password):
    with pytest.raises(ValidationError) as info:
        load(
            RegistrationSchema,
            {"name": "Ann", "email": "ann@x.com", "password": password, "confirmPassword": password},
        )
    assert _fields(info.value) == {"password"}


def test_registration_rejects_mismatched_confirmation():
    with pytest.raises(ValidationError) as info:
        load(
            RegistrationSchema,
            {"name": "Ann", "email": "ann@x.com", "password": "Abc123", "confirmPassword": "Abc124"},
        )
    assert info.value.errors == [{"field": "confirmPassword", "message": "Passwords do not match"}]


def test_registration_rejects_overlong_email():
    email = "a" * 250 + "@x.com"
    with pytest.raises(ValidationError) as info:
        load(
            RegistrationSchema,
            {"name": "Ann", "email": email, "password": "Abc123", "confirmPassword": "Abc123"},
        )
    assert info.value.errors[0]["message"] == "Email cannot exceed 255 characters"


def test_login_requires_both_fields():
    with pytest.raises(ValidationError) as info:
        load(LoginSchema, {"email": "   ", "password": ""})
    assert _fields(info.value) == {"email", "password"}


def test_non_object_body_is_rejected():
    with pytest.raises(ValidationError) as info:
        load(LoginSchema, None)
    assert info.value.code == "INVALID_JSON"


def test_task_create_defaults():
    form = load(TaskCreateSchema, {"title": "  Write report  "})
    assert form.to_fields() == {
        "title": "Write report",
        "description": "",
        "status": "To Do",
        "deadline": None,
        "reminder_time": None,
    }


def test_task_create_requires_title():
    with pytest.raises(ValidationError) as info:
        load(TaskCreateSchema, {"description": "no title"})
    assert _fields(info.value) == {"title"}


def test_task_create_validates_every_field():
    with pytest.raises(ValidationError) as info:
        load(
            TaskCreateSchema,
            {
                "title": "x" * 256,
                "description": "d" * 1001,
                "status": "Blocked",
                "deadline": "not a date",
            },
        )
    assert _fields(info.value) == {"title", "description", "status", "deadline"}


def test_task_create_converts_offsets_to_utc():
    form = load(
        TaskCreateSchema,
        {"title": "t", "deadline": "2030-05-01T12:30:00+02:00", "reminder_time": ""},
    )
    assert form.deadline == datetime(2030, 5, 1, 10, 30)
    assert form.reminder_time is None


def test_task_update_only_returns_supplied_fields():
    updates = load(TaskUpdateSchema, {"status": "Done", "deadline": None, "unknown": 1}).to_updates()
    assert updates == {"status": "Done", "deadline": None}


def test_task_update_null_description_becomes_empty():
    assert load(TaskUpdateSchema, {"description": None}).to_updates() == {"description": ""}


def test_task_update_without_fields_is_rejected():
    with pytest.raises(ValidationError) as info:
        load(TaskUpdateSchema, {}).to_updates()
    assert info.value.message == "No fields to update"


@pytest.mark.parametrize("body", [{"title": "   "}, {"title": None}, {"status": None}, {"status": "done"}])
def test_task_update_rejects_bad_values(body):
    with pytest.raises(ValidationError):
        load(TaskUpdateSchema, body)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("Done", "Done"), ("In Progress", "In Progress"), ("done", None), ("", None), (None, None)],
)
def test_parse_status_filter(raw, expected):
    assert parse_status_filter(raw) == expected
