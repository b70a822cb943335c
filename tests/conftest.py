# tests/conftest.py

from __future__ import annotations

import pytest

from taskmanager.app import create_app
from taskmanager.context import get_context

from .helpers import auth_header, register

TESTING_CONFIG = "taskmanager.config.TestingConfig"


@pytest.fixture()
def app(tmp_path):
    """
    App on a throwaway SQLite file.

    A file (not :memory:) so the sweeper's own app context and the request
    sessions see the same data.
    """
    app = create_app(
        TESTING_CONFIG,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'tasks.sqlite3'}",
    )
    yield app
    get_context(app).close()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user(client) -> dict:
    """Registered user's response data (userId, name, email, token, createdAt)."""
    resp = register(client)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


@pytest.fixture()
def other_user(client) -> dict:
    resp = register(client, name="Bob", email="bob@x.com")
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


@pytest.fixture()
def headers(user) -> dict[str, str]:
    return auth_header(user["token"])


@pytest.fixture()
def other_headers(other_user) -> dict[str, str]:
    return auth_header(other_user["token"])
