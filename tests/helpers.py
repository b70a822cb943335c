# tests/helpers.py

from __future__ import annotations

DEFAULT_PASSWORD = "Abc123"


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client, name="Ann", email="ann@x.com", password=DEFAULT_PASSWORD, confirm=None):
    return client.post(
        "/api/auth/register",
        json={
            "name": name,
            "email": email,
            "password": password,
            "confirmPassword": password if confirm is None else confirm,
        },
    )


def create_task(client, headers, **fields):
    fields.setdefault("title", "Write report")
    resp = client.post("/api/tasks", json=fields, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]
