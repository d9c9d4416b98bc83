from __future__ import annotations

import os
from typing import Any

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["DB_URL"] = "sqlite:///./test.db"
    os.environ["DB_USE_MYSQL"] = "false"

    # Ensure a local .env cannot leak into tests.
    os.environ["ENVIRONMENT"] = "test"
    os.environ["JWT_SECRET"] = "test-secret"


@pytest.fixture()
def client() -> Any:
    from devmatch.database import Base, engine
    from devmatch.main import create_app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def register(client):
    """Register + login a user and return (user_id, auth headers)."""

    def _register(email: str, *, name: str = "Dev", password: str = "SecretPass123", skills: list[str] | None = None):
        r = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201
        user_id = r.json()["id"]
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200
        headers = {"Authorization": f"Bearer {r.json()['access_token']}"}
        if skills is not None:
            r = client.put("/api/users/me", json={"skills": skills}, headers=headers)
            assert r.status_code == 200
        return user_id, headers

    return _register


@pytest.fixture()
def create_project(client):
    def _create(headers: dict, *, title: str = "Project", required_skills: list[str] | None = None, **extra):
        payload = {"title": title, "description": f"{title} description", "required_skills": required_skills or []}
        payload.update(extra)
        r = client.post("/api/projects", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _create
