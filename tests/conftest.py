import os

# Point the module-level app at memory before anything imports app.main
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi.testclient import TestClient

from app.main import create_app

PASSWORD = "secret123"

JOB_PAYLOAD = {
    "title": "Backend Developer",
    "company": "Tech Corp",
    "location": "Berlin",
    "type": "full-time",
    "description": "Build and run our APIs.",
    "requirements": "3+ years of Python",
    "salary": "70k-90k EUR",
    "experience": "mid",
    "skills": "python, sql, fastapi",
}


@pytest.fixture()
def app():
    application = create_app(database_url="sqlite://")
    yield application
    application.state.db.dispose()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db_session(app):
    with app.state.db.session() as s:
        yield s


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client):
    """Register a user; returns (token, user dict)."""
    def _register(email: str, role: str = "jobseeker", name: str = "Test User", password: str = PASSWORD):
        res = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name, "role": role},
        )
        assert res.status_code == 201, res.text
        body = res.json()
        return body["token"], body["user"]
    return _register


@pytest.fixture()
def create_job(client):
    def _create_job(token: str, **overrides):
        res = client.post("/api/jobs", json={**JOB_PAYLOAD, **overrides}, headers=auth(token))
        assert res.status_code == 201, res.text
        return res.json()
    return _create_job


@pytest.fixture()
def employer(register):
    return register("boss@corp.com", role="employer", name="Erin Employer")


@pytest.fixture()
def seeker(register):
    return register("seeker@mail.com", role="jobseeker", name="Sam Seeker")
