from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="ats-tests-"))

# Must be in place before ats.config is imported.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "resumes")
os.environ["AUTH_SECRET"] = "test-signing-secret"
os.environ["AUTH_PREVIOUS_SECRETS"] = ""
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from ats.auth import create_access_token, hash_password  # noqa: E402
from ats.database import Base, SessionLocal, engine  # noqa: E402
from ats.main import create_app  # noqa: E402
from ats.models.job import Job  # noqa: E402
from ats.models.user import User  # noqa: E402


DEFAULT_PASSWORD = "secret-pass-1"


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture()
def make_user():
    counter = {"n": 0}

    def _make(role: str = "student", email: str | None = None, password: str = DEFAULT_PASSWORD, name: str | None = None) -> User:
        counter["n"] += 1
        with SessionLocal() as db:
            user = User(
                name=name or f"{role.title()} {counter['n']}",
                email=email or f"{role}{counter['n']}@example.com",
                password_hash=hash_password(password),
                phone="555-0100",
                role=role,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return user

    return _make


@pytest.fixture()
def make_job():
    def _make(owner: User, **overrides) -> Job:
        values = {
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Remote",
            "salary": "90k-110k",
            "job_type": "Full-Time",
            "description": "Build APIs",
            "required_skills": ["python", "sql"],
            "posted_by_id": owner.id,
            "applications_count": 0,
        }
        values.update(overrides)
        with SessionLocal() as db:
            job = Job(**values)
            db.add(job)
            db.commit()
            db.refresh(job)
            return job

    return _make


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture()
def headers_for():
    return auth_headers
