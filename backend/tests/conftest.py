"""
Shared fixtures: an in-memory SQLite database and a TestClient bound to it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_SECRET", "workin-test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workin.auth import create_access_token, hash_password
from workin.database import Base, build_engine, get_db
from workin.main import app
from workin.models.application import Application
from workin.models.job import Job
from workin.models.user import User


engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(name="Asha Rao", email=None, role="candidate", password="secret123"):
        user = User(
            name=name,
            email=email or f"{name.split()[0].lower()}@example.com",
            phone_number="+91 98765 43210",
            password_hash=hash_password(password),
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_job(db_session):
    def _make_job(hr, **overrides):
        values = {
            "title": "Backend Engineer",
            "company": "Acme Labs",
            "location": "Bengaluru",
            "description": "Build and run our REST APIs",
            "requirements": "Python, PostgreSQL",
            "salary": None,
            "type": "full-time",
        }
        values.update(overrides)
        job = Job(hr_id=hr.id, **values)
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _make_job


@pytest.fixture
def make_application(db_session):
    def _make_application(job, candidate, status="pending"):
        application = Application(job_id=job.id, candidate_id=candidate.id, status=status)
        db_session.add(application)
        db_session.commit()
        db_session.refresh(application)
        return application

    return _make_application


@pytest.fixture
def hr_user(make_user):
    return make_user(name="Meera Hr", email="meera@acme.example", role="hr")


@pytest.fixture
def candidate(make_user):
    return make_user(name="Ravi Kumar", email="ravi@example.com")


@pytest.fixture
def auth_headers(candidate):
    return {"Authorization": f"Bearer {create_access_token(candidate.id)}"}
