"""Shared fixtures: in-memory database, API client and Supabase-style tokens."""

import os
import uuid

# Settings are read once at import time; point them at test values first.
os.environ["SUPABASE_URL"] = "http://localhost:54321"
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["EMAIL_TRANSPORT"] = "supabase"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from airmates.database import get_session
from airmates.main import app
from airmates.models.profile import Profile


@pytest.fixture
def session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def client(session):
    """TestClient whose requests share the test session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_profile(session):
    """Create a registered account (profile row)."""

    def _make(email: str, **fields) -> Profile:
        fields.setdefault("name", email.split("@")[0])
        profile = Profile(id=uuid.uuid4(), email=email, **fields)
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    return _make


@pytest.fixture
def auth_headers():
    """Authorization header carrying a Supabase-style access token."""

    def _headers(profile_id: uuid.UUID, email: str) -> dict[str, str]:
        token = jwt.encode(
            {"sub": str(profile_id), "email": email, "aud": "authenticated"},
            os.environ["SUPABASE_JWT_SECRET"],
            algorithm="HS256",
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def me(make_profile):
    return make_profile("me@example.com", name="Me", upi_id="me@upi", mobile_number="+911111111111")


@pytest.fixture
def my_headers(me, auth_headers):
    return auth_headers(me.id, me.email)
