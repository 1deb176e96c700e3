"""Shared fixtures: the FastAPI app wired to an in-memory Supabase fake."""

import os

# Settings are read at import time, so these must be set before the app loads
os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:5173")
os.environ["RATE_LIMIT"] = "10000/minute"
os.environ["AUTH_RATE_LIMIT"] = "10000/minute"

import pytest
from fastapi.testclient import TestClient

from app.database.supabase_client import get_supabase, get_service_supabase, get_session_supabase
from app.main import app
from tests.fake_supabase import FakeSupabase


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_service_supabase] = lambda: supabase
    app.dependency_overrides[get_session_supabase] = supabase.session_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(supabase):
    """Register a user with the fake auth and return id, email and auth headers."""
    def _make(email):
        user, token = supabase.auth.add_user(email)
        return SimpleUser(user.id, email, {"Authorization": f"Bearer {token}"})
    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice@example.com")


@pytest.fixture
def bob(make_user):
    return make_user("bob@example.com")


@pytest.fixture
def carol(make_user):
    return make_user("carol@example.com")


class SimpleUser:
    def __init__(self, id, email, headers):
        self.id = id
        self.email = email
        self.headers = headers
