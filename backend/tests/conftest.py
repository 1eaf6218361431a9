"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory store, a service container wired to it, a TestClient whose
routes use that container, and helpers to seed documents and mint tokens.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Optional

import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, get_container, reset_container
from shared.config import Settings, reset_settings_cache

from tests.fakes import InMemoryDocumentStore


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "3f1c2a9e-8d4b-4e6f-9a1b-2c3d4e5f6a7b",
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a token shaped like the ones login issues.

    Args:
        user_id: Value of the userId claim
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret; pass another value to forge a bad signature
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {
        "userId": user_id,
        "email": email,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def user_doc(
    email: str = "ada@example.com",
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    register_date: str = "2024-01-15T10:00:00+00:00",
    **extra: Any,
) -> dict[str, Any]:
    """A stored user document."""
    return {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "register_date": register_date,
        **extra,
    }


def post_doc(
    owner: str,
    text: str = "Hello from the test suite",
    publish_date: str = "2024-02-01T09:00:00+00:00",
    tags: Optional[list[str]] = None,
    likes: int = 0,
    **extra: Any,
) -> dict[str, Any]:
    """A stored post document."""
    return {
        "text": text,
        "owner": owner,
        "publish_date": publish_date,
        "tags": tags or [],
        "likes": likes,
        **extra,
    }


def comment_doc(
    owner: str,
    post: str,
    message: str = "Nice post",
    publish_date: str = "2024-02-02T09:00:00+00:00",
) -> dict[str, Any]:
    """A stored comment document."""
    return {"message": message, "owner": owner, "post": post, "publish_date": publish_date}


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    reset_settings_cache()
    reset_container()
    yield
    reset_settings_cache()
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings with a known token secret and no store connection."""
    return Settings(jwt_secret=TEST_JWT_SECRET, supabase_url="", supabase_service_role_key="")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def container(store: InMemoryDocumentStore, settings: Settings) -> ServiceContainer:
    return ServiceContainer(store=store, settings=settings)


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    """TestClient whose routes resolve services from the test container."""
    app = create_app()
    app.dependency_overrides[get_container] = lambda: container
    return TestClient(app)


@pytest.fixture
def ada(store: InMemoryDocumentStore) -> dict[str, Any]:
    """A seeded user."""
    return store.seed("users", user_doc(gender="female"))


@pytest.fixture
def ada_post(store: InMemoryDocumentStore, ada: dict[str, Any]) -> dict[str, Any]:
    """A seeded post owned by ada."""
    return store.seed("posts", post_doc(ada["id"], tags=["python", "graphql"]))


@pytest.fixture
def auth_token(ada: dict[str, Any]) -> str:
    """A valid token for ada."""
    return create_test_token(user_id=ada["id"], email=ada["email"])


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
