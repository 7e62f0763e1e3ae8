"""
Integration test fixtures for Sooner.

Provides fixtures specific to integration testing:
- FastAPI test clients around an isolated data file
- Token and trusted-header variants of the app
- Helpers to sign up users and build auth headers
"""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sooner.assistant.providers import CannedAssistantProvider
from sooner.backend.main import create_app
from sooner.backend.store import DocumentStore
from sooner.config import AssistantConfig, AuthConfig, Settings, StoreConfig

TEST_SECRET = "integration-test-secret"


# ─────────────────────────────────────────────────────────────────────────────
# App Fixtures
# ─────────────────────────────────────────────────────────────────────────────


def build_settings(data_file: Path, mode: str = "token") -> Settings:
    return Settings(
        store=StoreConfig(data_file=str(data_file), strict=True),
        auth=AuthConfig(mode=mode, jwt_secret=TEST_SECRET),
        assistant=AssistantConfig(provider="canned", delay_seconds=0, timeout_seconds=5),
    )


@pytest.fixture
def app_factory(data_file: Path) -> Callable[..., FastAPI]:
    """
    Build apps on the shared temporary data file.

    Returns:
        function(mode="token", provider=None) -> FastAPI app
    """

    def _build(mode: str = "token", provider=None) -> FastAPI:
        settings = build_settings(data_file, mode)
        return create_app(
            settings,
            store=DocumentStore(data_file, strict=True),
            provider=provider or CannedAssistantProvider(delay_seconds=0),
            configure_logging=False,
        )

    return _build


@pytest.fixture
def client(app_factory) -> Generator[TestClient, None, None]:
    """Test client for an app in token mode."""
    with TestClient(app_factory()) as test_client:
        yield test_client


@pytest.fixture
def header_client(app_factory) -> Generator[TestClient, None, None]:
    """Test client for an app that trusts the user-id header."""
    with TestClient(app_factory(mode="header")) as test_client:
        yield test_client


# ─────────────────────────────────────────────────────────────────────────────
# User Helpers
# ─────────────────────────────────────────────────────────────────────────────


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def jwt_secret() -> str:
    """Secret the test apps sign tokens with."""
    return TEST_SECRET


@pytest.fixture
def signup(client) -> Callable[..., dict]:
    """
    Sign up a user through the API.

    Returns:
        function(email=..., password=..., name=...) -> {"token", "userId", "headers"}
    """

    def _signup(email: str = "alice@example.com", password: str = "correct horse", name: str = "Alice") -> dict:
        response = client.post("/auth/signup", json={"email": email, "password": password, "name": name})
        assert response.status_code == 201, response.text
        data = response.json()
        data["headers"] = bearer(data["token"])
        return data

    return _signup


@pytest.fixture
def auth_headers(signup) -> dict[str, str]:
    """Headers of a freshly signed-up user."""
    return signup()["headers"]


@pytest.fixture
def make_mega_user(data_file: Path) -> Callable[[str], None]:
    """Set isMegaUser on a stored user directly in the data file."""

    def _promote(user_id: str) -> None:
        with DocumentStore(data_file).transaction() as users:
            for user in users:
                if user.get("id") == user_id:
                    user["isMegaUser"] = True

    return _promote
