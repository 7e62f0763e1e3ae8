"""Shared test fixtures for Sooner tests.

This module provides common fixtures used across all test modules:
- Isolated data files and stores in a temporary directory
- Fast password hashing
- Standard user/task records

Usage:
    def test_something(store):
        # store writes to a temporary users.json
        ...
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from sooner.backend.store import DocumentStore


# ─────────────────────────────────────────────────────────────────────────────
# Password Hashing
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def fast_bcrypt():
    """Use the cheapest bcrypt cost so tests stay quick."""
    with patch("sooner.security.passwords.BCRYPT_ROUNDS", 4):
        yield


# ─────────────────────────────────────────────────────────────────────────────
# Store Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path of a (not yet created) data file in a temporary directory."""
    return tmp_path / "data" / "users.json"


@pytest.fixture
def store(data_file: Path) -> DocumentStore:
    """Strict store on a temporary data file."""
    return DocumentStore(data_file)


# ─────────────────────────────────────────────────────────────────────────────
# User / Task Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_user_id() -> str:
    """Standard test user ID."""
    return "test_user_123"


@pytest.fixture
def make_task() -> Callable[..., dict]:
    """Factory for stored task records.

    Returns:
        function(task_id, **fields) -> task dict with sensible defaults
    """

    def _make(task_id: str, **fields) -> dict:
        task = {
            "taskId": task_id,
            "description": f"Task {task_id}",
            "priority": "later",
            "status": "created",
            "creationDate": "2024-01-01T00:00:00.000Z",
            "updateDate": "",
        }
        task.update(fields)
        return task

    return _make


@pytest.fixture
def user_record(mock_user_id: str) -> dict:
    """A stored user without tasks (password is not a real hash)."""
    return {
        "id": mock_user_id,
        "email": "alice@example.com",
        "password": "not-a-hash",
        "name": "Alice",
        "isMegaUser": False,
        "assistantOn": False,
        "tasks": [],
    }
