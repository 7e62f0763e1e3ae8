"""
Document Store - all users and their tasks in one JSON file

The whole collection is read and rewritten as a unit. Writes go to a
temporary file in the same directory and replace the target atomically, so
the file at rest is always a complete JSON array.

Every load-mutate-persist cycle runs under one store-wide lock. Users share one
document, so there is no per-user lock.

Usage:
    store = DocumentStore(Path("data/users.json"))

    with store.transaction() as users:
        user = find_user(users, user_id)
        user["name"] = "Alice"
    # saved here, unless the block raised

Modes:
    strict=True   read/write failures raise PersistenceError
    strict=False  failures are logged; load() returns [] and save() returns
                  as if it had succeeded (legacy deployments)
"""

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sooner.errors import PersistenceError
from sooner.logging_config import get_logger

logger = get_logger(__name__)

# Contents written when the data file does not exist yet. Read-only template;
# use new_document() for a copy callers may mutate.
BOOTSTRAP_DOCUMENT: list[dict[str, Any]] = [{}]


def new_document() -> list[dict[str, Any]]:
    return [dict(entry) for entry in BOOTSTRAP_DOCUMENT]


class DocumentStore:
    """JSON-file store for the user collection."""

    def __init__(self, path: str | Path, strict: bool = True):
        self.path = Path(path)
        self.strict = strict
        self._lock = threading.RLock()

    # ---- low-level helpers ----

    def _fail(self, message: str, exc: Exception) -> None:
        if self.strict:
            raise PersistenceError(message) from exc
        logger.error(message, error=str(exc), strict=False)

    def _bootstrap(self) -> None:
        logger.info("Initializing data file", path=str(self.path))
        self._write(new_document())

    def _write(self, users: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = json.dumps(users, indent=2, ensure_ascii=False)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # ---- public API ----

    def load(self) -> list[dict[str, Any]]:
        """
        Read the full user collection.

        A missing file is created with the bootstrap document. An empty
        file reads as the bootstrap document.
        """
        with self._lock:
            try:
                if not self.path.exists():
                    self._bootstrap()
                raw = self.path.read_text(encoding="utf-8")
                users = json.loads(raw) if raw.strip() else new_document()
                if not isinstance(users, list):
                    raise ValueError(f"expected a JSON array, got {type(users).__name__}")
                return users
            except (OSError, ValueError) as e:
                self._fail(f"Error reading data file {self.path}", e)
                return []

    def save(self, users: list[dict[str, Any]]) -> None:
        """Overwrite the data file with the full collection (pretty-printed)."""
        with self._lock:
            try:
                self._write(users)
            except (OSError, TypeError, ValueError) as e:
                self._fail(f"Error writing data file {self.path}", e)

    def snapshot(self) -> list[dict[str, Any]]:
        """Load for read-only use."""
        return self.load()

    @contextmanager
    def transaction(self) -> Iterator[list[dict[str, Any]]]:
        """
        Load, let the caller mutate, then save - all under the store lock.

        Nothing is written when the block raises.
        """
        with self._lock:
            users = self.load()
            yield users
            self.save(users)

    def is_healthy(self) -> bool:
        """Check that the data file parses as a JSON array (absent counts as healthy)."""
        try:
            with self._lock:
                if not self.path.exists():
                    return True
                return isinstance(json.loads(self.path.read_text(encoding="utf-8") or "[]"), list)
        except (OSError, ValueError):
            return False


# =============================================================================
# Lookups
# =============================================================================


def find_user(users: list[dict[str, Any]], user_id: str | None) -> dict[str, Any] | None:
    """Find a user record by id. Records without an id never match."""
    if not user_id:
        return None
    for user in users:
        if isinstance(user, dict) and user.get("id") == user_id:
            return user
    return None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user_by_email(users: list[dict[str, Any]], email: str | None) -> dict[str, Any] | None:
    """Find a user record by email (case-insensitive)."""
    if not email:
        return None
    wanted = normalize_email(email)
    for user in users:
        stored = user.get("email") if isinstance(user, dict) else None
        if isinstance(stored, str) and normalize_email(stored) == wanted:
            return user
    return None


__all__ = [
    "BOOTSTRAP_DOCUMENT",
    "DocumentStore",
    "find_user",
    "find_user_by_email",
    "new_document",
    "normalize_email",
]
