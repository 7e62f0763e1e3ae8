"""
Accounts - user records in the document store

Signup, signin and self-service profile operations. Like the task manager,
these functions work on the loaded user collection; callers wrap them in a
store transaction when they change anything.

Password hashing is slow on purpose, so it never happens inside a
transaction: callers hash first (hash_password, prepare_profile_changes)
and hand the result in. Checks that depend on the collection, such as
email uniqueness, run again inside the transaction.
"""

import logging
import uuid
from typing import Any

from sooner.backend.store import find_user, find_user_by_email
from sooner.errors import Conflict, NotFound, Unauthenticated
from sooner.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

# Never leaves the server
PRIVATE_FIELDS = ("password",)

CAPABILITY_FLAGS = ("isMegaUser", "assistantOn", "accessRequested")

# Profile patches cannot touch these; flags change through the admin routes
PROTECTED_FIELDS = ("id", "tasks", *CAPABILITY_FLAGS)


def create_user(
    users: list[dict[str, Any]],
    email: str,
    password_hash: str,
    name: str,
    is_mega_user: bool = False,
    assistant_on: bool = False,
) -> dict[str, Any]:
    """
    Add a new user to the collection.

    Args:
        password_hash: Output of hash_password(); stored as is

    Raises:
        Conflict: a user with this email already exists
    """
    if find_user_by_email(users, email):
        raise Conflict("User with this email already exists")

    user = {
        "id": str(uuid.uuid4()),
        "email": email.strip(),
        "password": password_hash,
        "name": name,
        "isMegaUser": is_mega_user,
        "assistantOn": assistant_on,
        "tasks": [],
    }
    users.append(user)
    logger.info(f"Created user {user['id']}")
    return user


def authenticate(users: list[dict[str, Any]], email: str, password: str) -> dict[str, Any]:
    """
    Check credentials.

    Raises:
        NotFound: no user with this email
        Unauthenticated: wrong password
    """
    user = find_user_by_email(users, email)
    if not user:
        raise NotFound("User not found")
    if not verify_password(password, user.get("password")):
        logger.info(f"Failed sign-in for user {user.get('id')}")
        raise Unauthenticated("Invalid credentials", code="BAD_CREDENTIALS")
    return user


def require_user(users: list[dict[str, Any]], user_id: str) -> dict[str, Any]:
    user = find_user(users, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def public_user(user: dict[str, Any]) -> dict[str, Any]:
    """The user record as clients may see it."""
    return {k: v for k, v in user.items() if k not in PRIVATE_FIELDS}


def prepare_profile_changes(fields: dict[str, Any]) -> dict[str, Any]:
    """
    Turn a profile patch into storable changes, outside any transaction.

    ``id``, ``tasks`` and the capability flags are dropped. A non-empty
    password is replaced by its hash; an empty one is dropped.
    """
    changes = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
    if "password" in changes:
        if changes["password"]:
            changes["password"] = hash_password(str(changes["password"]))
        else:
            del changes["password"]
    return changes


def patch_user(users: list[dict[str, Any]], user: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """
    Merge changes from prepare_profile_changes() into a user record.

    Raises:
        Conflict: the new email belongs to another user
    """
    changes = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}

    if "email" in changes:
        other = find_user_by_email(users, changes["email"])
        if other is not None and other is not user:
            raise Conflict("User with this email already exists")
        changes["email"] = str(changes["email"]).strip()

    user.update(changes)
    return user


def delete_user(users: list[dict[str, Any]], user_id: str) -> None:
    user = require_user(users, user_id)
    users.remove(user)
    logger.info(f"Deleted user {user_id}")


def authorization_flags(user: dict[str, Any]) -> dict[str, bool]:
    return {flag: bool(user.get(flag, False)) for flag in CAPABILITY_FLAGS}


def request_assistant_access(user: dict[str, Any]) -> None:
    user["accessRequested"] = True
    logger.info(f"Assistant access requested by user {user.get('id')}")


def set_flags(user: dict[str, Any], flags: dict[str, bool]) -> dict[str, bool]:
    """Set capability flags (admin only). Unknown keys are ignored."""
    for flag in CAPABILITY_FLAGS:
        if flag in flags and flags[flag] is not None:
            user[flag] = bool(flags[flag])
    return authorization_flags(user)


__all__ = [
    "authenticate",
    "authorization_flags",
    "create_user",
    "delete_user",
    "patch_user",
    "prepare_profile_changes",
    "public_user",
    "request_assistant_access",
    "require_user",
    "set_flags",
]
