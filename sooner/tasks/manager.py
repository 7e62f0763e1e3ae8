"""
Task Manager - create, read, patch and delete tasks in a user record

All functions take the user's record (a dict from the document store) and
change it in place; persisting is the caller's store transaction.

Field policy:
    taskId, creationDate  assigned on create, never changed afterwards
    status                defaults to "created"; callers may set it on
                          create and patch
    updateDate            "" on create; only changes when a caller sends it
    anything else         merged in as sent
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sooner.errors import NotFound

from . import DEFAULT_STATUS, IMMUTABLE_FIELDS

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a unique task ID."""
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    """Current time as ISO-8601 in UTC with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _task_list(user: dict[str, Any]) -> list[dict[str, Any]]:
    tasks = user.get("tasks")
    if not isinstance(tasks, list):
        tasks = []
        user["tasks"] = tasks
    return tasks


def _without_immutable(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}


def create_task(user: dict[str, Any], fields: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Append a new task to the user's list.

    Args:
        user: User record
        fields: Caller-supplied task fields (description, priority, ...)

    Returns:
        The stored task
    """
    task = {
        "taskId": generate_id(),
        "creationDate": utc_now_iso(),
        "status": DEFAULT_STATUS,
        "updateDate": "",
    }
    task.update(_without_immutable(fields or {}))

    _task_list(user).append(task)
    logger.debug(f"Created task {task['taskId']} for user {user.get('id')}")
    return task


def get_task(user: dict[str, Any], task_id: str) -> dict[str, Any]:
    for task in user.get("tasks") or []:
        if str(task.get("taskId")) == str(task_id):
            return task
    raise NotFound("Task not found")


def update_task(user: dict[str, Any], task_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Merge caller fields into an existing task.

    Raises:
        NotFound: no task with that id (the list is left untouched)
    """
    task = get_task(user, task_id)
    task.update(_without_immutable(fields))
    return task


def delete_task(user: dict[str, Any], task_id: str) -> bool:
    """
    Remove the task with ``task_id``.

    Returns:
        True if something was removed. Deleting an unknown id is not an error.
    """
    tasks = _task_list(user)
    remaining = [t for t in tasks if str(t.get("taskId")) != str(task_id)]
    removed = len(remaining) != len(tasks)
    tasks[:] = remaining

    if not removed:
        logger.debug(f"Delete of unknown task {task_id} for user {user.get('id')}")
    return removed


def unresolved_tasks(user: dict[str, Any]) -> list[dict[str, Any]]:
    """Tasks still in the default status."""
    return [t for t in user.get("tasks") or [] if t.get("status") == DEFAULT_STATUS]


__all__ = [
    "create_task",
    "delete_task",
    "generate_id",
    "get_task",
    "unresolved_tasks",
    "update_task",
    "utc_now_iso",
]
