"""
Task Query Pipeline

Derives the task list a client sees from a user's stored tasks:

    status filter -> description search -> sort -> paginate

Nothing here mutates its input.

Pagination modes:
    cumulative  page p returns tasks[0 : p*page_size] ("show first p pages")
    window      page p returns tasks[(p-1)*page_size : p*page_size]

``pagination_amount`` is ceil(filtered / page_size) in both modes.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from . import DEFAULT_STATUS, PAGE_SIZE, PRIORITIES

PAGINATION_MODES = ("cumulative", "window")


@dataclass
class TaskPage:
    """Result of a task query."""

    tasks: list[dict[str, Any]] = field(default_factory=list)
    pagination_amount: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"paginationAmount": self.pagination_amount, "tasks": self.tasks}


# =============================================================================
# Pipeline stages
# =============================================================================


def parse_status_filter(raw: str | None) -> set[str]:
    """Split a comma-separated status list. Empty or absent means ``created``."""
    statuses = {part.strip() for part in (raw or "").split(",") if part.strip()}
    return statuses or {DEFAULT_STATUS}


def filter_by_status(tasks: Iterable[dict[str, Any]], raw_filter: str | None) -> list[dict[str, Any]]:
    accepted = parse_status_filter(raw_filter)
    return [t for t in tasks if t.get("status") in accepted]


def search_description(tasks: Iterable[dict[str, Any]], search: str | None) -> list[dict[str, Any]]:
    """Case-insensitive substring match on ``description``."""
    if not search:
        return list(tasks)
    needle = search.lower()
    return [t for t in tasks if needle in str(t.get("description") or "").lower()]


def _priority_rank(task: dict[str, Any], order: Sequence[str]) -> int:
    try:
        return order.index(task.get("priority"))
    except ValueError:
        return len(order)


def parse_timestamp(value: Any) -> float | None:
    """Parse an ISO-8601 timestamp to epoch seconds; None if unparseable."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _by_date(tasks: list[dict[str, Any]], newest_first: bool) -> list[dict[str, Any]]:
    def key(task: dict[str, Any]) -> tuple[int, float]:
        ts = parse_timestamp(task.get("creationDate"))
        if ts is None:
            return (1, 0.0)
        return (0, -ts if newest_first else ts)

    return sorted(tasks, key=key)


def sort_tasks(tasks: list[dict[str, Any]], sort: str | None) -> list[dict[str, Any]]:
    """
    Order tasks by one of the sort modes.

    Sorting is stable. Tasks with an unknown priority or an unparseable
    creation date go after all others. Unknown modes keep the order.
    """
    if sort == "priorityAsc":
        return sorted(tasks, key=lambda t: _priority_rank(t, PRIORITIES))
    if sort == "priorityDesc":
        return sorted(tasks, key=lambda t: _priority_rank(t, PRIORITIES[::-1]))
    if sort == "dateNewerFirst":
        return _by_date(tasks, newest_first=True)
    if sort == "dateOlderFirst":
        return _by_date(tasks, newest_first=False)
    return list(tasks)


def paginate(
    tasks: list[dict[str, Any]],
    page: int = 1,
    page_size: int = PAGE_SIZE,
    mode: str = "cumulative",
) -> TaskPage:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if mode not in PAGINATION_MODES:
        raise ValueError(f"Unknown pagination mode: {mode}")

    end = page * page_size
    start = 0 if mode == "cumulative" else end - page_size
    return TaskPage(
        tasks=tasks[start:end],
        pagination_amount=math.ceil(len(tasks) / page_size),
    )


# =============================================================================
# Entry point
# =============================================================================


def query_tasks(
    tasks: Iterable[dict[str, Any]] | None,
    filter: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    page: int = 1,
    page_size: int = PAGE_SIZE,
    mode: str = "cumulative",
) -> TaskPage:
    """
    Run the full pipeline over a user's tasks.

    Args:
        tasks: The user's stored tasks (None is treated as no tasks)
        filter: Comma-separated statuses; default ``created``
        search: Substring to look for in descriptions
        sort: priorityAsc | priorityDesc | dateNewerFirst | dateOlderFirst
        page: 1-based page number
        page_size: Tasks per page
        mode: cumulative | window

    Returns:
        TaskPage with the visible tasks and the total page count
    """
    selected = filter_by_status(tasks or [], filter)
    selected = search_description(selected, search)
    selected = sort_tasks(selected, sort)
    return paginate(selected, page=page, page_size=page_size, mode=mode)


__all__ = [
    "PAGINATION_MODES",
    "TaskPage",
    "filter_by_status",
    "paginate",
    "parse_status_filter",
    "parse_timestamp",
    "query_tasks",
    "search_description",
    "sort_tasks",
]
