"""
Tasks Route - the caller's task list

Provides endpoints for:
- Listing tasks with status filter, search, sort and pagination
- Creating a task
- Reading, patching and deleting a task by id
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from sooner.accounts import require_user
from sooner.config import Settings
from sooner.tasks import SORT_MODES
from sooner.tasks.manager import create_task, delete_task, get_task, update_task
from sooner.tasks.query import query_tasks

from ..deps import get_current_user_id, get_settings, get_store
from ..models import TaskFields, TaskListResponse
from ..store import DocumentStore

logger = logging.getLogger(__name__)


router = APIRouter()


# =============================================================================
# Task List
# =============================================================================


@router.get("", response_model=TaskListResponse)
def list_tasks(
    filter: str | None = Query(None, description="Comma-separated statuses (default: created)"),
    search: str | None = Query(None, description="Search in task descriptions"),
    sort: str | None = Query(None, description=f"One of {', '.join(SORT_MODES)}"),
    p: int = Query(1, ge=1, description="Page number"),
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    List the caller's tasks.

    Only ``created`` tasks are shown unless ``filter`` says otherwise.
    """
    user = require_user(store.snapshot(), user_id)
    page = query_tasks(
        user.get("tasks"),
        filter=filter,
        search=search,
        sort=sort,
        page=p,
        page_size=settings.tasks.page_size,
        mode=settings.tasks.pagination_mode,
    )
    return TaskListResponse(**page.to_dict())


@router.post("")
def add_task(
    request: TaskFields,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """
    Create a task.

    ``taskId`` and ``creationDate`` are assigned by the server; ``status``
    defaults to ``created`` unless sent.
    """
    with store.transaction() as users:
        return create_task(require_user(users, user_id), request.to_fields())


# =============================================================================
# Single Task
# =============================================================================


@router.get("/{task_id}")
def read_task(task_id: str, user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    return get_task(require_user(store.snapshot(), user_id), task_id)


@router.patch("/{task_id}")
def patch_task(
    task_id: str,
    request: TaskFields,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """Merge fields into a task. The task id and creation date cannot change."""
    with store.transaction() as users:
        return update_task(require_user(users, user_id), task_id, request.to_fields())


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_task(task_id: str, user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    """Delete a task. Deleting an id that does not exist still answers 204."""
    with store.transaction() as users:
        delete_task(require_user(users, user_id), task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
