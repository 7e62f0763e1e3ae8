"""
Assistant Route - let the reasoning service pick tasks

POST /assistant with the conversation so far (a JSON array of
``{"role", "content"}`` messages). Answers with
``{"answerText", "pickedTasksArray"}``.
"""

import logging

from fastapi import APIRouter, Body, Depends
from starlette.concurrency import run_in_threadpool

from sooner.accounts import require_user
from sooner.assistant import AssistantPick, AssistantService, ChatMessage

from ..deps import get_assistant, get_assistant_caller_id, get_store
from ..store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AssistantPick)
async def pick_tasks(
    conversation: list[ChatMessage] = Body(default=[]),
    user_id: str = Depends(get_assistant_caller_id),
    store: DocumentStore = Depends(get_store),
    assistant: AssistantService = Depends(get_assistant),
):
    """
    Ask the assistant which open tasks to do next.

    Errors: 400 no identity, 404 unknown user or no tasks, 502 bad answer,
    504 no answer in time.
    """
    # The snapshot is read in a worker thread and is a private copy, so the
    # store lock is never held by the event loop or while awaiting the answer.
    users = await run_in_threadpool(store.snapshot)
    user = require_user(users, user_id)
    return await assistant.pick_for_user(user, conversation)
