"""
Assistant Provider Base Classes

Every reasoning backend implements AssistantProvider. Answers are accepted
only in one shape:

    {"answerText": "<short explanation>", "pickedTasksArray": ["<taskId>", ...]}

Anything else (extra keys, wrong types, ids the user does not have) is an
UpstreamError.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sooner.errors import UpstreamError

# Models sometimes wrap JSON in a Markdown fence
_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ChatMessage(BaseModel):
    """One turn of the user's conversation with the assistant."""

    model_config = ConfigDict(extra="forbid")

    role: Literal["user", "assistant"]
    content: str


class AssistantPick(BaseModel):
    """A validated answer from the reasoning service."""

    model_config = ConfigDict(extra="forbid", strict=True)

    answerText: str = Field(..., min_length=1)
    pickedTasksArray: list[str] = Field(default_factory=list)


class AssistantProvider(ABC):
    """Interface for reasoning backends."""

    name: str = ""

    @abstractmethod
    async def pick(self, tasks: list[dict[str, Any]], conversation: list[ChatMessage]) -> AssistantPick:
        """
        Pick tasks for the user.

        Args:
            tasks: The user's unresolved tasks
            conversation: The user's messages so far

        Raises:
            UpstreamError: the service failed or answered unusably
        """


def parse_pick(raw: str | None, known_ids: Iterable[str]) -> AssistantPick:
    """
    Parse a raw service answer strictly.

    Args:
        raw: Text returned by the service
        known_ids: Task ids the answer may refer to

    Raises:
        UpstreamError: not JSON, wrong shape, or unknown task ids
    """
    if not raw or not raw.strip():
        raise UpstreamError("Assistant returned an empty answer")

    text = raw.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        pick = AssistantPick.model_validate_json(text)
    except ValidationError as e:
        raise UpstreamError(f"Assistant answer has an unexpected format: {e.error_count()} error(s)") from e

    allowed = set(known_ids)
    unknown = [task_id for task_id in pick.pickedTasksArray if task_id not in allowed]
    if unknown:
        raise UpstreamError(f"Assistant picked unknown task ids: {', '.join(unknown)}")

    return pick


__all__ = ["AssistantPick", "AssistantProvider", "ChatMessage", "parse_pick"]
