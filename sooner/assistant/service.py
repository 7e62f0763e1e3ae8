"""
Assistant service - one pick request for one user

The provider call is awaited with a timeout and without holding the store
lock, so a slow answer never holds up other users' requests.
"""

import asyncio
from typing import Any

from sooner.errors import NotFound, UpstreamTimeout
from sooner.logging_config import get_logger
from sooner.tasks.manager import unresolved_tasks

from .base import AssistantPick, AssistantProvider, ChatMessage

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class AssistantService:
    def __init__(self, provider: AssistantProvider, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.provider = provider
        self.timeout_seconds = timeout_seconds

    async def pick_for_user(self, user: dict[str, Any], conversation: list[ChatMessage]) -> AssistantPick:
        """
        Ask the provider to pick among the user's unresolved tasks.

        Args:
            user: User record (a copy is fine; nothing is written)
            conversation: Messages from the client

        Raises:
            NotFound: the user has no tasks at all
            UpstreamError: provider failure or unusable answer
            UpstreamTimeout: no answer within the timeout
        """
        if not user.get("tasks"):
            raise NotFound("No tasks found for the user")

        tasks = unresolved_tasks(user)
        logger.info("Assistant pick", user_id=user.get("id"), unresolved=len(tasks), provider=self.provider.name)

        try:
            return await asyncio.wait_for(self.provider.pick(tasks, conversation), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.warning("Assistant timed out", timeout_seconds=self.timeout_seconds, provider=self.provider.name)
            raise UpstreamTimeout("Assistant did not answer in time") from e
