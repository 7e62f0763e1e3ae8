"""
OpenAI-backed assistant.

Sends the system instruction (with the tasks embedded) followed by the
user's conversation as a chat completion, then parses the reply strictly.
"""

import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from sooner.errors import UpstreamError

from ..base import AssistantPick, AssistantProvider, ChatMessage, parse_pick
from ..prompt import build_system_prompt

logger = logging.getLogger(__name__)


class OpenAIAssistantProvider(AssistantProvider):
    name = "openai"

    def __init__(self, api_key: str | None = None, model: str = "gpt-4o", client: AsyncOpenAI | None = None):
        self.model = model
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def pick(self, tasks: list[dict[str, Any]], conversation: list[ChatMessage]) -> AssistantPick:
        messages = [{"role": "system", "content": build_system_prompt(tasks)}]
        messages.extend(m.model_dump() for m in conversation)

        try:
            response = await self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
            )
        except OpenAIError as e:
            logger.error(f"Error communicating with OpenAI API: {e}")
            raise UpstreamError("Error communicating with the assistant service") from e

        if not response.choices:
            raise UpstreamError("Assistant returned no choices")
        content = response.choices[0].message.content

        return parse_pick(content, [str(t.get("taskId")) for t in tasks])
