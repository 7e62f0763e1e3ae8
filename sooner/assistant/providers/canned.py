"""
Canned assistant answers.

Stands in for the reasoning service: waits, then answers with fixed text
and the first few tasks it was given. The answer goes through the same
strict parser as a real one.
"""

import asyncio
import json
from typing import Any

from ..base import AssistantPick, AssistantProvider, ChatMessage, parse_pick

CANNED_ANSWER_TEXT = "Here is what I would start with: a couple of quick wins to get you moving."
MAX_PICKED = 3


class CannedAssistantProvider(AssistantProvider):
    name = "canned"

    def __init__(self, delay_seconds: float = 2.0, answer_text: str = CANNED_ANSWER_TEXT):
        self.delay_seconds = delay_seconds
        self.answer_text = answer_text

    async def pick(self, tasks: list[dict[str, Any]], conversation: list[ChatMessage]) -> AssistantPick:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        task_ids = [str(t["taskId"]) for t in tasks if t.get("taskId")]
        raw = json.dumps({"answerText": self.answer_text, "pickedTasksArray": task_ids[:MAX_PICKED]})
        return parse_pick(raw, task_ids)
