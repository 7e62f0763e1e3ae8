"""
Assistant - pick the most suitable open tasks for a user

An external reasoning service (an LLM) receives the user's unresolved tasks
and their conversation, and answers with a short explanation plus the ids
of the tasks it picked.

Components:
- base.py: Provider interface and the strict answer format
- prompt.py: System instruction sent with every request
- providers/: OpenAI implementation and a canned double for tests/dev
- service.py: Per-user orchestration (lookup, timeout, error mapping)

Usage:
    from sooner.assistant import AssistantService, ChatMessage, build_provider

    service = AssistantService(build_provider(settings.assistant))
    pick = await service.pick_for_user(user, [ChatMessage(role="user", content="I have 20 minutes")])
"""

from .base import AssistantPick, AssistantProvider, ChatMessage, parse_pick
from .providers import build_provider
from .service import AssistantService

__all__ = [
    "AssistantPick",
    "AssistantProvider",
    "AssistantService",
    "ChatMessage",
    "build_provider",
    "parse_pick",
]
