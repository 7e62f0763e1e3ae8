"""
Assistant providers

- canned: fixed answer after a delay, no network (development and tests)
- openai: chat completion through the OpenAI API
"""

import logging

from sooner.config import AssistantConfig

from ..base import AssistantProvider
from .canned import CannedAssistantProvider
from .openai_provider import OpenAIAssistantProvider

logger = logging.getLogger(__name__)


def build_provider(config: AssistantConfig) -> AssistantProvider:
    """Create the provider configured by ``assistant.provider``."""
    if config.provider == "openai":
        if config.api_key:
            return OpenAIAssistantProvider(api_key=config.api_key, model=config.model)
        logger.warning("assistant.provider=openai but OPENAI_API_KEY is not set, using canned answers")
    return CannedAssistantProvider(delay_seconds=config.delay_seconds)


__all__ = ["CannedAssistantProvider", "OpenAIAssistantProvider", "build_provider"]
