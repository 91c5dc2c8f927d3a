"""Commit message suggestion service for smartmsg.

This module hides the suggestion backend behind BaseMessageSuggester so
the planner never depends on a specific API.
"""

from smartmsg.config import Settings
from smartmsg.llm.base import SYSTEM_PROMPT, BaseMessageSuggester, clean_response
from smartmsg.llm.exceptions import (
    EmptyResponseError,
    MissingAPIKeyError,
    SuggestionServiceError,
)
from smartmsg.llm.scripted import ScriptedSuggester


def get_suggester(settings: Settings) -> BaseMessageSuggester:
    """Build the production suggester from settings.

    Args:
        settings: Loaded runtime settings.

    Returns:
        An OpenAIProvider configured with the settings' credential,
        endpoint and timeout.

    Raises:
        MissingAPIKeyError: If no API key is configured.
    """
    from smartmsg.llm.openai_provider import OpenAIProvider

    return OpenAIProvider(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
        max_completion_tokens=settings.max_completion_tokens,
    )


# Export commonly used items
__all__ = [
    "BaseMessageSuggester",
    "ScriptedSuggester",
    "SuggestionServiceError",
    "EmptyResponseError",
    "MissingAPIKeyError",
    "SYSTEM_PROMPT",
    "clean_response",
    "get_suggester",
]
