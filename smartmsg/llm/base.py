"""Base class and shared prompt for commit message suggesters."""

from abc import ABC, abstractmethod

from smartmsg.llm.exceptions import EmptyResponseError

# System prompt (shared across all suggesters)
SYSTEM_PROMPT = """You are an expert at writing precise, helpful Git commit messages.
Follow the "Conventional Commits" style when appropriate.
One short summary line (<= 72 chars), then an empty line, then bullet points if needed.
Use imperative present tense (e.g., "fix: handle nil pointer in X").
If the diff is large, summarize purpose + major changes concisely."""

USER_PROMPT_TEMPLATE = """Old message:
"{old_message}"

Diff (unified, files & hunks):
{diff}"""

# Characters stripped from both ends of a raw response
_DECORATION_CHARS = "` \t\r\n"


def clean_response(raw_response: str | None) -> str:
    """Strip whitespace and code fence markers from a raw response.

    Args:
        raw_response: The raw text returned by the service.

    Returns:
        The cleaned message text.

    Raises:
        EmptyResponseError: If nothing but decoration remains.
    """
    cleaned = (raw_response or "").strip(_DECORATION_CHARS)
    if not cleaned:
        raise EmptyResponseError("Suggestion service returned an empty message")
    return cleaned


class BaseMessageSuggester(ABC):
    """Abstract base class for commit message suggesters."""

    def build_user_prompt(self, diff: str, old_message: str) -> str:
        """Build the user payload from the old message and the diff."""
        return USER_PROMPT_TEMPLATE.format(old_message=old_message, diff=diff)

    def suggest(self, model: str, diff: str, old_message: str) -> str:
        """Suggest a replacement commit message.

        Args:
            model: Model identifier to use.
            diff: Unified diff of the commit (already truncated).
            old_message: The commit's current subject.

        Returns:
            The suggested message, stripped of decoration.

        Raises:
            SuggestionServiceError: On timeout, transport failure or an
                empty response.
        """
        raw_response = self._complete(model, SYSTEM_PROMPT, self.build_user_prompt(diff, old_message))
        return clean_response(raw_response)

    @abstractmethod
    def _complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        """Send one chat completion request and return the raw text.

        Raises:
            SuggestionServiceError: For any service or transport failure.
        """
        pass
