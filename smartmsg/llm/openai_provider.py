"""OpenAI chat completions suggester."""

from openai import OpenAI

from smartmsg.config import DEFAULT_MAX_COMPLETION_TOKENS, DEFAULT_TIMEOUT, API_KEY_ENV_VAR
from smartmsg.llm.base import BaseMessageSuggester
from smartmsg.llm.exceptions import MissingAPIKeyError, SuggestionServiceError


class OpenAIProvider(BaseMessageSuggester):
    """Suggester backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_completion_tokens: int = DEFAULT_MAX_COMPLETION_TOKENS,
    ):
        """Initialize the OpenAI provider.

        Args:
            api_key: OpenAI API key.
            base_url: Optional alternate endpoint.
            timeout: Per-call deadline in seconds.
            max_completion_tokens: Completion token cap per call.

        Raises:
            MissingAPIKeyError: If no API key is given.
        """
        if not api_key:
            raise MissingAPIKeyError(
                f"OpenAI API key not found. Set it using:\n"
                f"  1. Environment variable: export {API_KEY_ENV_VAR}=your_key_here\n"
                f"  2. Run: smartmsg config set-key\n"
                f"  3. Manually add to ~/.smartmsg/credentials"
            )
        self.timeout = timeout
        self.max_completion_tokens = max_completion_tokens
        # Single attempt per call so timeout bounds the whole request
        self.client = OpenAI(api_key=api_key, base_url=base_url or None, max_retries=0)

    def _complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=model,
                max_completion_tokens=self.max_completion_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                timeout=self.timeout,
            )
        except Exception as e:
            raise SuggestionServiceError(f"OpenAI API call failed: {e}") from e

        if not response.choices:
            raise SuggestionServiceError("OpenAI API returned no choices")
        return response.choices[0].message.content or ""
