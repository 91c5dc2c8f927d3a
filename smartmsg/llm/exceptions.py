"""LLM-related exception classes.

Contains all exception classes for suggestion service operations:
- SuggestionServiceError: Timeout, transport failure or invalid response
- EmptyResponseError: Response held no usable message
- MissingAPIKeyError: Raised when the API key is not set
"""

from smartmsg.exceptions import ConfigurationError, SmartMsgError


class SuggestionServiceError(SmartMsgError):
    """Base exception for suggestion service failures."""

    pass


class EmptyResponseError(SuggestionServiceError):
    """Raised when the service returns an empty or decoration-only message."""

    pass


class MissingAPIKeyError(ConfigurationError):
    """Raised when the required API key is not set."""

    pass
