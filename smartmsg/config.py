"""Runtime configuration for smartmsg.

Settings are loaded once at startup and passed explicitly to the planner
and the suggestion service client. Precedence, lowest first:
built-in defaults, ~/.smartmsg/config.yaml, ~/.smartmsg/credentials,
environment variables (a .env file is loaded first).
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from smartmsg import global_config
from smartmsg.exceptions import ConfigurationError
from smartmsg.git.diff import DEFAULT_DIFF_CHAR_BUDGET

# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_MODEL = "gpt-5-nano"
DEFAULT_TIMEOUT = 25.0
DEFAULT_MAX_COMPLETION_TOKENS = 4000
DEFAULT_LIMIT = 20
DEFAULT_PLAN_FILE = "plan.json"

# ============================================================
# ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VAR = "OPENAI_API_KEY"
API_BASE_ENV_VAR = "OPENAI_API_BASE"
MODEL_ENV_VAR = "OPENAI_MODEL"


class Settings(BaseModel):
    """Suggestion service and planning settings."""

    api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    base_url: Optional[str] = Field(default=None, description="Alternate API endpoint")
    model: str = Field(default=DEFAULT_MODEL, description="Model used for suggestions")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-call timeout in seconds")
    max_completion_tokens: int = Field(default=DEFAULT_MAX_COMPLETION_TOKENS, gt=0)
    diff_char_budget: int = Field(default=DEFAULT_DIFF_CHAR_BUDGET, gt=0)


def load_settings(load_env_file: bool = True) -> Settings:
    """Load settings from config files and the environment.

    Args:
        load_env_file: Load a .env file from the working directory first.

    Returns:
        The merged Settings.

    Raises:
        ConfigurationError: If a config file is unreadable or holds invalid values.
    """
    if load_env_file:
        load_dotenv()

    data: dict = {}

    file_config = global_config.load_global_config()
    for key in ("model", "base_url", "timeout", "max_completion_tokens", "diff_char_budget"):
        if file_config.get(key) is not None:
            data[key] = file_config[key]

    api_key = global_config.get_credential(API_KEY_ENV_VAR)
    if api_key:
        data["api_key"] = api_key

    # Environment variables override config files
    if value := os.getenv(API_KEY_ENV_VAR, "").strip():
        data["api_key"] = value
    if value := os.getenv(API_BASE_ENV_VAR, "").strip():
        data["base_url"] = value
    if value := os.getenv(MODEL_ENV_VAR, "").strip():
        data["model"] = value

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
