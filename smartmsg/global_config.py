"""User-level configuration for smartmsg.

Everything lives in ~/.smartmsg/:
- config.yaml: model, endpoint, timeout and token/diff limits
- credentials: OPENAI_API_KEY=... lines, readable by the owner only
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from smartmsg.exceptions import ConfigurationError


class GlobalConfigError(ConfigurationError):
    """Raised when ~/.smartmsg cannot be read or written."""
    pass


_CONFIG_DIR = Path.home() / ".smartmsg"

_CREDENTIALS_HEADER = (
    "# smartmsg API credentials\n"
    "# Format: OPENAI_API_KEY=your_key_here\n\n"
)


def get_global_config_dir() -> Path:
    """Return ~/.smartmsg/."""
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Create ~/.smartmsg/ if needed and return it."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Read config.yaml.

    Returns:
        The settings mapping, or an empty dict when the file is absent.

    Raises:
        GlobalConfigError: If the file is unreadable, is not YAML or does
            not hold a mapping.
    """
    path = get_config_file_path()
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GlobalConfigError(f"Config file {path} must contain a mapping")
    return data


def save_global_config(config: Dict[str, Any]) -> None:
    """Replace config.yaml with the given mapping."""
    ensure_global_config_dir()
    path = get_config_file_path()
    try:
        with open(path, "w") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {path}: {e}")


def _parse_credentials(text: str) -> Dict[str, str]:
    credentials = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        name, value = line.split("=", 1)
        credentials[name.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Read the credentials file into an env-var-name -> key mapping."""
    path = get_credentials_file_path()
    if not path.exists():
        return {}

    try:
        return _parse_credentials(path.read_text())
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {path}: {e}")


def save_credential(key_name: str, api_key: str) -> None:
    """Store one key in the credentials file, keeping any others.

    The file is rewritten with owner-only permissions.

    Args:
        key_name: Environment variable name, e.g. OPENAI_API_KEY.
        api_key: The secret value.
    """
    ensure_global_config_dir()
    path = get_credentials_file_path()

    credentials = load_credentials()
    credentials[key_name] = api_key
    lines = "".join(f"{name}={value}\n" for name, value in credentials.items())

    try:
        path.write_text(_CREDENTIALS_HEADER + lines)
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(key_name: str) -> Optional[str]:
    """Return a stored key, or None."""
    return load_credentials().get(key_name)


def set_model(model: str) -> None:
    """Persist the default model in config.yaml."""
    config = load_global_config()
    config["model"] = model
    save_global_config(config)
