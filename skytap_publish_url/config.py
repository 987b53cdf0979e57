"""Configuration management with environment variable loading and credential building."""

import base64
import os
from typing import Optional, Union
from pathlib import Path

from skytap_publish_url.exceptions import ConfigurationError


def load_env_file(env_file: Optional[Union[str, Path]] = None) -> None:
    """Load environment variables from a .env file if it exists."""
    env_file = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if env_file.exists():
        with open(env_file, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    if key not in os.environ:  # Don't override existing env vars
                        os.environ[key] = value


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


def get_bool_env(name: str, default: bool) -> bool:
    value = get_env(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def build_auth_credentials(user: str, api_key: str) -> str:
    """Build the Basic auth token (base64 of ``user:api_key``)."""
    raw = f"{user}:{api_key}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def http_timeout() -> float:
    """HTTP timeout in seconds from SKYTAP_HTTP_TIMEOUT."""
    value = get_env(ENV_HTTP_TIMEOUT)
    if value is None:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_HTTP_TIMEOUT} must be a number of seconds, got {value!r}"
        )
    if timeout <= 0:
        raise ConfigurationError(f"{ENV_HTTP_TIMEOUT} must be positive, got {value!r}")
    return timeout


# Load .env file on import
load_env_file()

# Core Configuration Constants
DEFAULT_BASE_URL = "https://cloud.skytap.com"
"""str: Skytap API host used when SKYTAP_BASE_URL is not set."""

DEFAULT_HTTP_TIMEOUT = 30.0
"""float: Default timeout in seconds for the publish set request."""

ENV_BASE_URL = "SKYTAP_BASE_URL"
ENV_USER = "SKYTAP_USER"
ENV_API_KEY = "SKYTAP_API_KEY"
ENV_HTTP_TIMEOUT = "SKYTAP_HTTP_TIMEOUT"
ENV_VERIFY_SSL = "SKYTAP_VERIFY_SSL"

# Publish set response
PUBLISH_SETS_KEY = "publish_sets"
CONFIGURATION_ID_KEY = "id"
