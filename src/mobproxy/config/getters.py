"""Configuration getter functions."""

import os
from pathlib import Path
from typing import Any

from mobproxy.exceptions import ConfigurationError

from .env_loader import load_global_config, load_local_config

DEFAULT_SERVER_PATH = "browsermob-proxy"
DEFAULT_SERVER_PORT = 8080


def get_config(key: str, directory: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. .env file in the working directory
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        directory: Directory holding the .env file (defaults to cwd)
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check local .env file
    local_config = load_local_config(directory)
    if local_config.get(key):
        return local_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if global_config.get(key) is not None:
        return global_config[key]

    # 4. Return default
    return default


def get_server_path(directory: Path | None = None) -> str:
    """Get the proxy executable (default: browsermob-proxy on PATH)."""
    return str(get_config("MOBPROXY_PATH", directory, default=DEFAULT_SERVER_PATH))


def get_server_port(directory: Path | None = None) -> int:
    """Get the server control port (default: 8080)."""
    value = get_config("MOBPROXY_PORT", directory, default=DEFAULT_SERVER_PORT)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"MOBPROXY_PORT must be an integer, got {value!r}") from exc


def get_request_timeout(directory: Path | None = None) -> float | None:
    """Get the request timeout in seconds; None waits indefinitely."""
    value = get_config("MOBPROXY_TIMEOUT", directory)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"MOBPROXY_TIMEOUT must be a number, got {value!r}") from exc
