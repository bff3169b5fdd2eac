"""
Configuration management for mobproxy.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. .env file in the working directory
3. Global config file (~/.mobproxy/config.yml)
4. Default values (lowest priority)

Only the CLI reads configuration; the library classes take explicit arguments.
"""

from .env_loader import (
    global_config_path,
    load_env_file,
    load_global_config,
    load_local_config,
)
from .getters import (
    DEFAULT_SERVER_PATH,
    DEFAULT_SERVER_PORT,
    get_config,
    get_request_timeout,
    get_server_path,
    get_server_port,
)

__all__ = [
    # env_loader
    "global_config_path",
    "load_env_file",
    "load_global_config",
    "load_local_config",
    # getters
    "DEFAULT_SERVER_PATH",
    "DEFAULT_SERVER_PORT",
    "get_config",
    "get_request_timeout",
    "get_server_path",
    "get_server_port",
]
