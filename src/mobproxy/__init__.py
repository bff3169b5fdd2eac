"""mobproxy package."""

from mobproxy.client import Client, HarResult, LimitOptions
from mobproxy.exceptions import (
    ConfigurationError,
    HarParseError,
    MobProxyError,
    ProvisioningError,
    ServerNotRunningError,
    ServerStateError,
    SessionClosedError,
    StartupTimeoutError,
    TransportError,
)
from mobproxy.server import Server

__all__ = [
    "Client",
    "ConfigurationError",
    "HarParseError",
    "HarResult",
    "LimitOptions",
    "MobProxyError",
    "ProvisioningError",
    "Server",
    "ServerNotRunningError",
    "ServerStateError",
    "SessionClosedError",
    "StartupTimeoutError",
    "TransportError",
    "app",
    "main",
]


def __getattr__(name: str):
    if name in ("app", "main"):
        from mobproxy.cli import app, main

        return {"app": app, "main": main}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
