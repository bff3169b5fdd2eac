"""Exception hierarchy for mobproxy."""

from __future__ import annotations


class MobProxyError(Exception):
    """Base class for every error raised by mobproxy."""


class ConfigurationError(MobProxyError, ValueError):
    """A required argument was missing or empty."""


class ServerStateError(MobProxyError):
    """The server was asked to do something its current state does not allow."""


class StartupTimeoutError(MobProxyError):
    """The proxy process never started accepting connections."""

    def __init__(self, host: str, port: int, attempts: int):
        self.host = host
        self.port = port
        self.attempts = attempts
        super().__init__(
            f"Can not connect to BrowserMob Proxy on {host}:{port} after {attempts} attempts"
        )


class ProvisioningError(MobProxyError):
    """The server did not hand out a proxy port."""


class TransportError(MobProxyError):
    """An HTTP call against the control API failed.

    Covers network failures and non-success status codes alike; ``status_code``
    is ``None`` when no response was received.
    """

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class HarParseError(TransportError):
    """The capture document could not be decoded."""


class ServerNotRunningError(TransportError):
    """The server that provisioned this proxy has been stopped."""


class SessionClosedError(TransportError):
    """The session was closed; no further calls can be made on it."""
