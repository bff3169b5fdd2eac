"""TCP readiness probe for the proxy server."""

import socket


def is_listening(host: str, port: int, timeout: float | None = None) -> bool:
    """Return True if a TCP connection to ``host:port`` can be established.

    Only connectivity is checked; the control API may still be warming up.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False
