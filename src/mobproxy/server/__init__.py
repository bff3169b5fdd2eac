"""Process supervision for the BrowserMob Proxy executable."""

from .probe import is_listening
from .process import DEFAULT_PORT, Server

__all__ = ["DEFAULT_PORT", "Server", "is_listening"]
