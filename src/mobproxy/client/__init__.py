"""Control session for the BrowserMob Proxy REST API."""

from .client import Client
from .models import HarResult, LimitOptions
from .transport import ProxyTransport

__all__ = [
    "Client",
    "HarResult",
    "LimitOptions",
    "ProxyTransport",
]
