"""Data models for proxy control requests and responses."""

from dataclasses import dataclass, fields
from typing import Any
from urllib.parse import urlencode


@dataclass
class LimitOptions:
    """Bandwidth and latency limits for a proxy port.

    Unset fields are left out of the request so the server keeps its current
    value for them.
    """

    downstream_kbps: int | None = None
    upstream_kbps: int | None = None
    downstream_max_kb: int | None = None
    upstream_max_kb: int | None = None
    latency: int | None = None
    enable: bool | None = None
    payload_percentage: int | None = None
    max_bits_per_second: int | None = None

    _WIRE_NAMES = {
        "downstream_kbps": "downstreamKbps",
        "upstream_kbps": "upstreamKbps",
        "downstream_max_kb": "downstreamMaxKB",
        "upstream_max_kb": "upstreamMaxKB",
        "latency": "latency",
        "enable": "enable",
        "payload_percentage": "payloadPercentage",
        "max_bits_per_second": "maxBitsPerSecond",
    }

    def to_form_data(self) -> str:
        """Serialize the set fields as an x-www-form-urlencoded string."""
        pairs = []
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            pairs.append((self._WIRE_NAMES[item.name], value))
        return urlencode(pairs)


@dataclass
class HarResult:
    """A capture document as returned by the proxy.

    The document is kept exactly as parsed; the properties below only index
    into it and never validate the HAR schema.
    """

    data: dict[str, Any]

    @property
    def log(self) -> dict[str, Any]:
        log = self.data.get("log")
        return log if isinstance(log, dict) else {}

    @property
    def pages(self) -> list[dict[str, Any]]:
        pages = self.log.get("pages")
        return pages if isinstance(pages, list) else []

    @property
    def entries(self) -> list[dict[str, Any]]:
        entries = self.log.get("entries")
        return entries if isinstance(entries, list) else []
