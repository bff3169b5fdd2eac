"""Request body builders for the proxy control API."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, urlencode


def form_body(settings: str | Mapping[str, Any] | None) -> str | None:
    """Return a form body: strings pass through, mappings are url-encoded."""
    if settings is None or isinstance(settings, str):
        return settings
    return urlencode(list(settings.items()))


def json_body(payload: str | Mapping[str, Any] | None) -> str | None:
    """Return a compact JSON body; strings are assumed to be JSON already."""
    if payload is None or isinstance(payload, str):
        return payload
    return json.dumps(dict(payload), separators=(",", ":"))


def list_form_data(regexp: str, status_code: int) -> str:
    """Build the whitelist/blacklist form body."""
    return f"regex={quote_plus(regexp)}&status={status_code}"


def host_mapping(host: str, ip_address: str) -> str:
    """Build the single-entry hosts table body."""
    return json_body({host: ip_address})
