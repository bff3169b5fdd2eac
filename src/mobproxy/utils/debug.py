"""Debug utilities for tracing control API traffic.

Thread-safe debug logging with rich formatting for CLI sessions.
"""

import json
import threading
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

# Thread-local storage for debug state
_debug_state = threading.local()


def set_debug_enabled(enabled: bool) -> None:
    """Set debug mode for the current thread."""
    _debug_state.enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled for the current thread."""
    return getattr(_debug_state, "enabled", False)


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (http, server)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    console = Console(stderr=True)
    console.print(f"[DEBUG:{category}] {message}", style="bold cyan", markup=False)
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                json_str = json.dumps(value, indent=2)
                syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)
                console.print(f"  {key}:", style="dim", markup=False)
                console.print(syntax)
            except (TypeError, ValueError):
                console.print(f"  {key}: {value}", style="dim", markup=False)
        elif isinstance(value, str) and len(value) > 200:
            console.print(f"  {key}: {value[:200]}... ({len(value)} chars)", style="dim", markup=False)
        else:
            console.print(f"  {key}: {value}", style="dim", markup=False)


def debug_request(method: str, url: str, content_type: str | None, body: str | None) -> None:
    """Log an outgoing control API request in debug mode."""
    if not is_debug_enabled():
        return
    debug_print(
        "http",
        f"→ {method} {url}",
        ContentType=content_type,
        Body=body or None,
    )


def debug_response(status_code: int, elapsed: float, size: int) -> None:
    """Log a control API response in debug mode."""
    if not is_debug_enabled():
        return
    debug_print(
        "http",
        f"← {status_code} +{elapsed:.2f}s",
        Body=f"{size} bytes" if size else None,
    )
