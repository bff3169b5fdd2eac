"""Shared CLI app objects and helpers."""

import typer
from rich.console import Console
from rich.markup import escape

from mobproxy.server.process import HOST
from mobproxy.utils.debug import set_debug_enabled

app = typer.Typer(
    name="mobproxy",
    help="Launch and control a BrowserMob Proxy server",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def _global_options(
    debug: bool = typer.Option(False, "--debug", help="Trace control API requests"),
) -> None:
    set_debug_enabled(debug)


def server_url(port: int) -> str:
    """Return the control API URL of a local server on ``port``."""
    return f"http://{HOST}:{port}"


def fail(message: str, exc: Exception | None = None) -> typer.Exit:
    """Print an error and return the Exit for the caller to raise."""
    if exc is not None:
        message = f"{message}: {exc}"
    console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(1)
