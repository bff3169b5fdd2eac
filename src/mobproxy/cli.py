"""mobproxy CLI - launch and control a BrowserMob Proxy server."""

from mobproxy.cli_commands import doctor_command, proxy_command, server_command  # noqa: F401
from mobproxy.cli_commands.shared import app, console
from mobproxy.client import Client
from mobproxy.config import get_request_timeout, get_server_path, get_server_port
from mobproxy.server import Server


@app.command()
def version() -> None:
    """Show the installed mobproxy version."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as pkg_version

    try:
        current_version = pkg_version("mobproxy")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"mobproxy {current_version}")


def main():
    """Entry point for the CLI."""
    app()


__all__ = [
    "Client",
    "Server",
    "app",
    "get_request_timeout",
    "get_server_path",
    "get_server_port",
    "main",
]
