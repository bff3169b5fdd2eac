"""Server lifecycle CLI command."""

import time

import typer

from mobproxy.exceptions import MobProxyError

from .deps import cli_module
from .shared import app, console, fail

SERVE_POLL_INTERVAL = 1.0


@app.command()
def serve(
    path: str | None = typer.Option(None, "--path", help="Proxy executable (MOBPROXY_PATH)"),
    port: int | None = typer.Option(None, "--port", help="Control API port (MOBPROXY_PORT)"),
) -> None:
    """Start the proxy server and keep it running until interrupted."""
    cli = cli_module()
    try:
        server = cli.Server(
            path or cli.get_server_path(),
            port if port is not None else cli.get_server_port(),
        )
        console.print(f"[blue]Starting {server.path}...[/blue]")
        server.start()
    except (MobProxyError, OSError) as exc:
        raise fail("Could not start proxy server", exc) from exc

    console.print(f"[green]Proxy server listening at[/green] {server.url}")
    console.print("[dim]Press Ctrl+C to stop.[/dim]")
    try:
        while server.is_running:
            time.sleep(SERVE_POLL_INTERVAL)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopping proxy server...[/yellow]")
        return
    finally:
        server.stop()
    raise fail("Proxy server exited unexpectedly")
