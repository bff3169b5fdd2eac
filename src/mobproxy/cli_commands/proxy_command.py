"""CLI commands acting on proxy ports of a running server."""

import json
from pathlib import Path

import typer

from mobproxy.exceptions import MobProxyError

from .deps import cli_module
from .shared import app, console, fail, server_url

_SERVER_PORT_OPTION = typer.Option(None, "--port", help="Server control port (MOBPROXY_PORT)")


def _resolve_url(port: int | None) -> str:
    cli = cli_module()
    return server_url(port if port is not None else cli.get_server_port())


@app.command()
def create(
    port: int | None = _SERVER_PORT_OPTION,
    proxy_port: int | None = typer.Option(
        None, "--proxy-port", help="Ask the server for this proxy port"
    ),
) -> None:
    """Provision a new proxy port."""
    cli = cli_module()
    settings = {"port": proxy_port} if proxy_port else None
    try:
        client = cli.Client(_resolve_url(port), settings, timeout=cli.get_request_timeout())
    except MobProxyError as exc:
        raise fail("Could not provision proxy", exc) from exc

    try:
        console.print(f"[green]Proxy port:[/green] {client.port}")
        console.print(f"[green]Browser proxy:[/green] {client.selenium_proxy}")
    finally:
        client.release()


@app.command()
def har(
    proxy_port: int = typer.Argument(..., help="Provisioned proxy port"),
    port: int | None = _SERVER_PORT_OPTION,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the HAR to a file"),
) -> None:
    """Fetch the current capture of a proxy port as JSON."""
    cli = cli_module()
    try:
        client = cli.Client.attach(
            _resolve_url(port), proxy_port, timeout=cli.get_request_timeout()
        )
    except MobProxyError as exc:
        raise fail("Could not fetch capture", exc) from exc
    try:
        result = client.get_har()
    except MobProxyError as exc:
        raise fail("Could not fetch capture", exc) from exc
    finally:
        client.release()

    if result is None:
        console.print("[yellow]No capture recorded.[/yellow]")
        return

    document = json.dumps(result.data, indent=2)
    if output is None:
        typer.echo(document)
        return
    output.write_text(document + "\n", encoding="utf-8")
    console.print(f"[green]Capture written to[/green] {output} ({len(result.entries)} entries)")


@app.command()
def close(
    proxy_port: int = typer.Argument(..., help="Provisioned proxy port"),
    port: int | None = _SERVER_PORT_OPTION,
) -> None:
    """Shut down a proxy port."""
    cli = cli_module()
    try:
        client = cli.Client.attach(
            _resolve_url(port), proxy_port, timeout=cli.get_request_timeout()
        )
        client.close()
    except MobProxyError as exc:
        raise fail(f"Could not close proxy port {proxy_port}", exc) from exc
    console.print(f"[green]Closed proxy port {proxy_port}.[/green]")
