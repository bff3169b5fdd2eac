"""``mobproxy doctor``: pre-flight health check command."""

from __future__ import annotations

import typer

from mobproxy.exceptions import ConfigurationError

from .deps import cli_module
from .shared import app, console, fail

STATUS_ICONS = {
    "pass": "[green]✓[/green]",
    "fail": "[red]✗[/red]",
    "warn": "[yellow]![/yellow]",
}


@app.command()
def doctor() -> None:
    """Check that the proxy server can be launched and reached."""
    from .doctor_checks import (
        CheckResult,
        check_executable,
        check_python_version,
        check_server,
    )

    cli = cli_module()
    try:
        path = cli.get_server_path()
        port = cli.get_server_port()
    except ConfigurationError as exc:
        raise fail("Invalid configuration", exc) from exc

    console.print("\n[bold]mobproxy Doctor[/bold]")
    console.print("─" * 36)
    console.print()

    results: list[CheckResult] = [
        check_python_version(),
        check_executable(path),
        check_server(port),
    ]

    for r in results:
        icon = STATUS_ICONS.get(r.status, "?")
        console.print(f"  {icon} {r.message}")
        if r.fix and r.status in ("fail", "warn"):
            for line in r.fix.splitlines():
                console.print(f"    {line}")

    # Summary
    counts = {"pass": 0, "fail": 0, "warn": 0}
    for r in results:
        counts[r.status] = counts.get(r.status, 0) + 1

    console.print()
    console.print(
        f"  Summary: {counts['pass']} passed, {counts['warn']} warnings, {counts['fail']} failed"
    )
    console.print()

    if counts["fail"] > 0:
        raise typer.Exit(1)
