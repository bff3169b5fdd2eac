"""Individual health-check functions for ``mobproxy doctor``."""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from mobproxy.server import is_listening
from mobproxy.server.process import HOST


@dataclass
class CheckResult:
    """Outcome of a single diagnostic check."""

    name: str
    status: str  # "pass", "fail", "warn"
    message: str
    fix: str = ""


def check_python_version() -> CheckResult:
    """Verify Python >= 3.12."""
    v = sys.version_info
    ver = f"{v.major}.{v.minor}.{v.micro}"
    if (v.major, v.minor) >= (3, 12):
        return CheckResult("Python version", "pass", f"Python {ver}")
    return CheckResult(
        "Python version", "fail", f"Python {ver} (requires >= 3.12)", fix="Install Python 3.12+"
    )


def resolve_executable(path: str) -> str | None:
    """Return the absolute executable path, or None if it cannot be found."""
    candidate = Path(path).expanduser()
    if candidate.is_file():
        return str(candidate.resolve())
    return shutil.which(path)


def check_executable(path: str) -> CheckResult:
    """Check that the proxy executable exists."""
    resolved = resolve_executable(path)
    if resolved:
        return CheckResult("Executable", "pass", f"Proxy executable: {resolved}")
    return CheckResult(
        "Executable",
        "fail",
        f"Proxy executable not found: {path}",
        fix="Install BrowserMob Proxy and set MOBPROXY_PATH to its bin/browsermob-proxy script",
    )


def check_server(port: int) -> CheckResult:
    """Check whether a server is already listening on the control port."""
    if is_listening(HOST, port, timeout=2.0):
        return CheckResult("Server", "pass", f"Server listening on {HOST}:{port}")
    return CheckResult(
        "Server",
        "warn",
        f"Nothing listening on {HOST}:{port}",
        fix="Run 'mobproxy serve' to start the server",
    )
