"""Test configuration and fixtures for mobproxy."""

import subprocess
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import respx
from httpx import Response

from mobproxy.client import Client

BASE_URL = "http://localhost:8080"
PROXY_PORT = 9091


class FakeProcess:
    """Stand-in for ``subprocess.Popen`` that never spawns anything."""

    def __init__(self, args: list[str], exits_on_terminate: bool = True):
        self.args = args
        self.pid = 4242
        self.returncode: int | None = None
        self.exits_on_terminate = exits_on_terminate
        self.terminated = False
        self.killed = False

    def poll(self) -> int | None:
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True
        if self.exits_on_terminate:
            self.returncode = -15

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    def wait(self, timeout: float | None = None) -> int | None:
        if self.returncode is None and timeout is not None:
            raise subprocess.TimeoutExpired(self.args, timeout)
        return self.returncode


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def spawned(monkeypatch: pytest.MonkeyPatch) -> list[FakeProcess]:
    """Replace Popen with FakeProcess and record every spawned process."""
    processes: list[FakeProcess] = []

    def fake_popen(args, *_, **__) -> FakeProcess:
        process = FakeProcess(list(args))
        processes.append(process)
        return process

    monkeypatch.setattr(subprocess, "Popen", fake_popen)
    return processes


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record readiness-poll sleeps instead of waiting."""
    calls: list[float] = []
    monkeypatch.setattr("mobproxy.server.process.time.sleep", calls.append)
    return calls


@pytest.fixture
def probe(monkeypatch: pytest.MonkeyPatch) -> Callable[[list[bool]], list[tuple[str, int]]]:
    """Script the readiness probe: each call pops the next answer.

    Returns the list of (host, port) pairs that were probed.
    """

    def install(answers: list[bool]) -> list[tuple[str, int]]:
        probed: list[tuple[str, int]] = []
        remaining = list(answers)

        def fake_is_listening(host: str, port: int) -> bool:
            probed.append((host, port))
            return remaining.pop(0) if remaining else False

        monkeypatch.setattr("mobproxy.server.process.is_listening", fake_is_listening)
        return probed

    return install


@pytest.fixture
def proxy_api() -> Generator[respx.MockRouter, None, None]:
    """Mock the control API with a provisioning endpoint that assigns port 9091."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        router.post("/proxy", name="provision").mock(
            return_value=Response(200, json={"port": PROXY_PORT})
        )
        yield router


@pytest.fixture
def client(proxy_api: respx.MockRouter) -> Generator[Client, None, None]:
    """A client provisioned against the mocked control API."""
    proxy = Client(BASE_URL)
    yield proxy
    proxy.release()


@pytest.fixture
def sample_har() -> dict:
    """Return a minimal capture document."""
    return {
        "log": {
            "version": "1.2",
            "creator": {"name": "BrowserMob Proxy", "version": "2.1.4"},
            "pages": [{"id": "session1", "title": "session1"}],
            "entries": [
                {
                    "pageref": "session1",
                    "request": {"method": "GET", "url": "http://example.com/"},
                    "response": {"status": 200},
                }
            ],
        }
    }
