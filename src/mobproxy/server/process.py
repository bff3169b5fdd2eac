"""Supervisor for the external BrowserMob Proxy process."""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from mobproxy.exceptions import ServerStateError, StartupTimeoutError

from .probe import is_listening

if TYPE_CHECKING:
    from mobproxy.client import Client

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
HOST = "localhost"
PROBE_INTERVAL = 1.0
PROBE_ATTEMPTS = 30
STOP_GRACE_PERIOD = 5.0


class Server:
    """Launch the proxy executable and wait until it accepts connections.

    ``port=0`` starts the executable without a ``--port`` argument.
    """

    def __init__(self, path: str, port: int = DEFAULT_PORT):
        self.path = path
        self.port = port
        self.host = HOST
        self.process: subprocess.Popen | None = None

    def __enter__(self) -> Server:
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def is_running(self) -> bool:
        """True while a process is held and has not exited."""
        return self.process is not None and self.process.poll() is None

    def _command(self) -> list[str]:
        command = [self.path]
        if self.port != 0:
            command.append(f"--port={self.port}")
        return command

    def start(self) -> None:
        """Spawn the process and block until its port is reachable.

        Raises:
            ServerStateError: a process is already held; call ``stop()`` first.
            StartupTimeoutError: the port never accepted a connection.
        """
        if self.process is not None:
            raise ServerStateError("Server already started; call stop() before starting again")

        command = self._command()
        logger.info("Starting proxy server: %s", " ".join(command))
        try:
            self.process = subprocess.Popen(command)
            attempts = 0
            while not is_listening(self.host, self.port):
                time.sleep(PROBE_INTERVAL)
                attempts += 1
                logger.debug("Proxy server not listening yet (attempt %d)", attempts)
                if attempts == PROBE_ATTEMPTS:
                    raise StartupTimeoutError(self.host, self.port, attempts)
        except BaseException:
            self._release()
            raise
        logger.info("Proxy server listening at %s", self.url)

    def stop(self) -> None:
        """Terminate the process if one is running. Safe to call repeatedly."""
        if self.process is None:
            return
        if self.process.poll() is None:
            logger.info("Stopping proxy server (pid %s)", self.process.pid)
        self._release()

    def _release(self) -> None:
        process, self.process = self.process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=STOP_GRACE_PERIOD)
        except subprocess.TimeoutExpired:
            logger.warning("Proxy server did not exit after terminate; killing it")
            process.kill()
            process.wait()

    def create_proxy(
        self,
        settings: str | Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Client:
        """Provision a new proxy port on this server.

        The server is expected to be listening already; this is not re-checked.
        """
        from mobproxy.client import Client

        return Client(self.url, settings, timeout=timeout, server=self)
