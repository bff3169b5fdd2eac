"""Control session for one provisioned proxy port."""

from __future__ import annotations

import json
import logging
import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx

from mobproxy.exceptions import (
    ConfigurationError,
    HarParseError,
    ProvisioningError,
    ServerNotRunningError,
    SessionClosedError,
)

from .models import HarResult, LimitOptions
from .payloads import form_body, host_mapping, json_body, list_form_data
from .transport import JSON_CONTENT_TYPE, TEXT_CONTENT_TYPE, ProxyTransport

if TYPE_CHECKING:
    from mobproxy.server import Server

logger = logging.getLogger(__name__)


class Client:
    """Python wrapper around the REST API of one BrowserMob proxy port.

    Creating a client provisions a new port on the server at ``url``; each
    method then maps to exactly one HTTP call under ``/proxy/{port}``.
    """

    def __init__(
        self,
        url: str,
        settings: str | Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
        server: Server | None = None,
    ):
        self._setup(url, timeout, server)
        try:
            self._port = self._provision(settings)
        except BaseException:
            self._transport.close()
            raise
        logger.info("Provisioned proxy port %d on %s", self._port, self._url)

    @classmethod
    def attach(cls, url: str, port: int, *, timeout: float | None = None) -> Client:
        """Bind to a port that was provisioned earlier, without a new POST."""
        client = cls.__new__(cls)
        client._setup(url, timeout, None)
        client._port = int(port)
        return client

    def _setup(self, url: str, timeout: float | None, server: Server | None) -> None:
        if not url:
            raise ConfigurationError("url not supplied")
        self._url = url.rstrip("/")
        self._base_url_proxy = f"{self._url}/proxy"
        self._server_ref = weakref.ref(server) if server is not None else None
        self._transport = ProxyTransport(timeout)
        self._closed = False

    def _provision(self, settings: str | Mapping[str, Any] | None) -> int:
        response = self._transport.request("POST", self._base_url_proxy, form_body(settings))
        if not response.content.strip():
            raise ProvisioningError("No response from proxy")
        try:
            data = response.json()
        except ValueError as exc:
            raise ProvisioningError("Proxy returned an unreadable provisioning response") from exc
        port = data.get("port") if isinstance(data, dict) else None
        if port is None:
            raise ProvisioningError("No port number returned from proxy")
        try:
            return int(port)
        except (TypeError, ValueError) as exc:
            raise ProvisioningError(f"Invalid port number returned from proxy: {port!r}") from exc

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def url(self) -> str:
        return self._url

    @property
    def port(self) -> int:
        return self._port

    @property
    def selenium_proxy(self) -> str:
        """The ``host:port`` address a browser should use as its HTTP proxy."""
        return f"{urlsplit(self._url).hostname}:{self._port}"

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_server(self) -> None:
        if self._server_ref is None:
            return
        server = self._server_ref()
        if server is not None and not server.is_running:
            raise ServerNotRunningError(
                f"Proxy server at {self._url} is not running",
                url=self._url,
            )

    def _call(
        self,
        method: str,
        resource: str = "",
        content: str | None = None,
        content_type: str | None = None,
    ) -> httpx.Response:
        if self._closed:
            raise SessionClosedError(
                f"Proxy port {self._port} on {self._url} has been closed",
                method=method,
                url=self._url,
            )
        self._check_server()
        url = f"{self._base_url_proxy}/{self._port}{resource}"
        return self._transport.request(method, url, content, content_type)

    def new_har(self, reference: str | None = None) -> None:
        """Start a new capture, optionally naming the first page."""
        self._call("PUT", "/har", reference)

    def new_page(self, reference: str) -> None:
        """Mark the start of a new page in the current capture."""
        self._call("PUT", "/har/pageRef", reference)

    def get_har(self) -> HarResult | None:
        """Return the current capture, or None if the server sent nothing."""
        response = self._call("GET", "/har")
        text = response.text
        if not text.strip():
            return None
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise HarParseError(
                "Capture document is not valid JSON",
                method="GET",
                url=str(response.request.url),
                status_code=response.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise HarParseError(
                "Capture document is not a JSON object",
                method="GET",
                url=str(response.request.url),
                status_code=response.status_code,
            )
        return HarResult(data)

    def set_headers(self, payload: str | Mapping[str, Any] | None) -> None:
        """Set headers the proxy adds to every request.

        ``None`` sends an empty body.
        """
        self._call("POST", "/headers", json_body(payload), JSON_CONTENT_TYPE)

    def set_limits(self, options: LimitOptions | None) -> None:
        """Apply bandwidth and latency limits."""
        if options is None:
            raise ConfigurationError("LimitOptions must be supplied")
        self._call("PUT", "/limit", options.to_form_data())

    def whitelist(self, regexp: str, status_code: int) -> None:
        """Answer requests that do not match ``regexp`` with ``status_code``."""
        self._call("PUT", "/whitelist", list_form_data(regexp, status_code))

    def blacklist(self, regexp: str, status_code: int) -> None:
        """Answer requests that match ``regexp`` with ``status_code``."""
        self._call("PUT", "/blacklist", list_form_data(regexp, status_code))

    def remap_host(self, host: str, ip_address: str) -> None:
        """Resolve ``host`` to ``ip_address`` for traffic through this proxy."""
        self._call("POST", "/hosts", host_mapping(host, ip_address), JSON_CONTENT_TYPE)

    def filter_request(self, script: str) -> None:
        """Install a JavaScript request filter."""
        self._call("POST", "/filter/request", script, TEXT_CONTENT_TYPE)

    def close(self) -> None:
        """Shut down the proxy and close the port. Later calls are no-ops."""
        if self._closed:
            return
        try:
            self._call("DELETE")
            logger.info("Closed proxy port %d", self._port)
        finally:
            self.release()

    def release(self) -> None:
        """Close the HTTP connection without shutting down the proxy port.

        The port stays provisioned on the server and can be reattached with
        :meth:`attach`.
        """
        self._closed = True
        self._transport.close()
