"""HTTP transport for the proxy control API."""

import logging
import time

import httpx

from mobproxy.exceptions import TransportError
from mobproxy.utils.debug import debug_request, debug_response

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "text/json"
TEXT_CONTENT_TYPE = "text/plain"


class ProxyTransport:
    """Blocking HTTP client that turns every failure into ``TransportError``.

    ``timeout=None`` waits indefinitely for the server.
    """

    def __init__(self, timeout: float | None = None):
        self.client = httpx.Client(timeout=timeout)

    def close(self) -> None:
        self.client.close()

    def request(
        self,
        method: str,
        url: str,
        content: str | None = None,
        content_type: str | None = None,
    ) -> httpx.Response:
        """Send one request and return the successful response.

        Without ``content`` the request goes out with an empty body and no
        content type.
        """
        headers: dict[str, str] = {}
        body: bytes | None = None
        if content is not None:
            body = content.encode("utf-8")
            headers["Content-Type"] = content_type or FORM_CONTENT_TYPE

        logger.debug("%s %s", method, url)
        debug_request(method, url, headers.get("Content-Type"), content)
        start = time.perf_counter()
        try:
            response = self.client.request(method, url, content=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{method} {url} failed with status {exc.response.status_code}",
                method=method,
                url=url,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{method} {url} failed: {exc}",
                method=method,
                url=url,
            ) from exc
        debug_response(response.status_code, time.perf_counter() - start, len(response.content))
        return response
