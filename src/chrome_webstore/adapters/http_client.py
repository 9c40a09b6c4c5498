"""httpx wrapper.

Standardizes timeouts, headers and proxies for every call to the store, and
implements the core `Transport` contract on top of `httpx.AsyncClient`.
Tests swap the network out by passing an `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.options import RequestOptions
from chrome_webstore.core.errors import NetworkError
from chrome_webstore.core.interfaces.transport import RawResponse, Transport
from chrome_webstore.core.services.request_builder import StoreRequest

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    options: RequestOptions | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the client defaults.

    Precedence: settings, then `extra_headers`, then per-call `options`.
    """

    settings = settings or AppSettings()
    options = options or RequestOptions()

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    headers.update(options.headers)

    timeout = options.timeout or settings.http_timeout_seconds
    proxy = options.proxy or settings.proxy_url
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers=headers,
        proxy=proxy,
        transport=transport,
    )


class HttpxTransport(Transport):
    """Sends one request per `AsyncClient`; nothing is pooled across calls."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def send(self, request: StoreRequest) -> RawResponse:
        try:
            async with build_async_client(
                self._settings,
                options=request.options,
                extra_headers=request.headers,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    request.method,
                    request.url,
                    params=request.params or None,
                    data=request.data,
                )
        except httpx.HTTPError as exc:
            logger.warning("%s request to %s failed: %s", request.resource, request.url, exc)
            raise NetworkError(f"{request.resource} request failed: {exc}") from exc

        return RawResponse(
            status_code=response.status_code,
            text=response.text,
            url=str(response.url),
        )
