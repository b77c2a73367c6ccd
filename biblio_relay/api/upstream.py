"""
Outbound leg of the relay: one HTTPS GET per inbound request, body streamed back as it arrives.
"""

from __future__ import annotations

from typing import AsyncIterator

import httpx

from biblio_relay.config import RelaySettings
from biblio_relay.errors import UpstreamTransportError
from biblio_relay.logging_utils import RequestLogAdapter


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


async def open_upstream(
    client: httpx.AsyncClient,
    target_url: str,
    settings: RelaySettings,
    logger: RequestLogAdapter,
) -> httpx.Response:
    """
    Send the GET and return as soon as the status line and headers are in.
    The caller owns the returned response and must close it.
    """

    try:
        request = client.build_request("GET", target_url, headers=settings.outbound_headers())
    except httpx.InvalidURL as exc:
        logger.error("Proxy error", error=_error_message(exc))
        raise UpstreamTransportError(message=_error_message(exc)) from exc

    if request.url.scheme != "https":
        message = f'Protocol "{request.url.scheme}:" not supported. Expected "https:"'
        logger.error("Proxy error", error=message)
        raise UpstreamTransportError(message=message)

    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as exc:
        logger.error("Proxy error", error=_error_message(exc))
        raise UpstreamTransportError(message=_error_message(exc)) from exc

    logger.info("Upstream responded", status_code=response.status_code)
    return response


async def stream_body(response: httpx.Response, logger: RequestLogAdapter) -> AsyncIterator[bytes]:
    """
    Yield the upstream body chunk by chunk. The upstream response is closed
    when the body ends, fails, or the inbound client goes away.
    """

    # httpx adds its default Accept-Encoding and aiter_bytes undoes any gzip or
    # deflate, so the client gets the decoded payload without Content-Encoding.
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    except httpx.HTTPError as exc:
        # Headers are already sent; dropping the connection is the only signal left.
        logger.error("Upstream stream interrupted", error=_error_message(exc))
        raise
    finally:
        await response.aclose()


__all__ = ["open_upstream", "stream_body"]
