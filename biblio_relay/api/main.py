"""
FastAPI relay that forwards browser GETs to HTTPS SPARQL endpoints with CORS headers.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from biblio_relay.api.upstream import open_upstream, stream_body
from biblio_relay.config import RelaySettings, load_settings
from biblio_relay.errors import ClientInputError, RelayError
from biblio_relay.logging_utils import request_logger, setup_logging

SETTINGS = load_settings()
setup_logging(SETTINGS.log_level)

logger = logging.getLogger(__name__)

RELAYED_METHODS = ("GET", "OPTIONS")


def create_app(
    settings: RelaySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the relay application. `transport` replaces the network layer of
    the outbound client (tests pass an httpx.MockTransport).
    """

    relay_settings = settings or SETTINGS

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # No relay-imposed timeout: callers apply their own deadline.
        async with httpx.AsyncClient(transport=transport, timeout=None, follow_redirects=False) as client:
            app.state.http_client = client
            yield
        app.state.http_client = None

    app = FastAPI(
        title="Bibliographic SPARQL Relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = relay_settings

    def cors_headers() -> Dict[str, str]:
        return dict(relay_settings.cors_headers)

    def method_not_allowed() -> PlainTextResponse:
        return PlainTextResponse("Method not allowed", status_code=405, headers=cors_headers())

    @app.exception_handler(RelayError)
    async def relay_error_handler(_: Request, exc: RelayError) -> PlainTextResponse:
        return PlainTextResponse(exc.to_text(), status_code=exc.status_code, headers=cors_headers())

    @app.exception_handler(StarletteHTTPException)
    async def routing_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # Verbs outside RELAYED_METHODS, HEAD included, never reach the route.
        if exc.status_code == 405:
            return method_not_allowed()
        return await http_exception_handler(request, exc)

    @app.api_route("/{path:path}", methods=list(RELAYED_METHODS))
    async def relay(request: Request, path: str) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=cors_headers())

        target_url = request.query_params.get("url")
        if not target_url:
            raise ClientInputError(message="Missing url parameter")

        log = request_logger(uuid.uuid4().hex[:12])
        log.info("Proxying request", target_url=target_url)

        upstream = await open_upstream(request.app.state.http_client, target_url, relay_settings, log)
        headers = cors_headers()
        headers["Content-Type"] = upstream.headers.get("content-type") or relay_settings.default_content_type
        return StreamingResponse(
            stream_body(upstream, log),
            status_code=upstream.status_code,
            headers=headers,
        )

    return app


app = create_app()


def run() -> None:
    logger.info("Bibliographic SPARQL relay running on %s", SETTINGS.public_url)
    logger.info("Usage: %s/?url=<encoded_url>", SETTINGS.public_url)
    logger.info("Press Ctrl+C to stop")
    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port, log_level=SETTINGS.log_level.lower())


if __name__ == "__main__":
    run()
