"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_relay
from auth import ApiKeyGate
from core.config import Config
from core.protocols import RelayLogger
from services.relay_service import RelayService
from services.upstream import UpstreamClient

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    config: Config,
    logger: RelayLogger,
    client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    `client` replaces the default outbound HTTP client (tests pass one with a
    mock transport); the app closes it on shutdown either way.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http_client = client or httpx.AsyncClient(
            limits=httpx.Limits(
                max_connections=config.upstream.max_connections,
                max_keepalive_connections=config.upstream.max_keepalive_connections,
            ),
        )
        upstream = UpstreamClient(
            http_client,
            fetch_timeout=config.upstream.fetch_timeout,
            forward_timeout=config.upstream.forward_timeout,
        )
        app.state.api_key_gate = ApiKeyGate(config.auth.api_key)
        app.state.relay_service = RelayService(upstream, logger)
        try:
            yield
        finally:
            await http_client.aclose()

    app = FastAPI(title="File Relay", version="0.1.0", lifespan=lifespan)

    @app.api_route("/{path:path}", methods=ALL_METHODS)
    async def relay(request: Request):
        return await handle_relay(request, config, logger)

    return app
