"""lyrlib HTTP service — FastAPI application entry point.

Wires the LRCLIB provider, the shared HTTP client and the orchestrating
:class:`LyricsClient` together at startup, stores the client on
``app.state`` and serves the JSON API defined in :mod:`lyrlib.api.routes`.

Run with::

    python -m lyrlib.main
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from lyrlib import __version__
from lyrlib.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from lyrlib.api.routes import router as api_router
from lyrlib.config.loader import load_config
from lyrlib.config.settings import Settings
from lyrlib.pipeline.factory import build_client
from lyrlib.pipeline.orchestrator import LyricsClient
from lyrlib.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    client: LyricsClient | None = None,
    config_path: str = "config/config.yaml",
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    client:
        A ready-made client to serve.  When omitted, one is built from the
        YAML config and environment at startup and torn down on shutdown.
    config_path:
        YAML file consulted when *client* is omitted.
    """

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        http_client: httpx.AsyncClient | None = None
        if client is None:
            config = load_config(config_path, settings)
            application.state.lyrics_client, http_client = build_client(config)
        else:
            application.state.lyrics_client = client

        _logger.info(
            "app_startup",
            version=__version__,
            environment=settings.app_env,
            provider=application.state.lyrics_client.provider.get_provider_name(),
        )

        yield

        if http_client is not None:
            await http_client.aclose()
            _logger.info("app_shutdown", message="HTTP client closed")

    application = FastAPI(
        title="lyrlib API",
        version=__version__,
        description=(
            "Search LRCLIB for tracks and fetch synced or plain lyrics, "
            "with response caching and client-side rate limiting."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "lyrlib.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
