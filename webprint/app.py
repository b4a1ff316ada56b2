"""
Application factory - builds FastAPI app with all middleware and routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from webprint import __version__
from webprint.config import Settings, get_settings

# Import routers
from webprint.modules.health.router import router as health_router
from webprint.modules.render.router import router as render_router
from webprint.shared.errors import WebPrintError
from webprint.shared.ids import generate_request_id
from webprint.shared.logging import (
    clear_request_context,
    get_logger,
    get_request_context,
    set_request_context,
    setup_logging,
)
from webprint.shared.types import RequestContext

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()

    setup_logging(settings.log_level)
    logger.info("WebPrint started")

    yield

    logger.info("WebPrint stopped")


def build_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="WebPrint",
        description="Print web content to paginated PDF",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request context middleware
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
            work_item_id=request.headers.get("X-Work-Item-ID"),
            context_id=request.headers.get("X-Context-ID"),
            actor=request.headers.get("X-Actor", "system"),
        )
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    # Exception handler for WebPrintError
    @app.exception_handler(WebPrintError)
    async def webprint_error_handler(
        request: Request, exc: WebPrintError
    ) -> JSONResponse:
        """Handle WebPrintError with consistent JSON response."""
        ctx = get_request_context()

        return JSONResponse(
            status_code=exc.http_status,
            content={
                "error": exc.to_dict(),
                "request_id": ctx.request_id if ctx else None,
            },
        )

    # Register routers
    app.include_router(health_router, tags=["health"])
    app.include_router(render_router)

    # Root endpoint
    @app.get("/")
    async def root() -> dict[str, str]:
        return {"service": "WebPrint", "version": __version__}

    return app
