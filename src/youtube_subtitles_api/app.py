"""Main FastAPI application factory."""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from youtube_subtitles.core.config import config as service_config, get_config_summary, setup_logging
from youtube_subtitles.service_factory import get_service_factory, cleanup_services
from youtube_subtitles.utils.logging import get_logger

from .config import get_api_config
from .middleware import setup_middleware
from .exceptions import APIError


logger = get_logger("api.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Loads the saved proxy list, optionally refreshes it, and keeps it fresh
    in a background task until shutdown.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info("Starting YouTube Subtitles API...")
    config = get_api_config()
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Debug mode: {config.debug}")
    logger.info(f"Service settings: {get_config_summary()}")

    proxy_manager = get_service_factory().get_proxy_manager()
    proxy_manager.load_from_file()
    if service_config.proxy.refresh_on_startup:
        await proxy_manager.refresh()

    refresh_task = None
    if service_config.proxy.refresh_interval > 0:
        refresh_task = asyncio.create_task(proxy_manager.run_periodic_refresh())

    yield

    # Shutdown
    logger.info("Shutting down YouTube Subtitles API...")
    if refresh_task is not None:
        refresh_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await refresh_task
    cleanup_services()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    config = get_api_config()

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=config.version,
        debug=config.debug,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None
    )

    setup_middleware(app)

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle API errors."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are client errors."""
        logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "code": "VALIDATION_ERROR"}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Last resort: keep the process alive and report a generic failure."""
        logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": "INTERNAL_ERROR"}
        )

    from .api.routers import subtitles, health

    app.include_router(subtitles.router, tags=["Subtitles"])
    app.include_router(health.router, tags=["Health"])

    logger.info("FastAPI application created successfully")
    return app


# Create app instance
app = create_app()


def main():
    """Run the API with uvicorn."""
    import uvicorn

    setup_logging()
    config = get_api_config()
    uvicorn.run(
        "youtube_subtitles_api.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
