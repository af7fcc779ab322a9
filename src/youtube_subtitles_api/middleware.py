"""Middleware for the FastAPI application."""

import time
import uuid
from fastapi import Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from youtube_subtitles.utils.logging import get_logger

from .config import get_api_config


logger = get_logger("api.middleware")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process request and log details.

        Args:
            request: FastAPI request object
            call_next: Next middleware/endpoint

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        # Query strings carry API keys and whole subtitle files; log the path only
        logger.info(
            f"Request started - ID: {request_id}, "
            f"Method: {request.method}, "
            f"Path: {request.url.path}, "
            f"Client IP: {client_ip}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed - ID: {request_id}, "
                f"Error: {str(e)}, "
                f"Duration: {process_time:.3f}s"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"Request completed - ID: {request_id}, "
            f"Status: {response.status_code}, "
            f"Duration: {process_time:.3f}s"
        )
        response.headers["X-Request-ID"] = request_id
        return response


def setup_cors_middleware(app) -> None:
    """
    Setup CORS middleware for the application.

    Args:
        app: FastAPI application instance
    """
    config = get_api_config()
    if not config.cors_origins:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"]
    )


def setup_middleware(app) -> None:
    """
    Setup all middleware for the application.

    Args:
        app: FastAPI application instance
    """
    # Last added runs first
    app.add_middleware(RequestLoggingMiddleware)
    setup_cors_middleware(app)

    logger.info("Middleware setup completed")
