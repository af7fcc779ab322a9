"""Custom exceptions for the HTTP API."""

from typing import Any, Dict


class APIError(Exception):
    """Base API exception class."""

    def __init__(
        self,
        detail: str,
        status_code: int = 500,
        error_code: str = "API_ERROR"
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)

    def to_dict(self) -> Dict[str, Any]:
        """Body returned to the client."""
        return {"error": self.detail, "code": self.error_code}


class ValidationError(APIError):
    """Invalid or missing request input."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=400,
            error_code="VALIDATION_ERROR"
        )


class CaptionsDisabledAPIError(APIError):
    """Captions are disabled for the requested video."""

    def __init__(self, detail: str = "Subtitles are disabled for this video."):
        super().__init__(
            detail=detail,
            status_code=400,
            error_code="CAPTIONS_DISABLED"
        )


class NotFoundError(APIError):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            detail=detail,
            status_code=404,
            error_code="NOT_FOUND"
        )


class ServiceUnavailableError(APIError):
    """Service unavailable exception."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(
            detail=detail,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE"
        )


class InternalServerError(APIError):
    """Internal server error exception."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            detail=detail,
            status_code=500,
            error_code="INTERNAL_ERROR"
        )
