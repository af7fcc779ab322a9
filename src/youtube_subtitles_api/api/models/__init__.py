"""API models package."""

from .base import ErrorResponse, HealthResponse
from .subtitles import FetchSubtitlesRequest, FetchSubtitlesResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "FetchSubtitlesRequest",
    "FetchSubtitlesResponse",
]
