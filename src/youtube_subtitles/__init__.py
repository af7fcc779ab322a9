"""
YouTube Subtitles Package

Fetches YouTube caption tracks through a rotating proxy pool, converts them
to SRT and translates them in batches with Gemini.
"""

__version__ = "0.1.0"

from .utils.logging import get_logger
from .service_factory import ServiceFactory, get_service_factory

__all__ = [
    'get_logger',
    'ServiceFactory',
    'get_service_factory',
]
