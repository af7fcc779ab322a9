"""FastAPI dependencies for service injection."""

from fastapi import Depends

from youtube_subtitles.service_factory import ServiceFactory, get_service_factory as _global_factory
from youtube_subtitles.services import TranscriptService, SubtitleTranslationService
from youtube_subtitles.core import ProxyManager


def get_service_factory() -> ServiceFactory:
    """
    Get service factory instance.

    Returns:
        The process-wide ServiceFactory
    """
    return _global_factory()


def get_transcript_service(
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> TranscriptService:
    """Get the caption fetch service."""
    return service_factory.get_transcript_service()


def get_translation_service(
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> SubtitleTranslationService:
    """Get the batch translation service."""
    return service_factory.get_translation_service()


def get_proxy_manager(
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> ProxyManager:
    """Get the shared proxy manager."""
    return service_factory.get_proxy_manager()
