"""Factory for creating and configuring services."""

from .core import (
    TranscriptCache,
    LLMManager,
    ProxyManager,
    ResilientTranscriptFetcher,
    YouTubeTranscriptBackend,
)
from .services import TranscriptService, SubtitleTranslationService
from .utils.logging import get_logger

logger = get_logger("service_factory")


class ServiceFactory:
    """Factory for creating and managing service dependencies."""

    def __init__(self):
        self._proxy_manager = None
        self._transcript_cache = None
        self._llm_manager = None
        self._fetcher = None
        self._transcript_service = None
        self._translation_service = None

        logger.info("Initialized ServiceFactory")

    def get_proxy_manager(self) -> ProxyManager:
        """Get or create the process-wide proxy manager."""
        if self._proxy_manager is None:
            self._proxy_manager = ProxyManager()
        return self._proxy_manager

    def get_transcript_cache(self) -> TranscriptCache:
        """Get or create transcript cache."""
        if self._transcript_cache is None:
            self._transcript_cache = TranscriptCache()
        return self._transcript_cache

    def get_llm_manager(self) -> LLMManager:
        """Get or create LLM manager."""
        if self._llm_manager is None:
            self._llm_manager = LLMManager()
        return self._llm_manager

    def get_transcript_fetcher(self) -> ResilientTranscriptFetcher:
        """Get or create the resilient transcript fetcher."""
        if self._fetcher is None:
            self._fetcher = ResilientTranscriptFetcher(
                self.get_proxy_manager(),
                backend=YouTubeTranscriptBackend(),
            )
        return self._fetcher

    def get_transcript_service(self) -> TranscriptService:
        """Get or create transcript service."""
        if self._transcript_service is None:
            self._transcript_service = TranscriptService(
                self.get_transcript_fetcher(),
                cache=self.get_transcript_cache(),
            )
        return self._transcript_service

    def get_translation_service(self) -> SubtitleTranslationService:
        """Get or create translation service."""
        if self._translation_service is None:
            self._translation_service = SubtitleTranslationService(self.get_llm_manager())
        return self._translation_service

    def cleanup(self) -> None:
        """Cleanup all services."""
        if self._llm_manager:
            self._llm_manager.clear_cache()
        logger.info("ServiceFactory cleanup completed")


# Global service factory instance
_service_factory = None


def get_service_factory() -> ServiceFactory:
    """Get the global service factory instance."""
    global _service_factory
    if _service_factory is None:
        _service_factory = ServiceFactory()
    return _service_factory


def cleanup_services() -> None:
    """Cleanup all services."""
    global _service_factory
    if _service_factory:
        _service_factory.cleanup()
        _service_factory = None
