"""Service layer for YouTube subtitles."""

from .transcript_service import TranscriptService
from .translation_service import SubtitleTranslationService, clamp_lines_per_request

__all__ = [
    'TranscriptService',
    'SubtitleTranslationService',
    'clamp_lines_per_request',
]
