"""Core modules for YouTube subtitles."""

from .config import config
from .cache_manager import TranscriptCache
from .caption_backend import CaptionBackend, TransportOptions, YouTubeTranscriptBackend
from .llm_manager import LLMManager, TranslationBackend
from .proxy_manager import ProxyManager, ProxyPool
from .transcript_fetcher import ResilientTranscriptFetcher, FetchResult
from .exceptions import (
    TranscriptError,
    CaptionsDisabledError,
    NoCaptionsFoundError,
    CaptionTransportError,
    TranscriptFetchError,
    ProxyExhaustedError,
    TranslationError,
    TranslationRateLimitError,
    InvalidApiKeyError,
    SubtitleParseError,
)

__all__ = [
    'config',
    'TranscriptCache',
    'CaptionBackend',
    'TransportOptions',
    'YouTubeTranscriptBackend',
    'LLMManager',
    'TranslationBackend',
    'ProxyManager',
    'ProxyPool',
    'ResilientTranscriptFetcher',
    'FetchResult',
    'TranscriptError',
    'CaptionsDisabledError',
    'NoCaptionsFoundError',
    'CaptionTransportError',
    'TranscriptFetchError',
    'ProxyExhaustedError',
    'TranslationError',
    'TranslationRateLimitError',
    'InvalidApiKeyError',
    'SubtitleParseError',
]
