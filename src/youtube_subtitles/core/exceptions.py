"""Domain exceptions for caption fetching and subtitle translation."""


class TranscriptError(Exception):
    """Base class for transcript-related errors."""
    pass


class CaptionsDisabledError(TranscriptError):
    """Captions are disabled for the video. Permanent, never retried."""
    pass


class NoCaptionsFoundError(TranscriptError):
    """No caption track exists for the video or language. Permanent, never retried."""
    pass


class CaptionTransportError(TranscriptError):
    """Network error, timeout, block or non-2xx response. Retried on the next proxy."""
    pass


class TranscriptFetchError(TranscriptError):
    """Every attempt for a request failed."""

    def __init__(self, message: str, attempts: int = 0):
        self.attempts = attempts
        super().__init__(message)


class ProxyExhaustedError(TranscriptFetchError):
    """All proxied attempts and the direct fallback failed."""
    pass


class TranslationError(Exception):
    """Base class for translation backend and pipeline errors."""
    pass


class TranslationRateLimitError(TranslationError):
    """The translation backend is throttling requests (HTTP 429)."""
    pass


class InvalidApiKeyError(TranslationError):
    """The translation backend rejected the API key."""
    pass


class SubtitleParseError(TranslationError):
    """The subtitle text contained no recognizable blocks."""
    pass
