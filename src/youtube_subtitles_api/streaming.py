"""Server-sent event serialization for the subtitle processing pipeline."""

import json
from typing import AsyncIterator, Optional

from fastapi import Request

from youtube_subtitles.core.exceptions import (
    TranslationRateLimitError,
    InvalidApiKeyError,
)
from youtube_subtitles.models import PipelineEvent, ErrorEvent
from youtube_subtitles.utils.logging import get_logger

logger = get_logger("api.streaming")

RATE_LIMIT_MESSAGE = "Gemini API rate limit exceeded. Please try again later."
INVALID_KEY_MESSAGE = "Invalid Gemini API key"
DEFAULT_ERROR_MESSAGE = "Failed to process subtitles"


def format_sse(event: PipelineEvent) -> str:
    """Serialize one event as an SSE data frame."""
    return f"data: {json.dumps(event.to_dict())}\n\n"


def error_message_for(error: Exception) -> str:
    """Client-facing message for a pipeline failure."""
    if isinstance(error, TranslationRateLimitError):
        return RATE_LIMIT_MESSAGE
    if isinstance(error, InvalidApiKeyError):
        return INVALID_KEY_MESSAGE
    return str(error) or DEFAULT_ERROR_MESSAGE


class ProgressStream:
    """
    Turns a pipeline event generator into SSE frames.

    Exactly one terminal frame is written per stream: either the pipeline's
    own complete event or an error event built from the exception that ended
    it. The pipeline is closed when the client goes away or once a terminal
    event has been sent.
    """

    def __init__(self, events: AsyncIterator[PipelineEvent], request: Optional[Request] = None):
        self.events = events
        self.request = request
        self.finished = False

    async def _client_gone(self) -> bool:
        if self.request is None:
            return False
        return await self.request.is_disconnected()

    async def _close_pipeline(self) -> None:
        aclose = getattr(self.events, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aiter__(self) -> AsyncIterator[str]:
        try:
            async for event in self.events:
                if await self._client_gone():
                    logger.info("Client disconnected, stopping subtitle processing")
                    return

                yield format_sse(event)
                if event.terminal:
                    self.finished = True
                    return
        except Exception as e:
            logger.error(f"Error processing subtitles: {str(e)}", exc_info=True)
            self.finished = True
            yield format_sse(ErrorEvent(error=error_message_for(e)))
        finally:
            await self._close_pipeline()

        if not self.finished:
            # Pipeline ended without a terminal event
            self.finished = True
            yield format_sse(ErrorEvent(error=DEFAULT_ERROR_MESSAGE))
