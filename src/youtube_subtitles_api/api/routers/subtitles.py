"""Subtitle fetch and processing router."""

from typing import Optional
from urllib.parse import unquote
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from youtube_subtitles.core.exceptions import (
    CaptionsDisabledError,
    NoCaptionsFoundError,
    ProxyExhaustedError,
)
from youtube_subtitles.services import TranscriptService, SubtitleTranslationService
from youtube_subtitles.utils.logging import get_logger
from youtube_subtitles.utils.youtube_utils import extract_video_id

from ...api.models.base import ErrorResponse
from ...api.models.subtitles import FetchSubtitlesRequest, FetchSubtitlesResponse
from ...dependencies import get_transcript_service, get_translation_service
from ...exceptions import (
    ValidationError,
    CaptionsDisabledAPIError,
    NotFoundError,
    ServiceUnavailableError,
    InternalServerError,
)
from ...streaming import ProgressStream

router = APIRouter()
logger = get_logger("api.subtitles")

FETCH_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or captions disabled"},
    404: {"model": ErrorResponse, "description": "No transcript found"},
    500: {"model": ErrorResponse, "description": "Transcript fetch failed"},
    503: {"model": ErrorResponse, "description": "No working proxies available"},
}

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post(
    "/fetch-subtitles",
    response_model=FetchSubtitlesResponse,
    responses=FETCH_ERROR_RESPONSES
)
async def fetch_subtitles(
    request: FetchSubtitlesRequest,
    transcript_service: TranscriptService = Depends(get_transcript_service)
):
    """
    Fetch the captions of a YouTube video as SRT text.

    Args:
        request: Fetch request with URL, language and proxy options
        transcript_service: Caption fetch service

    Returns:
        The captions in SRT format

    Raises:
        APIError: mapped from the fetch failure
    """
    if not request.url:
        raise ValidationError("YouTube URL is required")

    video_id = extract_video_id(request.url)
    if not video_id:
        raise ValidationError("Invalid YouTube URL")

    logger.info(f"Fetching subtitles for video_id: {video_id} (proxy: {request.use_proxy})")

    try:
        srt = await transcript_service.get_srt(
            video_id,
            language_code=request.language_code,
            use_proxy=request.use_proxy,
            custom_proxies=request.custom_proxies,
        )
    except CaptionsDisabledError:
        raise CaptionsDisabledAPIError()
    except NoCaptionsFoundError:
        raise NotFoundError("No transcript found for this video")
    except ProxyExhaustedError as e:
        logger.error(f"Proxies exhausted for {video_id} after {e.attempts} attempts")
        raise ServiceUnavailableError("No working proxies available")
    except Exception as e:
        logger.error(f"Error fetching transcript for {video_id}: {str(e)}")
        raise InternalServerError("Failed to fetch transcript")

    return FetchSubtitlesResponse(srt=srt)


@router.get(
    "/process-subtitles",
    responses={400: {"model": ErrorResponse, "description": "Missing or invalid parameters"}}
)
async def process_subtitles(
    request: Request,
    api_key: Optional[str] = Query(default=None, alias="apiKey"),
    srt: Optional[str] = None,
    lang: Optional[str] = None,
    download_only: Optional[str] = Query(default=None, alias="downloadOnly"),
    lines_per_request: Optional[str] = Query(default=None, alias="linesPerRequest"),
    model: Optional[str] = None,
    translation_service: SubtitleTranslationService = Depends(get_translation_service)
):
    """
    Translate SRT text, streaming progress as server-sent events.

    The stream ends with exactly one `complete` or `error` event.
    """
    download_requested = download_only == "true"

    if not api_key:
        raise ValidationError("Gemini API key is required")
    if not srt:
        raise ValidationError("Subtitles content is required")
    if not download_requested and not lang:
        raise ValidationError("Target language is required for translation")
    if not download_requested and not lines_per_request:
        raise ValidationError("Lines per request is required for translation")
    if not model:
        raise ValidationError("Model selection is required")

    srt_text = unquote(srt)
    logger.info(
        f"Processing subtitles (download only: {download_requested}, "
        f"language: {lang}, model: {model}, lines per request: {lines_per_request})"
    )

    events = translation_service.process(
        srt_text,
        target_language=lang,
        api_key=api_key,
        model=model,
        lines_per_request=lines_per_request,
        download_only=download_requested,
    )
    return StreamingResponse(
        ProgressStream(events, request),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
