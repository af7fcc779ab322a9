"""Data models for YouTube subtitles."""

from .subtitle_data import (
    CaptionEvent,
    Transcript,
    SubtitleBlock,
    build_transcript,
    transcript_to_dicts,
    transcript_from_dicts,
)
from .events import ProgressEvent, ErrorEvent, CompleteEvent, PipelineEvent

__all__ = [
    "CaptionEvent",
    "Transcript",
    "SubtitleBlock",
    "build_transcript",
    "transcript_to_dicts",
    "transcript_from_dicts",
    "ProgressEvent",
    "ErrorEvent",
    "CompleteEvent",
    "PipelineEvent",
]
