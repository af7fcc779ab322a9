"""Utility functions for YouTube subtitles."""

from .logging import get_logger
from .youtube_utils import extract_video_id
from .subtitle_utils import (
    format_srt_time,
    transcript_to_srt,
    parse_srt_blocks,
    assemble_srt,
)

__all__ = [
    'get_logger',
    'extract_video_id',
    'format_srt_time',
    'transcript_to_srt',
    'parse_srt_blocks',
    'assemble_srt',
]
