"""YouTube utility functions."""

import re
from typing import Optional

_VIDEO_ID_PATTERN = re.compile(
    r'(?:youtu\.be/|youtube\.com/(?:embed/|v/|shorts/|watch\?v=|watch\?.+&v=))([^"&?/\s]{11})'
)


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the 11-character video ID from a YouTube URL.

    Args:
        url: YouTube URL

    Returns:
        Video ID if found, None otherwise
    """
    if not url or not isinstance(url, str):
        return None

    match = _VIDEO_ID_PATTERN.search(url.strip())
    return match.group(1) if match else None
