"""Best-effort on-disk cache of fetched transcripts."""

import json
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from ..models import Transcript, transcript_to_dicts, transcript_from_dicts
from ..utils.logging import get_logger
from .config import config, CacheConfig

logger = get_logger("cache_manager")

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class TranscriptCache:
    """
    JSON file cache keyed by video ID.

    Reads and writes never raise: a missing, expired or corrupt entry is a
    cache miss and a failed write is only logged.
    """

    def __init__(self, cache_config: Optional[CacheConfig] = None):
        self.config = cache_config or config.cache

    @property
    def enabled(self) -> bool:
        return self.config.enable_cache

    def _get_cache_key(self, video_id: str, language_code: Optional[str] = None) -> str:
        key = video_id if not language_code else f"{video_id}.{language_code}"
        return _SAFE_KEY.sub("_", key)

    def _get_cache_path(self, key: str) -> Path:
        return Path(self.config.cache_dir, f"{key}.json")

    def _is_cache_valid(self, cache_path: Path) -> bool:
        """Check if cache file is still valid."""
        if not cache_path.exists():
            return False
        if self.config.expiry_days <= 0:
            return True
        file_time = datetime.fromtimestamp(cache_path.stat().st_mtime)
        expiry_time = datetime.now() - timedelta(days=self.config.expiry_days)
        return file_time > expiry_time

    def get(self, video_id: str, language_code: Optional[str] = None) -> Optional[Transcript]:
        """Return the cached transcript or None."""
        if not self.enabled:
            return None
        cache_path = self._get_cache_path(self._get_cache_key(video_id, language_code))

        try:
            if not self._is_cache_valid(cache_path):
                return None
            with open(cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            transcript = transcript_from_dicts(data)
        except Exception as e:
            logger.warning(f"Error reading cache {cache_path}: {e}")
            return None

        if not transcript:
            return None
        logger.debug(f"Cache hit for {video_id}")
        return transcript

    def put(self, video_id: str, transcript: Transcript, language_code: Optional[str] = None) -> bool:
        """Store a transcript; returns False if the write failed."""
        if not self.enabled:
            return False
        cache_path = self._get_cache_path(self._get_cache_key(video_id, language_code))

        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            with open(cache_path, 'w', encoding='utf-8') as f:
                json.dump(transcript_to_dicts(transcript), f, ensure_ascii=False)
            logger.debug(f"Cached transcript for {video_id}")
            return True
        except Exception as e:
            logger.error(f"Error writing cache {cache_path}: {e}")
            return False

