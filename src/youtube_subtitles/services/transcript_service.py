"""Service for fetching YouTube captions as SRT text."""

import asyncio
from typing import List, Optional

from ..core.cache_manager import TranscriptCache
from ..core.config import config
from ..core.transcript_fetcher import ResilientTranscriptFetcher
from ..models import Transcript
from ..utils.logging import get_logger
from ..utils.subtitle_utils import transcript_to_srt

logger = get_logger("transcript_service")


class TranscriptService:
    """Cache-first caption retrieval producing SRT text."""

    def __init__(
        self,
        fetcher: ResilientTranscriptFetcher,
        cache: Optional[TranscriptCache] = None,
        pre_fetch_delay: Optional[float] = None
    ):
        self.fetcher = fetcher
        self.cache = cache or TranscriptCache()
        self.pre_fetch_delay = config.fetch.pre_fetch_delay if pre_fetch_delay is None else pre_fetch_delay
        logger.info("Initialized TranscriptService")

    async def get_transcript(
        self,
        video_id: str,
        language_code: Optional[str] = None,
        use_proxy: bool = False,
        custom_proxies: Optional[List[str]] = None
    ) -> Transcript:
        """
        Get a transcript from cache or fetch it.

        Fetch errors propagate unchanged; cache failures never do.
        """
        cached = self.cache.get(video_id, language_code)
        if cached:
            logger.info(f"Using cached transcript for {video_id}")
            return cached

        if self.pre_fetch_delay > 0:
            logger.info(f"Waiting {self.pre_fetch_delay:g} seconds before fetching transcript")
            await asyncio.sleep(self.pre_fetch_delay)

        result = await self.fetcher.fetch(
            video_id,
            language_code=language_code,
            use_proxy=use_proxy,
            custom_proxies=custom_proxies,
        )
        logger.info(
            f"Fetched {len(result.transcript)} caption events for {video_id} "
            f"in {result.attempt_count} attempt(s), {result.fetch_time_ms} ms"
        )
        self.cache.put(video_id, result.transcript, language_code)
        return result.transcript

    async def get_srt(
        self,
        video_id: str,
        language_code: Optional[str] = None,
        use_proxy: bool = False,
        custom_proxies: Optional[List[str]] = None
    ) -> str:
        """Get the captions of a video as SRT text."""
        transcript = await self.get_transcript(
            video_id,
            language_code=language_code,
            use_proxy=use_proxy,
            custom_proxies=custom_proxies,
        )
        return transcript_to_srt(transcript)
