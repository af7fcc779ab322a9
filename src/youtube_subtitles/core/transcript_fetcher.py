"""
Resilient YouTube caption fetching.

Each request walks a small state machine:

1. acquire a proxy pool (custom list, or refresh + liveness filter)
2. try every pool entry once, each with its own proxy/user-agent binding
3. fall back to one direct attempt
4. give up with a fatal error for this request only

Permanent upstream errors (captions disabled, no captions) stop the loop
immediately; everything else just consumes an attempt.
"""

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Optional, List, Sequence

from ..models import Transcript
from ..utils.logging import get_logger
from .caption_backend import CaptionBackend, TransportOptions, YouTubeTranscriptBackend
from .config import config
from .exceptions import (
    CaptionsDisabledError,
    NoCaptionsFoundError,
    ProxyExhaustedError,
    TranscriptFetchError,
)
from .proxy_manager import ProxyManager, ProxyPool

logger = get_logger("transcript_fetcher")

UA_POOL = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_3_1) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.4 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36 Edg/124.0.0.0",
]

PERMANENT_ERRORS = (CaptionsDisabledError, NoCaptionsFoundError)


@dataclass
class FetchResult:
    """Transcript plus bookkeeping about how it was obtained."""
    transcript: Transcript
    proxy: Optional[str] = None
    attempt_count: int = 0
    fetch_time_ms: int = 0


class ResilientTranscriptFetcher:
    """Fetches transcripts through rotating proxies with a direct fallback."""

    def __init__(
        self,
        proxy_manager: ProxyManager,
        backend: Optional[CaptionBackend] = None,
        attempt_timeout: Optional[float] = None,
        user_agents: Optional[Sequence[str]] = None,
        check_liveness: Optional[bool] = None
    ):
        self.proxy_manager = proxy_manager
        self.backend = backend or YouTubeTranscriptBackend()
        self.attempt_timeout = attempt_timeout or config.fetch.attempt_timeout
        self.user_agents = list(user_agents or UA_POOL)
        self.check_liveness = config.proxy.check_liveness if check_liveness is None else check_liveness

    async def acquire_pool(self, custom_proxies: Optional[List[str]] = None) -> ProxyPool:
        """
        Get the pool to iterate for one request.

        Custom proxies replace the shared pool and are used as-is. Otherwise
        the shared pool is refreshed and, if enabled, a sampled prefix is
        probed and only responsive entries form a request-local pool.
        """
        if custom_proxies:
            self.proxy_manager.set_custom(custom_proxies)
            return self.proxy_manager.pool

        await self.proxy_manager.refresh()
        if not self.check_liveness:
            return self.proxy_manager.pool

        live = await self.proxy_manager.filter_live()
        return ProxyPool(live)

    async def _attempt(
        self,
        video_id: str,
        language_code: Optional[str],
        proxy: Optional[str]
    ) -> Transcript:
        transport = TransportOptions(
            proxy=proxy,
            user_agent=random.choice(self.user_agents),
            timeout=self.attempt_timeout,
        )
        logger.debug(f"Using User-Agent: {transport.user_agent}")
        return await asyncio.wait_for(
            self.backend.fetch_transcript(video_id, language_code, transport),
            timeout=self.attempt_timeout,
        )

    async def fetch(
        self,
        video_id: str,
        language_code: Optional[str] = None,
        use_proxy: bool = False,
        custom_proxies: Optional[List[str]] = None
    ) -> FetchResult:
        """
        Fetch a transcript for one video.

        Args:
            video_id: YouTube video ID
            language_code: Preferred caption language, None for the default track
            use_proxy: Route attempts through the proxy pool first
            custom_proxies: Caller-supplied proxies replacing the fetched list

        Returns:
            FetchResult with the transcript

        Raises:
            CaptionsDisabledError, NoCaptionsFoundError: permanent upstream errors
            ProxyExhaustedError: proxy mode and every attempt failed
            TranscriptFetchError: direct mode and the attempt failed
        """
        start = time.monotonic()
        attempts = 0

        if use_proxy:
            pool = await self.acquire_pool(custom_proxies)
            if not pool:
                logger.warning("No usable proxies, falling back to a direct request")

            for _ in range(len(pool)):
                proxy = pool.next()
                if proxy is None:
                    break
                attempts += 1
                logger.info(f"Attempt {attempts}/{len(pool)} for {video_id} via proxy {proxy}")
                try:
                    transcript = await self._attempt(video_id, language_code, proxy)
                except PERMANENT_ERRORS:
                    raise
                except asyncio.TimeoutError:
                    logger.warning(f"Proxy {proxy} timed out after {self.attempt_timeout}s")
                    continue
                except Exception as e:
                    logger.warning(f"Proxy {proxy} failed: {e}")
                    continue
                return FetchResult(
                    transcript=transcript,
                    proxy=proxy,
                    attempt_count=attempts,
                    fetch_time_ms=int((time.monotonic() - start) * 1000),
                )

        attempts += 1
        logger.info(f"Direct attempt for {video_id} (attempt {attempts})")
        try:
            transcript = await self._attempt(video_id, language_code, None)
        except PERMANENT_ERRORS:
            raise
        except Exception as e:
            reason = "timed out" if isinstance(e, asyncio.TimeoutError) else str(e)
            logger.error(f"Direct attempt for {video_id} failed: {reason}")
            if use_proxy:
                raise ProxyExhaustedError(
                    f"All proxies and the direct fallback failed after {attempts} attempts",
                    attempts=attempts,
                ) from e
            raise TranscriptFetchError(f"Failed to fetch transcript: {reason}", attempts=attempts) from e

        return FetchResult(
            transcript=transcript,
            attempt_count=attempts,
            fetch_time_ms=int((time.monotonic() - start) * 1000),
        )
