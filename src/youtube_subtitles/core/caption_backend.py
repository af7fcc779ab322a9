"""Caption source backend built on youtube-transcript-api."""

import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from youtube_transcript_api import (
    YouTubeTranscriptApi,
    TranscriptsDisabled,
    NoTranscriptFound,
    VideoUnavailable,
)
from youtube_transcript_api.proxies import GenericProxyConfig

from ..models import Transcript, build_transcript
from ..utils.logging import get_logger
from .config import config
from .exceptions import CaptionsDisabledError, NoCaptionsFoundError, CaptionTransportError
from .proxy_manager import to_proxy_url

logger = get_logger("caption_backend")


@dataclass(frozen=True)
class TransportOptions:
    """Transport settings bound to exactly one fetch attempt."""
    proxy: Optional[str] = None
    user_agent: Optional[str] = None
    timeout: float = 10.0


class CaptionBackend(Protocol):
    """Anything that can fetch a transcript for one video."""

    async def fetch_transcript(
        self,
        video_id: str,
        language_code: Optional[str] = None,
        transport: Optional[TransportOptions] = None
    ) -> Transcript:
        ...


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that applies a default timeout to every request."""

    def __init__(self, *args, timeout: float = 10.0, **kwargs):
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def new_session(transport: TransportOptions) -> requests.Session:
    """Build a session carrying this attempt's user agent and timeout."""
    session = requests.Session()
    adapter = TimeoutHTTPAdapter(timeout=transport.timeout, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({
        "Accept-Language": "en-US,en;q=0.8",
    })
    if transport.user_agent:
        session.headers["User-Agent"] = transport.user_agent
    return session


class YouTubeTranscriptBackend:
    """Fetches captions through youtube-transcript-api, one fresh client per call."""

    def __init__(self, default_duration: Optional[float] = None):
        self.default_duration = default_duration or config.fetch.default_duration

    def _build_api(self, transport: TransportOptions) -> YouTubeTranscriptApi:
        proxy_config = None
        if transport.proxy:
            proxy_url = to_proxy_url(transport.proxy)
            proxy_config = GenericProxyConfig(http_url=proxy_url, https_url=proxy_url)
        return YouTubeTranscriptApi(proxy_config=proxy_config, http_client=new_session(transport))

    def _fetch_sync(self, video_id: str, language_code: Optional[str], transport: TransportOptions) -> Transcript:
        api = self._build_api(transport)
        try:
            if language_code:
                fetched = api.fetch(video_id, languages=[language_code])
            else:
                # No preference: take the first listed track (manual before generated)
                transcript_list = api.list(video_id)
                fetched = next(iter(transcript_list)).fetch()
        except TranscriptsDisabled as e:
            raise CaptionsDisabledError(f"Subtitles are disabled for video {video_id}") from e
        except (NoTranscriptFound, VideoUnavailable, StopIteration) as e:
            raise NoCaptionsFoundError(f"No transcript found for video {video_id}") from e
        except Exception as e:
            raise CaptionTransportError(f"{type(e).__name__}: {e}") from e

        raw = fetched.to_raw_data()
        return build_transcript(raw, default_duration=self.default_duration)

    async def fetch_transcript(
        self,
        video_id: str,
        language_code: Optional[str] = None,
        transport: Optional[TransportOptions] = None
    ) -> Transcript:
        """
        Fetch one transcript.

        The library is synchronous, so the call runs in a worker thread; the
        caller bounds it with its own timeout.
        """
        transport = transport or TransportOptions()
        return await asyncio.to_thread(self._fetch_sync, video_id, language_code, transport)
