"""Pytest configuration and shared fixtures."""

import os
import sys
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

# Add the source directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

# Set test environment variables before importing the packages
os.environ["ENVIRONMENT"] = "test"
os.environ["API_DEBUG"] = "true"
os.environ["ENABLE_CACHE"] = "false"
os.environ["PROXY_REFRESH_ON_STARTUP"] = "false"
os.environ["PROXY_REFRESH_INTERVAL"] = "0"
os.environ["TRANSLATION_BATCH_DELAY"] = "0"
os.environ["FETCH_PRE_DELAY"] = "0"

from youtube_subtitles.core import ProxyManager, ProxyPool, TranscriptCache
from youtube_subtitles.core.config import ProxyConfig, CacheConfig, TranslationConfig
from youtube_subtitles.core.transcript_fetcher import ResilientTranscriptFetcher
from youtube_subtitles.models import CaptionEvent, Transcript
from youtube_subtitles.services import TranscriptService, SubtitleTranslationService
from youtube_subtitles_api.app import create_app
from youtube_subtitles_api.dependencies import (
    get_transcript_service,
    get_translation_service,
    get_proxy_manager,
)

from mocks.mock_backends import MockCaptionBackend, MockTranslationBackend


SAMPLE_TRANSCRIPT: Transcript = (
    CaptionEvent(offset=0.0, duration=1.5, text="Hello there"),
    CaptionEvent(offset=1.5, duration=2.0, text="General Kenobi"),
)

SAMPLE_SRT = (
    "1\n00:00:00,000 --> 00:00:01,500\nHello there\n"
    "\n"
    "2\n00:00:01,500 --> 00:00:03,500\nGeneral Kenobi\n"
    "\n"
    "3\n00:00:03,500 --> 00:00:05,000\nYou are a bold one\n"
)


@pytest.fixture
def sample_transcript():
    """Two-event transcript."""
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def sample_srt():
    """Three-block SRT text."""
    return SAMPLE_SRT


@pytest.fixture
def proxy_config(tmp_path):
    """Proxy settings writing to a temporary cache file."""
    return ProxyConfig(
        list_url="https://proxies.example.test/list",
        cache_file=str(tmp_path / "proxies.json"),
        check_liveness=False,
        refresh_interval=0,
    )


@pytest.fixture
def proxy_manager(proxy_config):
    """Proxy manager with an empty pool."""
    return ProxyManager(proxy_config=proxy_config, pool=ProxyPool())


@pytest.fixture
def cache_config(tmp_path):
    """Enabled transcript cache in a temporary directory."""
    return CacheConfig(cache_dir=str(tmp_path / "cache"), expiry_days=30, enable_cache=True)


@pytest.fixture
def translation_config():
    """Translation settings with real-looking delays; tests inject a fake sleep."""
    return TranslationConfig(
        max_lines_per_request=50,
        inter_batch_delay=4,
        rate_limit_cooldown=60,
        rate_limit_retries=1,
    )


@pytest.fixture
def fake_sleep():
    """Replacement for asyncio.sleep that records waits."""
    return AsyncMock()


@pytest.fixture
def translation_backend():
    """Translation backend that upper-cases its input."""
    return MockTranslationBackend()


@pytest.fixture
def translation_service(translation_backend, translation_config, fake_sleep):
    """Translation service wired to the fake backend."""
    return SubtitleTranslationService(
        translation_backend,
        translation_config=translation_config,
        sleep=fake_sleep,
    )


@pytest.fixture
def caption_backend(sample_transcript):
    """Caption backend that always succeeds."""
    return MockCaptionBackend([sample_transcript])


@pytest.fixture
def transcript_service(proxy_manager, caption_backend):
    """Transcript service with caching disabled."""
    fetcher = ResilientTranscriptFetcher(
        proxy_manager,
        backend=caption_backend,
        attempt_timeout=1,
        check_liveness=False,
    )
    cache = TranscriptCache(CacheConfig(enable_cache=False))
    return TranscriptService(fetcher, cache=cache, pre_fetch_delay=0)


@pytest.fixture
def app(transcript_service, translation_service, proxy_manager):
    """FastAPI application with services replaced by test doubles."""
    app = create_app()
    app.dependency_overrides[get_transcript_service] = lambda: transcript_service
    app.dependency_overrides[get_translation_service] = lambda: translation_service
    app.dependency_overrides[get_proxy_manager] = lambda: proxy_manager
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)
