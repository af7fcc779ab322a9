"""Unit tests for the proxy pool and its manager."""

import asyncio
import json
import time
from contextlib import asynccontextmanager

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils
from unittest.mock import AsyncMock, patch

from youtube_subtitles.core.proxy_manager import (
    ProxyManager,
    ProxyPool,
    clean_proxy_list,
    to_proxy_url,
)

pytestmark = pytest.mark.unit

PROBE_URL = "http://probe.example.test/"


@asynccontextmanager
async def local_http_server(status=200, body="ok", delay=0.0):
    """Serve every request with a fixed response; yields its endpoint and the Host headers seen."""
    hosts = []

    async def handle(request):
        hosts.append(request.host)
        if delay:
            await asyncio.sleep(delay)
        return web.Response(status=status, text=body)

    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", handle)
    server = test_utils.TestServer(app, host="127.0.0.1")
    await server.start_server()
    try:
        yield f"127.0.0.1:{server.port}", hosts
    finally:
        await server.close()


class TestProxyPool:
    """Tests for round-robin selection."""

    def test_next_cycles_in_order(self):
        """Each entry comes back once, in order, then the cycle repeats."""
        # Arrange
        pool = ProxyPool(["a:1", "b:2", "c:3"])

        # Act
        picked = [pool.next() for _ in range(7)]

        # Assert
        assert picked == ["a:1", "b:2", "c:3", "a:1", "b:2", "c:3", "a:1"]

    def test_next_on_empty_pool_returns_none(self):
        pool = ProxyPool()

        assert pool.next() is None
        assert pool.next() is None
        assert len(pool) == 0
        assert not pool

    def test_cursor_stays_in_range(self):
        pool = ProxyPool(["a:1", "b:2"])

        for _ in range(5):
            pool.next()
            assert 0 <= pool.current_index < len(pool)

    def test_replace_resets_cursor(self):
        # Arrange
        pool = ProxyPool(["a:1", "b:2", "c:3"])
        pool.next()
        pool.next()

        # Act
        pool.replace(["x:9", "y:8"])

        # Assert
        assert pool.current_index == 0
        assert pool.entries == ["x:9", "y:8"]
        assert pool.next() == "x:9"


class TestProxyHelpers:
    """Tests for endpoint cleanup and URL building."""

    def test_clean_proxy_list_trims_and_drops_empty(self):
        assert clean_proxy_list([" 1.2.3.4:80 ", "", "   ", "5.6.7.8:3128\r"]) == [
            "1.2.3.4:80",
            "5.6.7.8:3128",
        ]

    @pytest.mark.parametrize("endpoint,expected", [
        ("1.2.3.4:8080", "http://1.2.3.4:8080"),
        ("http://1.2.3.4:8080", "http://1.2.3.4:8080"),
        ("socks5://1.2.3.4:1080", "socks5://1.2.3.4:1080"),
    ])
    def test_to_proxy_url(self, endpoint, expected):
        assert to_proxy_url(endpoint) == expected


class TestProxyManagerRefresh:
    """Tests for pool refresh from the listing service."""

    @pytest.mark.asyncio
    async def test_refresh_replaces_pool_and_persists(self, proxy_manager, proxy_config):
        # Arrange
        listing = "1.1.1.1:80\r\n2.2.2.2:8080\n\n 3.3.3.3:3128 \n"

        # Act
        with patch.object(proxy_manager, "_download_listing", AsyncMock(return_value=listing)):
            replaced = await proxy_manager.refresh()

        # Assert
        assert replaced is True
        assert proxy_manager.pool.entries == ["1.1.1.1:80", "2.2.2.2:8080", "3.3.3.3:3128"]
        with open(proxy_config.cache_file, encoding="utf-8") as f:
            assert json.load(f) == ["1.1.1.1:80", "2.2.2.2:8080", "3.3.3.3:3128"]

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_existing_pool(self, proxy_manager):
        # Arrange
        proxy_manager.set_custom(["9.9.9.9:99"])
        failing = AsyncMock(side_effect=OSError("connection refused"))

        # Act
        with patch.object(proxy_manager, "_download_listing", failing):
            replaced = await proxy_manager.refresh()

        # Assert
        assert replaced is False
        assert proxy_manager.pool.entries == ["9.9.9.9:99"]

    @pytest.mark.asyncio
    async def test_empty_listing_keeps_existing_pool(self, proxy_manager):
        proxy_manager.set_custom(["9.9.9.9:99"])

        with patch.object(proxy_manager, "_download_listing", AsyncMock(return_value="\n  \n")):
            replaced = await proxy_manager.refresh()

        assert replaced is False
        assert proxy_manager.pool.entries == ["9.9.9.9:99"]

    def test_set_custom_replaces_unconditionally(self, proxy_manager):
        proxy_manager.set_custom(["a:1", "b:2"])
        proxy_manager.next()

        assert proxy_manager.set_custom([" c:3 ", ""]) is True
        assert proxy_manager.pool.entries == ["c:3"]
        assert proxy_manager.next() == "c:3"

    def test_set_custom_accepts_empty_list(self, proxy_manager):
        proxy_manager.set_custom(["a:1"])

        assert proxy_manager.set_custom([]) is True
        assert proxy_manager.next() is None


class TestProxyManagerLiveness:
    """Tests for concurrent liveness filtering."""

    @pytest.mark.asyncio
    async def test_filter_live_probes_concurrently(self, proxy_manager):
        # Arrange
        proxy_manager.set_custom([f"10.0.0.{i}:80" for i in range(10)])

        async def slow_probe(endpoint, probe_url=None, timeout=None):
            await asyncio.sleep(0.2)
            return True

        # Act
        started = time.monotonic()
        with patch.object(proxy_manager, "check_liveness", side_effect=slow_probe):
            live = await proxy_manager.filter_live(sample_size=10)
        elapsed = time.monotonic() - started

        # Assert
        assert len(live) == 10
        assert elapsed < 1.0

    @pytest.mark.asyncio
    async def test_filter_live_keeps_responsive_in_order(self, proxy_manager):
        # Arrange
        proxy_manager.set_custom(["a:1", "b:2", "c:3", "d:4"])
        alive = {"a:1": True, "b:2": False, "c:3": True, "d:4": False}

        async def fake_probe(endpoint, probe_url=None, timeout=None):
            return alive[endpoint]

        # Act
        with patch.object(proxy_manager, "check_liveness", side_effect=fake_probe):
            live = await proxy_manager.filter_live()

        # Assert
        assert live == ["a:1", "c:3"]

    @pytest.mark.asyncio
    async def test_filter_live_only_probes_sample(self, proxy_manager):
        # Arrange
        proxy_manager.set_custom([f"10.0.0.{i}:80" for i in range(15)])
        probe = AsyncMock(return_value=True)

        # Act
        with patch.object(proxy_manager, "check_liveness", probe):
            live = await proxy_manager.filter_live(sample_size=10)

        # Assert
        assert probe.await_count == 10
        assert live == [f"10.0.0.{i}:80" for i in range(10)]

    @pytest.mark.asyncio
    async def test_filter_live_empty_pool(self, proxy_manager):
        assert await proxy_manager.filter_live() == []

    @pytest.mark.asyncio
    async def test_check_liveness_unreachable_proxy_is_dead(self, proxy_manager):
        # Nothing listens on port 9 of localhost
        assert await proxy_manager.check_liveness("127.0.0.1:9", timeout=1) is False


class TestLivenessProbe:
    """check_liveness and the listing download against a local HTTP server."""

    @pytest.mark.asyncio
    async def test_success_status_is_alive(self, proxy_manager):
        async with local_http_server(status=200) as (endpoint, hosts):
            alive = await proxy_manager.check_liveness(endpoint, probe_url=PROBE_URL, timeout=2)

        assert alive is True
        assert hosts == ["probe.example.test"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [407, 503])
    async def test_error_status_is_dead(self, proxy_manager, status):
        async with local_http_server(status=status) as (endpoint, hosts):
            alive = await proxy_manager.check_liveness(endpoint, probe_url=PROBE_URL, timeout=2)

        assert alive is False
        assert hosts == ["probe.example.test"]

    @pytest.mark.asyncio
    async def test_slow_response_is_dead(self, proxy_manager):
        async with local_http_server(status=200, delay=1.0) as (endpoint, _):
            alive = await proxy_manager.check_liveness(endpoint, probe_url=PROBE_URL, timeout=0.2)

        assert alive is False

    @pytest.mark.asyncio
    async def test_listing_download_uses_list_timeout(self, proxy_manager, proxy_config):
        # Arrange
        proxy_config.list_timeout = 7
        real_session = aiohttp.ClientSession

        # Act
        async with local_http_server(body="1.1.1.1:80\n2.2.2.2:8080\n") as (endpoint, _):
            proxy_config.list_url = f"http://{endpoint}/list"
            with patch(
                "youtube_subtitles.core.proxy_manager.aiohttp.ClientSession",
                wraps=real_session
            ) as session_cls:
                listing = await proxy_manager._download_listing()

        # Assert
        assert listing == "1.1.1.1:80\n2.2.2.2:8080\n"
        timeout = session_cls.call_args.kwargs["timeout"]
        assert isinstance(timeout, aiohttp.ClientTimeout)
        assert timeout.total == 7


class TestProxyPersistence:
    """Tests for proxies.json persistence."""

    def test_round_trip_through_file(self, proxy_config):
        # Arrange
        writer = ProxyManager(proxy_config=proxy_config)
        writer.set_custom(["a:1", "b:2"])

        # Act
        saved = writer.save_to_file()
        reader = ProxyManager(proxy_config=proxy_config, pool=ProxyPool())
        loaded = reader.load_from_file()

        # Assert
        assert saved is True
        assert loaded is True
        assert reader.pool.entries == ["a:1", "b:2"]

    def test_missing_file_starts_empty(self, proxy_manager):
        assert proxy_manager.load_from_file() is False
        assert len(proxy_manager.pool) == 0

    def test_corrupt_file_starts_empty(self, proxy_manager, proxy_config):
        with open(proxy_config.cache_file, "w", encoding="utf-8") as f:
            f.write("{not json")

        assert proxy_manager.load_from_file() is False
        assert len(proxy_manager.pool) == 0

    def test_unexpected_format_is_ignored(self, proxy_manager, proxy_config):
        with open(proxy_config.cache_file, "w", encoding="utf-8") as f:
            json.dump({"proxies": ["a:1"]}, f)

        assert proxy_manager.load_from_file() is False
        assert len(proxy_manager.pool) == 0
