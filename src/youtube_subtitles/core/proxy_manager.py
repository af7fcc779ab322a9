"""
Proxy pool management for caption fetching.

Free proxy listings are volatile: most entries are dead or already blocked
upstream. The manager therefore combines wholesale list refreshes, liveness
pre-filtering of a small sample and round-robin rotation per attempt.
"""

import asyncio
import json
from pathlib import Path
from typing import Iterable, List, Optional

import aiohttp

from ..utils.logging import get_logger
from .config import config, ProxyConfig

logger = get_logger("proxy_manager")


def clean_proxy_list(entries: Iterable[str]) -> List[str]:
    """Trim entries and drop empty ones."""
    return [entry.strip() for entry in entries if entry and entry.strip()]


def to_proxy_url(endpoint: str) -> str:
    """Return the endpoint as a URL usable by HTTP clients (``http://`` if no scheme)."""
    endpoint = endpoint.strip()
    if "://" in endpoint:
        return endpoint
    return f"http://{endpoint}"


class ProxyPool:
    """Ordered proxy endpoints with a rotating cursor."""

    def __init__(self, entries: Optional[Iterable[str]] = None):
        self._entries: List[str] = list(entries or [])
        self._index = 0

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    @property
    def current_index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def replace(self, entries: Iterable[str]) -> None:
        """Swap in a whole new list and reset the cursor."""
        self._entries = list(entries)
        self._index = 0

    def next(self) -> Optional[str]:
        """Return the entry at the cursor and advance it, or None when empty."""
        if not self._entries:
            return None
        proxy = self._entries[self._index]
        self._index = (self._index + 1) % len(self._entries)
        return proxy


class ProxyManager:
    """Owns the process-wide proxy pool and its lifecycle."""

    def __init__(self, proxy_config: Optional[ProxyConfig] = None, pool: Optional[ProxyPool] = None):
        self.config = proxy_config or config.proxy
        self.pool = pool if pool is not None else ProxyPool()

    def next(self) -> Optional[str]:
        return self.pool.next()

    async def _download_listing(self) -> str:
        """GET the proxy listing as text."""
        timeout = aiohttp.ClientTimeout(total=self.config.list_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.config.list_url) as response:
                response.raise_for_status()
                return await response.text()

    async def refresh(self) -> bool:
        """
        Replace the pool with a freshly fetched listing.

        Returns:
            True if the pool was replaced, False if the fetch failed or came
            back empty (the existing pool is left untouched).
        """
        try:
            listing = await self._download_listing()
        except Exception as e:
            logger.error(f"Error fetching proxies from {self.config.list_url}: {e}")
            return False

        fetched = clean_proxy_list(listing.splitlines())
        if not fetched:
            logger.warning("No proxies fetched from listing service")
            return False

        self.pool.replace(fetched)
        logger.info(f"Fetched {len(fetched)} proxies")
        self.save_to_file()
        return True

    def set_custom(self, proxies: Iterable[str]) -> bool:
        """Replace the pool with a caller-supplied list."""
        cleaned = clean_proxy_list(proxies)
        self.pool.replace(cleaned)
        logger.info(f"Using {len(cleaned)} custom proxies")
        return True

    async def check_liveness(
        self,
        endpoint: str,
        probe_url: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> bool:
        """Issue one request through the proxy; True only on a timely 2xx."""
        probe_url = probe_url or self.config.probe_url
        client_timeout = aiohttp.ClientTimeout(total=timeout or self.config.probe_timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(probe_url, proxy=to_proxy_url(endpoint)) as response:
                    return 200 <= response.status < 300
        except Exception as e:
            logger.debug(f"Proxy {endpoint} failed liveness probe: {e}")
            return False

    async def filter_live(
        self,
        endpoints: Optional[List[str]] = None,
        sample_size: Optional[int] = None
    ) -> List[str]:
        """
        Probe a prefix of the pool concurrently and keep the responsive entries.

        Args:
            endpoints: Candidates to probe (defaults to the current pool)
            sample_size: How many leading candidates to probe

        Returns:
            Responsive endpoints in their original order
        """
        candidates = self.pool.entries if endpoints is None else list(endpoints)
        sample_size = sample_size or self.config.probe_sample_size
        sample = candidates[:sample_size]
        if not sample:
            return []

        results = await asyncio.gather(*(self.check_liveness(proxy) for proxy in sample))
        live = [proxy for proxy, ok in zip(sample, results) if ok]
        logger.info(f"{len(live)} of {len(sample)} sampled proxies responded")
        return live

    def save_to_file(self, path: Optional[str] = None) -> bool:
        """Persist the pool as a JSON list (best effort)."""
        file_path = Path(path or self.config.cache_file)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(json.dumps(self.pool.entries), encoding="utf-8")
            logger.debug(f"Proxies saved to {file_path}")
            return True
        except OSError as e:
            logger.error(f"Error saving proxies to {file_path}: {e}")
            return False

    def load_from_file(self, path: Optional[str] = None) -> bool:
        """Load a previously saved pool; a missing or corrupt file leaves the pool empty."""
        file_path = Path(path or self.config.cache_file)
        if not file_path.exists():
            logger.info(f"{file_path} not found, starting with empty proxy list")
            return False
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Error loading proxies from {file_path}: {e}")
            return False
        if not isinstance(data, list):
            logger.error(f"Unexpected proxy file format in {file_path}")
            return False

        self.pool.replace(clean_proxy_list(str(item) for item in data))
        logger.info(f"Loaded {len(self.pool)} proxies from {file_path}")
        return True

    async def run_periodic_refresh(self, interval: Optional[float] = None) -> None:
        """Refresh the pool forever at a fixed interval; stop by cancelling the task."""
        interval = interval or self.config.refresh_interval
        while True:
            await asyncio.sleep(interval)
            await self.refresh()
