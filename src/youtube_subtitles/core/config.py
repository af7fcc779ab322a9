"""
Configuration system for the YouTube subtitles service.
All tunable values are centralized here and can be overridden via environment variables.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path('.env')
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

DEFAULT_PROXY_LIST_URL = (
    "https://api.proxyscrape.com/v2/?request=displayproxies&protocol=http"
    "&timeout=10000&country=all&ssl=all&anonymity=all"
)

# =============================================================================
# LOGGING
# =============================================================================

@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(default_factory=lambda: os.getenv('LOG_LEVEL', 'INFO'))
    format: str = field(default_factory=lambda: os.getenv('LOG_FORMAT', '%(asctime)s [%(name)s] %(levelname)s: %(message)s'))
    date_format: str = field(default_factory=lambda: os.getenv('LOG_DATE_FORMAT', '%Y-%m-%d %H:%M:%S'))

# =============================================================================
# PROXY CONFIGURATION
# =============================================================================

@dataclass
class ProxyConfig:
    """Proxy listing, liveness probing and persistence settings."""
    list_url: str = field(default_factory=lambda: os.getenv('PROXY_LIST_URL', DEFAULT_PROXY_LIST_URL))
    list_timeout: float = field(default_factory=lambda: float(os.getenv('PROXY_LIST_TIMEOUT', '10')))

    # Liveness probing
    probe_url: str = field(default_factory=lambda: os.getenv('PROXY_PROBE_URL', 'https://www.youtube.com/'))
    probe_timeout: float = field(default_factory=lambda: float(os.getenv('PROXY_PROBE_TIMEOUT', '5')))
    probe_sample_size: int = field(default_factory=lambda: int(os.getenv('PROXY_PROBE_SAMPLE_SIZE', '10')))
    check_liveness: bool = field(default_factory=lambda: os.getenv('PROXY_CHECK_LIVENESS', 'true').lower() == 'true')

    # Persistence and background refresh
    cache_file: str = field(default_factory=lambda: os.getenv('PROXY_CACHE_FILE', 'proxies.json'))
    refresh_interval: float = field(default_factory=lambda: float(os.getenv('PROXY_REFRESH_INTERVAL', '3600')))
    refresh_on_startup: bool = field(default_factory=lambda: os.getenv('PROXY_REFRESH_ON_STARTUP', 'true').lower() == 'true')

# =============================================================================
# CAPTION FETCH CONFIGURATION
# =============================================================================

@dataclass
class FetchConfig:
    """Caption fetch retry settings."""
    attempt_timeout: float = field(default_factory=lambda: float(os.getenv('FETCH_ATTEMPT_TIMEOUT', '10')))
    # Optional throttle before hitting YouTube on a cache miss
    pre_fetch_delay: float = field(default_factory=lambda: float(os.getenv('FETCH_PRE_DELAY', '0')))
    default_duration: float = field(default_factory=lambda: float(os.getenv('CAPTION_DEFAULT_DURATION', '5.0')))

# =============================================================================
# TRANSLATION CONFIGURATION
# =============================================================================

@dataclass
class TranslationConfig:
    """Batch translation settings."""
    max_lines_per_request: int = field(default_factory=lambda: int(os.getenv('TRANSLATION_MAX_LINES_PER_REQUEST', '50')))
    inter_batch_delay: float = field(default_factory=lambda: float(os.getenv('TRANSLATION_BATCH_DELAY', '4')))
    rate_limit_cooldown: float = field(default_factory=lambda: float(os.getenv('TRANSLATION_RATE_LIMIT_COOLDOWN', '60')))
    rate_limit_retries: int = field(default_factory=lambda: int(os.getenv('TRANSLATION_RATE_LIMIT_RETRIES', '1')))

    # Backend settings
    temperature: float = field(default_factory=lambda: float(os.getenv('TRANSLATION_TEMPERATURE', '0.3')))
    timeout: int = field(default_factory=lambda: int(os.getenv('TRANSLATION_TIMEOUT', '120')))
    # Retries inside the client library; the pipeline owns the real retry budget
    backend_max_retries: int = field(default_factory=lambda: int(os.getenv('TRANSLATION_BACKEND_MAX_RETRIES', '1')))

# =============================================================================
# CACHE CONFIGURATION
# =============================================================================

@dataclass
class CacheConfig:
    """Transcript cache settings."""
    cache_dir: str = field(default_factory=lambda: os.getenv('CACHE_DIR', 'cache'))
    expiry_days: int = field(default_factory=lambda: int(os.getenv('CACHE_EXPIRY_DAYS', '30')))
    enable_cache: bool = field(default_factory=lambda: os.getenv('ENABLE_CACHE', 'true').lower() == 'true')

# =============================================================================
# MAIN CONFIGURATION CLASS
# =============================================================================

@dataclass
class Config:
    """Main configuration class that aggregates all configuration sections."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

# Create global configuration instance
config = Config()


def setup_logging():
    """Configure root logging for third-party libraries."""
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
        datefmt=config.logging.date_format
    )


def get_config_summary() -> Dict[str, Any]:
    """Return a loggable summary of the active configuration (no secrets)."""
    return {
        "proxy_list_url": config.proxy.list_url,
        "proxy_check_liveness": config.proxy.check_liveness,
        "proxy_refresh_interval": config.proxy.refresh_interval,
        "fetch_attempt_timeout": config.fetch.attempt_timeout,
        "translation_batch_delay": config.translation.inter_batch_delay,
        "translation_rate_limit_cooldown": config.translation.rate_limit_cooldown,
        "cache_enabled": config.cache.enable_cache,
        "cache_dir": config.cache.cache_dir,
    }
