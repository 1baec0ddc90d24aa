"""
Runtime configuration read from environment variables.
run_server.py loads a .env file first when one exists.
"""

import os
import tempfile
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from app.utils.cache import CACHE_TTL_SECONDS
from app.utils.api_client import DEFAULT_TIMEOUT


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    addon_url: str
    log_level: str
    log_to_file: bool
    log_file: str
    cache_ttl_seconds: float
    cache_max_entries: Optional[int]
    fetch_timeout: float


def load_settings() -> Settings:
    port = int(os.getenv("PORT", "7000"))
    max_entries = int(os.getenv("CACHE_MAX_ENTRIES", "0"))
    return Settings(
        host=os.getenv("HOST", "127.0.0.1"),
        port=port,
        addon_url=os.getenv("ADDON_URL", f"http://localhost:{port}"),
        log_level=os.getenv("LOG_LEVEL", "info").upper(),
        log_to_file=_env_flag("LOG_TO_FILE"),
        log_file=os.getenv("LOG_FILE", os.path.join(tempfile.gettempdir(), "francetv_addon.log")),
        cache_ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", str(CACHE_TTL_SECONDS))),
        # 0 keeps the cache unbounded
        cache_max_entries=max_entries or None,
        fetch_timeout=float(os.getenv("FETCH_TIMEOUT", str(DEFAULT_TIMEOUT))),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
