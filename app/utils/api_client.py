"""
HTTP client for the France.tv JSON APIs.

Every request carries the same Accept and User-Agent headers. Requests go
through a shared requests.Session; the blocking call runs in a worker thread
so coroutines awaiting a fetch never stall the event loop.

There is no retry logic: one failed fetch fails the calling operation.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from app.utils.user_agent import get_windows_ua

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class FetchError(Exception):
    """Raised when an upstream request fails or does not return JSON."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ProviderAPIClient:
    """
    Provider-specific JSON fetcher.

    Args:
        provider_name: Used as the log prefix
        timeout: Seconds before an outbound request is abandoned
        session: Optional pre-built requests.Session
    """

    def __init__(
        self,
        provider_name: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.provider_name = provider_name
        self.timeout = timeout
        self.session = session or requests.Session()

    def _prepare_headers(self) -> Dict[str, str]:
        return {
            'Accept': 'application/json',
            'User-Agent': get_windows_ua(),
        }

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self.session.get(
                url, params=params, headers=self._prepare_headers(),
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"⏰ [{self.provider_name}] Timeout after {self.timeout}s: {url}")
            raise FetchError(f"Timeout after {self.timeout}s", url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ [{self.provider_name}] Request error {url}: {e}")
            raise FetchError(str(e), url) from e

        if not response.ok:
            logger.error(f"❌ [{self.provider_name}] HTTP {response.status_code} for {response.url}")
            raise FetchError(
                f"HTTP {response.status_code}: {response.reason}",
                url,
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            content_type = response.headers.get('content-type', '')
            logger.error(
                f"❌ [{self.provider_name}] Invalid JSON from {response.url} "
                f"(content-type: {content_type}): {response.text[:200]}"
            )
            raise FetchError("Invalid JSON response", url, status_code=response.status_code) from e

    async def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET url and return the decoded JSON body, raising FetchError on failure."""
        logger.debug(f"🔍 [{self.provider_name}] GET {url} params={params}")
        return await asyncio.to_thread(self._get_json, url, params)

    def close(self) -> None:
        self.session.close()
