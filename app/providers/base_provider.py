"""
Base provider class with common functionality.
All providers should inherit from this class.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Awaitable, List, Optional

from app.schemas.type_defs import ResolvedStream, Video
from app.utils.api_client import ProviderAPIClient
from app.utils.cache import TTLCache

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """
    Abstract base class for content providers.

    Provides common functionality:
    - A JSON API client with fixed headers
    - A TTL cache for catalog-shaped queries
    - First-seen deduplication of videos
    """

    # Subclasses should override these
    provider_name: str = "base"
    display_name: str = "Base"
    id_prefix: str = ""

    def __init__(
        self,
        api_client: Optional[ProviderAPIClient] = None,
        cache: Optional[TTLCache] = None
    ):
        """
        Args:
            api_client: Client used for every upstream request
            cache: Cache for listings; a private one is created when omitted
        """
        self.api_client = api_client or ProviderAPIClient(provider_name=self.provider_name)
        self.cache = cache if cache is not None else TTLCache()

    @property
    def log_prefix(self) -> str:
        return f"[{self.display_name}]"

    async def _cached(self, key: str, producer: Callable[[], Awaitable[Any]]) -> Any:
        return await self.cache.get_or_compute(key, producer)

    @staticmethod
    def _dedupe(videos: List[Video]) -> List[Video]:
        """Drop videos whose id was already seen, keeping first-seen order."""
        seen = set()
        unique = []
        for video in videos:
            if video.id not in seen:
                seen.add(video.id)
                unique.append(video)
        return unique

    @abstractmethod
    async def get_channel_content(self, channel_id: str) -> List[Video]:
        """Get the videos of a channel"""

    @abstractmethod
    async def search(self, query: str) -> List[Video]:
        """Search videos"""

    @abstractmethod
    async def get_video_info(self, video_id: str) -> Optional[ResolvedStream]:
        """Get playback information for a video"""

    async def get_live_stream(self, channel_id: str) -> Optional[ResolvedStream]:
        """
        Get the live stream of a channel.
        Override in subclasses that support live channels.
        """
        return None

    def close(self) -> None:
        self.api_client.close()
