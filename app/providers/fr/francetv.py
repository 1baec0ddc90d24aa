"""
France TV provider implementation
Catalog, program, search, rugby and live lookups against the mobile API
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from app.providers.base_provider import BaseProvider
from app.providers.fr.francetv_normalizer import normalize_program, normalize_video
from app.providers.fr.francetv_stream import FranceTVStreamResolver
from app.schemas.type_defs import Program, ResolvedStream, Video
from app.utils.api_client import FetchError, ProviderAPIClient
from app.utils.cache import TTLCache

logger = logging.getLogger(__name__)

API_MOBILE_URL = "https://api-mobile.yatta.francetv.fr"
PLATFORM_PARAMS = {'platform': 'apps'}

SEARCH_VIDEOS_LABEL = "Vidéos"

RUGBY_KEYWORDS = (
    'rugby', ' xv', 'top 14', 'six nations', 'champions cup', 'challenge cup',
    'pro d2', 'crunch', 'all blacks', 'springboks', 'wallabies',
)

POPULAR_QUERIES = ('papotin', 'quotidien', 'grande librairie', 'on est en direct', "c dans l'air")
POPULAR_PER_QUERY = 10


def _collections(data: Any) -> List[Dict]:
    if not isinstance(data, dict):
        return []
    return [c for c in data.get('collections') or [] if isinstance(c, dict)]


def _is_rugby(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    title = (item.get('title') or item.get('label') or '').lower()
    description = (item.get('description') or '').lower()
    return any(kw in title or kw in description for kw in RUGBY_KEYWORDS)


class FranceTVProvider(BaseProvider):
    """France TV provider: listings are cached, streams and live lookups are not"""

    provider_name = "francetv"
    display_name = "FranceTV"
    id_prefix = "francetv:"

    def __init__(
        self,
        api_client: Optional[ProviderAPIClient] = None,
        cache: Optional[TTLCache] = None
    ):
        super().__init__(api_client, cache)
        self.api_mobile = API_MOBILE_URL
        self.stream_resolver = FranceTVStreamResolver(self.api_client)

    def _normalize_videos(self, items: Iterable[Any]) -> List[Video]:
        items = list(items)
        videos = [v for v in (normalize_video(item) for item in items) if v is not None]
        dropped = len(items) - len(videos)
        if dropped:
            logger.debug(f"{self.log_prefix} Dropped {dropped} items without si_id")
        return videos

    async def _fetch_channel(self, channel_id: str) -> Any:
        return await self.api_client.fetch(
            f"{self.api_mobile}/apps/channels/{channel_id}", params=PLATFORM_PARAMS
        )

    async def get_channel_content(self, channel_id: str) -> List[Video]:
        """All videos of a channel, across every collection, deduplicated"""
        async def produce() -> List[Video]:
            logger.info(f"{self.log_prefix} Fetching content for {channel_id}...")
            data = await self._fetch_channel(channel_id)

            items = [item for c in _collections(data) for item in c.get('items') or []]
            videos = self._dedupe(self._normalize_videos(items))

            logger.info(f"{self.log_prefix} {len(videos)} videos found for {channel_id}")
            return videos

        return await self._cached(f"channel_{channel_id}", produce)

    async def get_channel_programs(self, channel_id: str) -> List[Program]:
        """Programs of a channel (the regions endpoint serves all channels)"""
        async def produce() -> List[Program]:
            logger.info(f"{self.log_prefix} Fetching programs for {channel_id}...")
            data = await self.api_client.fetch(
                f"{self.api_mobile}/apps/regions/{channel_id}/programs", params=PLATFORM_PARAMS
            )

            items = (data.get('items') or []) if isinstance(data, dict) else []
            programs = [p for p in (normalize_program(item) for item in items) if p is not None]

            logger.info(f"{self.log_prefix} {len(programs)} programs found for {channel_id}")
            return programs

        return await self._cached(f"programs_{channel_id}", produce)

    async def search(self, query: str) -> List[Video]:
        """Videos matching query; only the "Vidéos" collection is considered"""
        async def produce() -> List[Video]:
            logger.info(f"{self.log_prefix} Searching: {query}...")
            data = await self.api_client.fetch(
                f"{self.api_mobile}/apps/search",
                params={'term': query, **PLATFORM_PARAMS}
            )

            items = [
                item
                for c in _collections(data) if c.get('label') == SEARCH_VIDEOS_LABEL
                for item in c.get('items') or []
            ]
            videos = self._normalize_videos(items)

            logger.info(f'{self.log_prefix} {len(videos)} results for "{query}"')
            return videos

        return await self._cached(f"search_{query}", produce)

    async def get_rugby_content(self) -> List[Video]:
        """Rugby videos, filtered by keyword out of the sport channel"""
        async def produce() -> List[Video]:
            logger.info(f"{self.log_prefix} Fetching rugby content...")
            data = await self._fetch_channel('sport')

            items = [
                item
                for c in _collections(data)
                for item in c.get('items') or [] if _is_rugby(item)
            ]
            videos = self._dedupe(self._normalize_videos(items))

            logger.info(f"{self.log_prefix} {len(videos)} rugby videos found")
            return videos

        return await self._cached('rugby', produce)

    async def get_popular_shows(self) -> List[Video]:
        """First videos of each popular-show search, in query order"""
        results = await asyncio.gather(*(self.search(q) for q in POPULAR_QUERIES))
        videos = [video for found in results for video in found[:POPULAR_PER_QUERY]]
        return self._dedupe(videos)

    async def get_live_stream(self, channel_id: str) -> Optional[ResolvedStream]:
        """Resolve what a channel is airing now. Never cached."""
        logger.info(f"{self.log_prefix} Fetching live for {channel_id}...")
        try:
            data = await self._fetch_channel(channel_id)
        except FetchError as e:
            logger.error(f"❌ {self.log_prefix} Live lookup failed for {channel_id}: {e}")
            return None

        for collection in _collections(data):
            if collection.get('type') != 'live':
                continue
            items = collection.get('items') or []
            live_item = items[0] if items and isinstance(items[0], dict) else {}
            channel = live_item.get('channel') or {}
            broadcast_id = channel.get('si_id') if isinstance(channel, dict) else None
            if not broadcast_id:
                logger.info(f"{self.log_prefix} Live collection without broadcast id for {channel_id}")
                return None
            logger.info(f"{self.log_prefix} Live broadcast id for {channel_id}: {broadcast_id}")
            return await self.stream_resolver.resolve(broadcast_id)

        logger.info(f"{self.log_prefix} No live collection for {channel_id}")
        return None

    async def get_video_info(self, video_id: str) -> Optional[ResolvedStream]:
        """Playback information for a video. Never cached."""
        return await self.stream_resolver.resolve(video_id)
