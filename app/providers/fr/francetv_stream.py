"""
Resolves a France.tv video id into a playable URL.

Flow: playback metadata -> DRM check -> token exchange -> final URL.
Results are never cached; tokenized URLs are short-lived.
"""

import logging
from typing import Any, Dict, Optional

from app.providers.fr.francetv_normalizer import parse_duration
from app.schemas.type_defs import ResolvedStream, TokenExchangeResult
from app.utils.api_client import FetchError, ProviderAPIClient

logger = logging.getLogger(__name__)

API_VIDEO_URL = "https://k7.ftven.fr/videos"

# Query parameters the video API requires to return a playable payload
VIDEO_PARAMS = {
    'country_code': 'FR',
    'domain': 'www.france.tv',
    'os': 'android',
    'browser': 'firefox',
}


def _token_endpoint(video: Dict[str, Any]) -> Optional[str]:
    token_field = video.get('token')
    if isinstance(token_field, dict):
        return token_field.get('akamai') or None
    if isinstance(token_field, str):
        return token_field or None
    return None


def _delivery_format(video: Dict[str, Any]) -> Optional[str]:
    fmt = video.get('format')
    if isinstance(fmt, list):
        return fmt[0] if fmt else None
    return fmt


class FranceTVStreamResolver:
    """Turns a video id (si_id) into a ResolvedStream."""

    def __init__(self, api_client: ProviderAPIClient):
        self.api_client = api_client

    async def resolve(self, video_id: str) -> Optional[ResolvedStream]:
        """
        Returns None when no stream is available: the metadata fetch failed,
        the payload has no video, or a non-DRM payload has no URL.
        """
        logger.info(f"[FranceTV] Resolving video {video_id}...")

        try:
            data = await self.api_client.fetch(f"{API_VIDEO_URL}/{video_id}", params=VIDEO_PARAMS)
        except FetchError as e:
            logger.error(f"❌ [FranceTV] Video metadata failed for {video_id}: {e}")
            return None

        video = data.get('video') if isinstance(data, dict) else None
        if not video or not isinstance(video, dict):
            logger.info(f"[FranceTV] No video payload for {video_id}")
            return None

        meta = data.get('meta')
        if not isinstance(meta, dict):
            meta = {}
        details = {
            'video_id': video_id,
            'title': meta.get('title'),
            'description': meta.get('description'),
            'duration_seconds': parse_duration(video.get('duration')),
            'image_url': meta.get('image_url'),
        }

        if video.get('drm') is True:
            logger.info(f"[FranceTV] Video {video_id} is DRM protected")
            return ResolvedStream(is_drm_protected=True, playback_url=None, **details)

        candidate_url = video.get('url')
        if not candidate_url:
            logger.warning(f"⚠️ [FranceTV] No stream URL for {video_id}")
            return None

        playback_url = candidate_url
        token_url = _token_endpoint(video)
        if token_url:
            exchange = await self.exchange_token(token_url, candidate_url)
            playback_url = exchange.url

        logger.info(f"✅ [FranceTV] Stream resolved for {video_id}")
        return ResolvedStream(
            is_drm_protected=False,
            playback_url=playback_url,
            delivery_format=_delivery_format(video),
            **details
        )

    async def exchange_token(self, token_url: str, candidate_url: str) -> TokenExchangeResult:
        """
        Ask the token endpoint for a signed URL. Never raises: on failure the
        result carries the candidate URL with exchanged=False.
        """
        try:
            data = await self.api_client.fetch(token_url, params={'url': candidate_url})
        except FetchError as e:
            logger.warning(f"⚠️ [FranceTV] Token exchange failed, using base URL: {e}")
            return TokenExchangeResult(url=candidate_url, exchanged=False, error=str(e))

        signed_url = data.get('url') if isinstance(data, dict) else None
        if not signed_url:
            logger.warning("⚠️ [FranceTV] Token response has no URL, using base URL")
            return TokenExchangeResult(url=candidate_url, exchanged=False, error="No URL in token response")

        return TokenExchangeResult(url=signed_url, exchanged=True)
