from fastapi import APIRouter, Depends
import logging

from app.providers.common import get_francetv
from app.providers.fr.francetv import FranceTVProvider
from app.schemas.stremio import Stream, StreamResponse
from app.utils.ids import parse_stremio_id

router = APIRouter()
logger = logging.getLogger(__name__)

STREAM_NAME = "France.tv"
WEBSITE_URL = "https://www.france.tv/"


@router.get("/stream/{type}/{id}.json", response_model=StreamResponse, response_model_exclude_none=True)
async def get_stream(type: str, id: str, provider: FranceTVProvider = Depends(get_francetv)):
    """Get the stream of a replay video or live channel."""
    logger.info(f"🔍 STREAM REQUEST: type={type}, id={id}")

    parsed = parse_stremio_id(id)
    try:
        if parsed.get("kind") == "live":
            video = await provider.get_live_stream(parsed["channel_id"])
        elif parsed.get("kind") == "video":
            video = await provider.get_video_info(parsed["video_id"])
        else:
            logger.warning(f"⚠️ Unsupported stream id: {id}")
            return StreamResponse(streams=[])
    except Exception as e:
        logger.error(f"❌ [Addon] Stream error {id}: {e}")
        return StreamResponse(streams=[])

    if not video:
        logger.info(f"[Addon] No video for {id}")
        return StreamResponse(streams=[])

    if video.is_drm_protected:
        logger.info(f"[Addon] Video {id} is DRM protected")
        return StreamResponse(streams=[Stream(
            name=STREAM_NAME,
            title=f"{video.title or STREAM_NAME}\n⚠️ Protégé par DRM - Non disponible",
            externalUrl=WEBSITE_URL,
        )])

    if not video.playback_url:
        logger.info(f"[Addon] No stream URL for {id}")
        return StreamResponse(streams=[])

    logger.info(f"✅ [Addon] Stream found: {video.playback_url}")
    return StreamResponse(streams=[Stream(
        name=STREAM_NAME,
        title=f"{video.title or STREAM_NAME}\n🇫🇷 Français",
        url=video.playback_url,
        behaviorHints={"notWebReady": False},
    )])
