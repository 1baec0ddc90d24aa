from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging
from typing import Optional

from app.config.catalogs import get_channel
from app.providers.common import get_francetv
from app.providers.fr.francetv import FranceTVProvider
from app.schemas.stremio import MetaDetail, MetaResponse
from app.utils.ids import parse_stremio_id

router = APIRouter()
logger = logging.getLogger(__name__)

GENRES = ["France.tv", "Replay"]


def null_meta() -> JSONResponse:
    # Stremio expects an explicit null, which exclude_none would strip
    return JSONResponse({"meta": None})


def format_runtime(duration_seconds: Optional[int]) -> str:
    """Readable runtime: "1h5min" or "42min"."""
    duration = duration_seconds or 0
    hours = duration // 3600
    minutes = (duration % 3600) // 60
    return f"{hours}h{minutes}min" if hours > 0 else f"{minutes}min"


@router.get("/meta/{type}/{id}.json", response_model=MetaResponse, response_model_exclude_none=True)
async def get_meta(type: str, id: str, provider: FranceTVProvider = Depends(get_francetv)):
    """Get metadata for a replay video or a live channel."""
    logger.info(f"🔍 META REQUEST: type={type}, id={id}")

    parsed = parse_stremio_id(id)
    if parsed.get("kind") == "live":
        channel = get_channel(parsed["channel_id"])
        if not channel:
            return null_meta()
        return MetaResponse(meta=MetaDetail(
            id=id,
            type=type,
            name=channel["name"],
            posterShape="square",
            description=f"{channel['name']} en direct",
            genres=["France.tv", "Direct"],
        ))

    if parsed.get("kind") != "video":
        return null_meta()

    try:
        video = await provider.get_video_info(parsed["video_id"])
    except Exception as e:
        logger.error(f"❌ [Addon] Meta error {id}: {e}")
        return null_meta()

    if not video:
        return null_meta()

    return MetaResponse(meta=MetaDetail(
        id=id,
        type=type,
        name=video.title,
        poster=video.image_url,
        posterShape="landscape",
        background=video.image_url,
        description=video.description,
        runtime=format_runtime(video.duration_seconds),
        genres=GENRES,
    ))
