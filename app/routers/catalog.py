from fastapi import APIRouter, Depends
import logging
from typing import Dict, List, Optional
from urllib.parse import parse_qs

from app.config.catalogs import CHANNELS, EMISSIONS, PAPOTIN, RUGBY, LIVE_CATALOG_ID
from app.providers.common import get_francetv
from app.providers.fr.francetv import FranceTVProvider
from app.schemas.stremio import CatalogResponse, MetaPreview
from app.schemas.type_defs import Video
from app.utils.ids import live_stremio_id, parse_catalog_id, video_stremio_id

router = APIRouter()
logger = logging.getLogger(__name__)

PAGE_SIZE = 50


def _parse_extra(extra: Optional[str]) -> Dict[str, str]:
    """Parse Stremio's extra path segment, e.g. "skip=50&search=foo"."""
    if not extra:
        return {}
    return {key: values[0] for key, values in parse_qs(extra).items() if values}


def _parse_skip(value: Optional[str]) -> int:
    try:
        return max(int(value or 0), 0)
    except ValueError:
        return 0


async def _load_videos(provider: FranceTVProvider, name: str, search: str) -> List[Video]:
    if name == RUGBY:
        return await provider.get_rugby_content()
    if name == PAPOTIN:
        return await provider.search('papotin')
    if name == EMISSIONS:
        if search:
            return await provider.search(search)
        return await provider.get_popular_shows()
    return await provider.get_channel_content(name)


def _video_meta(video: Video, type: str) -> MetaPreview:
    return MetaPreview(
        id=video_stremio_id(video.id),
        type=type,
        name=video.title,
        poster=video.image_url,
        posterShape="landscape",
        description=video.description,
        background=video.image_url,
    )


def _live_metas(type: str) -> List[MetaPreview]:
    return [
        MetaPreview(
            id=live_stremio_id(channel["id"]),
            type=type,
            name=channel["name"],
            posterShape="square",
            description=f"{channel['name']} en direct",
        )
        for channel in CHANNELS
    ]


async def _build_catalog(type: str, id: str, extra: Dict[str, str], provider: FranceTVProvider) -> CatalogResponse:
    logger.info(f"🔍 CATALOG REQUEST: type={type}, id={id}, extra={extra}")

    if id == LIVE_CATALOG_ID:
        return CatalogResponse(metas=_live_metas(type))

    name = parse_catalog_id(id)
    if not name:
        logger.warning(f"⚠️ Unknown catalog: {id}")
        return CatalogResponse(metas=[])

    skip = _parse_skip(extra.get("skip"))
    try:
        videos = await _load_videos(provider, name, extra.get("search", ""))
    except Exception as e:
        logger.error(f"❌ [Addon] Catalog error {id}: {e}")
        return CatalogResponse(metas=[])

    page = videos[skip:skip + PAGE_SIZE]
    logger.info(f"✅ [Addon] Returning {len(page)} results (skip: {skip})")
    return CatalogResponse(metas=[_video_meta(video, type) for video in page])


@router.get("/catalog/{type}/{id}.json", response_model=CatalogResponse, response_model_exclude_none=True)
async def get_catalog(type: str, id: str, provider: FranceTVProvider = Depends(get_francetv)):
    return await _build_catalog(type, id, {}, provider)


@router.get("/catalog/{type}/{id}/{extra}.json", response_model=CatalogResponse, response_model_exclude_none=True)
async def get_catalog_with_extra(type: str, id: str, extra: str, provider: FranceTVProvider = Depends(get_francetv)):
    return await _build_catalog(type, id, _parse_extra(extra), provider)
