from typing import Optional

from app.config.catalogs import CATALOG_PREFIX

ID_PREFIX = "francetv:"
LIVE_MARKER = "live:"


def video_stremio_id(video_id: str) -> str:
    return f"{ID_PREFIX}{video_id}"


def live_stremio_id(channel_id: str) -> str:
    return f"{ID_PREFIX}{LIVE_MARKER}{channel_id}"


def parse_stremio_id(stremio_id: str) -> dict:
    """
    Parse an ID in the format francetv:{video_id} or francetv:live:{channel_id}
    Returns a dictionary with the components
    """
    if not stremio_id.startswith(ID_PREFIX):
        return {}
    rest = stremio_id[len(ID_PREFIX):]
    if rest.startswith(LIVE_MARKER):
        channel_id = rest[len(LIVE_MARKER):]
        return {"kind": "live", "channel_id": channel_id} if channel_id else {}
    return {"kind": "video", "video_id": rest} if rest else {}


def parse_catalog_id(catalog_id: str) -> Optional[str]:
    """
    Parse a catalog ID in the format francetv-{name}
    Returns the name, or None for foreign catalogs
    """
    if catalog_id.startswith(CATALOG_PREFIX) and len(catalog_id) > len(CATALOG_PREFIX):
        return catalog_id[len(CATALOG_PREFIX):]
    return None
