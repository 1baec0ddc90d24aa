"""
Maps items from the France.tv mobile API onto Video and Program records.
"""

from typing import Any, Iterable, Optional

from app.schemas.type_defs import Program, Video

SITE_BASE = "https://www.france.tv"


def _absolute(url: Optional[str]) -> Optional[str]:
    if url and url.startswith('/'):
        return f"{SITE_BASE}{url}"
    return url


def _pick_image(images: Any, image_type: str, widths: Iterable[str]) -> Optional[str]:
    """First image of image_type, at the first available width."""
    if not isinstance(images, list):
        return None
    for image in images:
        if not isinstance(image, dict):
            continue
        urls = image.get('urls')
        if image.get('type') == image_type and isinstance(urls, dict):
            for width in widths:
                if urls.get(width):
                    return _absolute(urls[width])
            return None
    return None


def parse_duration(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def normalize_video(item: Any) -> Optional[Video]:
    """Build a Video, or None when the item has no si_id."""
    if not isinstance(item, dict) or not item.get('si_id'):
        return None

    channel = item.get('channel')
    return Video(
        id=str(item['si_id']),
        title=item.get('title') or item.get('label'),
        description=item.get('description'),
        duration_seconds=parse_duration(item.get('duration')),
        image_url=_pick_image(item.get('images'), 'vignette_16x9', ('w:1024', 'w:800')),
        channel_label=channel.get('label') if isinstance(channel, dict) else None,
        content_type=item.get('type'),
    )


def normalize_program(item: Any) -> Optional[Program]:
    """Build a Program, or None when the item has no program_path."""
    if not isinstance(item, dict) or not item.get('program_path'):
        return None

    return Program(
        id=item['program_path'],
        title=item.get('label') or item.get('title'),
        description=item.get('description'),
        image_url=_pick_image(item.get('images'), 'vignette_3x4', ('w:400', 'w:800')),
    )
