"""
Records returned by the France.tv provider.
Frozen dataclasses: every resolver call builds fresh instances.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Video:
    """A replay video from a channel listing or search result"""
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    duration_seconds: Optional[int] = None
    image_url: Optional[str] = None
    channel_label: Optional[str] = None
    content_type: Optional[str] = None


@dataclass(frozen=True)
class Program:
    """A show from a channel's program list, identified by its program path"""
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class ResolvedStream:
    """Playback information for one video.

    Either is_drm_protected is True and playback_url is None, or
    playback_url holds a playable URL.
    """
    video_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    duration_seconds: Optional[int] = None
    image_url: Optional[str] = None
    is_drm_protected: bool = False
    playback_url: Optional[str] = None
    delivery_format: Optional[str] = None


@dataclass(frozen=True)
class TokenExchangeResult:
    """Outcome of the token exchange.

    exchanged is False when the token endpoint failed or returned no URL;
    url is then the untokenized candidate.
    """
    url: str
    exchanged: bool
    error: Optional[str] = None
