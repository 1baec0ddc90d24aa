"""
Static catalog and channel definitions exposed in the manifest.
"""

from typing import Dict, List, Optional

CATALOG_PREFIX = "francetv-"
LIVE_CATALOG_ID = "francetv-live"

# Channels with a replay catalog and a live stream
CHANNELS: List[Dict[str, str]] = [
    {"id": "france-2", "name": "France 2"},
    {"id": "france-3", "name": "France 3"},
    {"id": "france-4", "name": "France 4"},
    {"id": "france-5", "name": "France 5"},
    {"id": "franceinfo", "name": "franceinfo"},
    {"id": "slash", "name": "France tv Slash"},
]

# Catalogs backed by something other than a plain channel listing
RUGBY = "rugby"
PAPOTIN = "papotin"
EMISSIONS = "emissions"

_SKIP = {"name": "skip", "isRequired": False}
_SEARCH = {"name": "search", "isRequired": False}

CATALOGS: List[Dict] = [
    {"type": "movie", "id": "francetv-france-2", "name": "France 2", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-france-3", "name": "France 3", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-france-5", "name": "France 5", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-france-4", "name": "France 4", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-franceinfo", "name": "franceinfo", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-slash", "name": "France tv Slash", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-sport", "name": "⚽ Sport", "extra": [_SKIP]},
    {"type": "series", "id": "francetv-series-et-fictions", "name": "📺 Séries & Fictions", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-rugby", "name": "🏉 Rugby", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-papotin", "name": "🎤 Le Papotin", "extra": [_SKIP]},
    {"type": "movie", "id": "francetv-emissions", "name": "📻 Émissions TV", "extra": [_SKIP, _SEARCH]},
    {"type": "tv", "id": LIVE_CATALOG_ID, "name": "📡 Direct"},
]


def get_channel(channel_id: str) -> Optional[Dict[str, str]]:
    for channel in CHANNELS:
        if channel["id"] == channel_id:
            return channel
    return None
