from app.config.catalogs import CATALOGS
from app.utils.ids import ID_PREFIX

ADDON_VERSION = "1.0.0"


def get_manifest():
    return {
        "id": "community.stremio.francetv",
        "version": ADDON_VERSION,
        "name": "France.tv",
        "description": "Replay gratuit France Télévisions - France 2, France 3, France 4, France 5, franceinfo, Slash",
        "logo": "https://www.france.tv/image/vignette_3x4/280/420/p/l/e/phpqlzple.png",
        "background": "https://www.france.tv/image/background_16x9/2500/1400/j/k/s/phpn0qskj.jpg",
        "resources": [
            "catalog",
            "meta",
            "stream"
        ],
        "types": [
            "movie",
            "series",
            "tv"
        ],
        "catalogs": CATALOGS,
        "idPrefixes": [
            ID_PREFIX
        ]
    }
