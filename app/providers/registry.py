from typing import Type, Dict, Optional
from app.providers.base_provider import BaseProvider
from app.providers.fr.francetv import FranceTVProvider

# Map provider keys to their implementation classes
PROVIDER_CLASSES: Dict[str, Type[BaseProvider]] = {
    "francetv": FranceTVProvider,
}

def get_provider_class(key: str) -> Optional[Type[BaseProvider]]:
    """Get the provider class for a given key."""
    return PROVIDER_CLASSES.get(key)
