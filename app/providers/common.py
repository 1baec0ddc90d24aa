import logging
from typing import Dict

from app.config.settings import get_settings
from app.providers.base_provider import BaseProvider
from app.providers.fr.francetv import FranceTVProvider
from app.providers.registry import get_provider_class
from app.utils.api_client import ProviderAPIClient
from app.utils.cache import TTLCache

logger = logging.getLogger(__name__)


class ProviderFactory:
    """
    Builds providers from the registry and keeps one instance per key, so
    each provider's cache lives as long as the process.
    """

    _instances: Dict[str, BaseProvider] = {}

    @classmethod
    def create_provider(cls, provider_name: str) -> BaseProvider:
        """Create a provider instance configured from settings."""
        provider_cls = get_provider_class(provider_name)

        if not provider_cls:
            raise ValueError(f"Unknown provider: {provider_name}")

        settings = get_settings()
        api_client = ProviderAPIClient(
            provider_name=provider_cls.display_name,
            timeout=settings.fetch_timeout
        )
        cache = TTLCache(
            ttl=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries
        )
        logger.info(
            f"Creating provider {provider_name} (cache ttl={settings.cache_ttl_seconds}s, "
            f"max_entries={settings.cache_max_entries or 'unbounded'})"
        )
        return provider_cls(api_client=api_client, cache=cache)

    @classmethod
    def get_provider(cls, provider_name: str) -> BaseProvider:
        """Shared provider instance for provider_name."""
        provider = cls._instances.get(provider_name)
        if provider is None:
            provider = cls.create_provider(provider_name)
            cls._instances[provider_name] = provider
        return provider

    @classmethod
    def reset(cls) -> None:
        """Close and forget every shared provider."""
        for provider in cls._instances.values():
            provider.close()
        cls._instances.clear()


def get_francetv() -> FranceTVProvider:
    """FastAPI dependency returning the shared France TV provider."""
    return ProviderFactory.get_provider("francetv")
