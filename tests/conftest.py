import pytest
from fastapi.testclient import TestClient

from app.providers.fr.francetv import FranceTVProvider
from app.utils.api_client import ProviderAPIClient
from app.utils.cache import TTLCache
from tests.upstream import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def provider(cache):
    provider = FranceTVProvider(api_client=ProviderAPIClient(provider_name="FranceTV", timeout=5), cache=cache)
    yield provider
    provider.close()


@pytest.fixture
def client(provider):
    """TestClient whose routes use the test provider"""
    from app.main import app
    from app.providers.common import get_francetv

    app.dependency_overrides[get_francetv] = lambda: provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
