import pytest
from storefront.client import StorefrontClient


@pytest.fixture(autouse=True)
def _clean(clean_domains):
    yield


@pytest.fixture()
def client_for(api):
    """Build a StorefrontClient that talks to the in-process API."""

    def _client(token=None):
        return StorefrontClient("http://testserver", session=api, token=token)

    return _client
