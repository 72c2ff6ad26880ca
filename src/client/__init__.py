"""
Marketplace clients: REST over HTTP or in-process against seeded data.
"""

from .base import MarketplaceClient
from .http_client import HttpMarketplaceClient, filters_to_params
from .mock_client import MockMarketplaceClient
from config.settings import api_config


def get_marketplace_client(config=api_config, **kwargs) -> MarketplaceClient:
    """Return the mock backend when ``MOCK_API`` is set, otherwise the HTTP one."""
    if config.mock_api:
        return MockMarketplaceClient(**kwargs)
    return HttpMarketplaceClient(**kwargs)


__all__ = [
    'MarketplaceClient',
    'HttpMarketplaceClient',
    'MockMarketplaceClient',
    'filters_to_params',
    'get_marketplace_client',
]
