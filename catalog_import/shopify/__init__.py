"""
Shopify integration modules.

Modules:
    api_client - Shared REST client for Shopify Admin API
    catalog - Paginated product reader and metafield fetcher
"""

from .api_client import ShopifyAPIClient, ShopifyAPIError, parse_next_page_info
from .catalog import ShopifyCatalogClient, matches_mode, parse_product

__all__ = [
    # API Client
    'ShopifyAPIClient',
    'ShopifyAPIError',
    'parse_next_page_info',
    # Catalog
    'ShopifyCatalogClient',
    'matches_mode',
    'parse_product',
]
