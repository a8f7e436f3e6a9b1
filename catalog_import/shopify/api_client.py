"""
Shopify API Client

Shared client for the Shopify Admin REST API.
Handles authentication, rate limiting, retries and cursor pagination.
"""

import logging
import re
import time
from typing import Dict, Optional, Tuple
from urllib.parse import urljoin

import requests

from ..common.constants import SHOPIFY_API_VERSION

logger = logging.getLogger(__name__)

# <https://shop.myshopify.com/admin/api/...?page_info=abc&limit=250>; rel="next"
_NEXT_PAGE_RE = re.compile(r'<[^>]*[?&]page_info=([^&>]+)[^>]*>;\s*rel="next"')


class ShopifyAPIError(Exception):
    """Non-success response from the Shopify Admin API."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Shopify API error {status_code}: {body}")


def parse_next_page_info(link_header: str) -> Optional[str]:
    """
    Extract the next-page cursor from a Shopify Link header.

    Returns:
        The page_info value of the rel="next" link, or None on the last page
    """
    if not link_header:
        return None
    match = _NEXT_PAGE_RE.search(link_header)
    return match.group(1) if match else None


class ShopifyAPIClient:
    """
    Shared client for Shopify Admin API.

    Handles:
    - Authentication
    - Rate limiting (2 requests/second)
    - Error handling and retries
    - Cursor pagination via Link headers

    Usage:
        client = ShopifyAPIClient(shop="my-store", access_token="shpat_xxx")

        # Soft request (None on error)
        result = client.rest_request("GET", "products/1/metafields.json")

        # Paginated request (raises ShopifyAPIError on error)
        data, next_page_info = client.paged_request("products.json", {"limit": 250})
    """

    API_VERSION = SHOPIFY_API_VERSION
    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
    SUPPORTED_METHODS = {"GET", "POST", "PUT", "DELETE"}

    def __init__(self, shop: str, access_token: str):
        """
        Initialize the API client.

        Args:
            shop: Shop name (without .myshopify.com) or full domain
            access_token: Shopify Admin API access token
        """
        # Normalize shop name
        if ".myshopify.com" in shop:
            self.shop = shop.replace("https://", "").replace("http://", "").split(".myshopify.com")[0]
        else:
            self.shop = shop

        self.access_token = access_token
        self.base_url = f"https://{self.shop}.myshopify.com/admin/api/{self.API_VERSION}"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    @staticmethod
    def _retry_delay(response: requests.Response, attempt: int) -> float:
        """Seconds to wait before a retry. Shopify sends Retry-After as e.g. "2.0"."""
        try:
            return max(0.0, float(response.headers.get("Retry-After", "")))
        except ValueError:
            return float(2 ** attempt)

    def _send(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> requests.Response:
        """
        Send a request, retrying on rate limiting and transient server errors.

        Returns:
            The final response (possibly still a retryable status once
            MAX_RETRIES is exhausted)

        Raises:
            ValueError: Unsupported HTTP method
            requests.RequestException: Transport failure
        """
        if method not in self.SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = urljoin(self.base_url + "/", endpoint)
        response = None

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            response = self.session.request(
                method, url, json=data, params=params, timeout=timeout
            )

            if response.status_code in self.RETRYABLE_STATUS_CODES:
                retry_after = self._retry_delay(response, attempt)
                logger.warning("HTTP %d on %s, retry %d/%d in %.1fs...",
                               response.status_code, endpoint, attempt + 1,
                               self.MAX_RETRIES, retry_after)
                time.sleep(retry_after)
                continue

            return response

        logger.error("Max retries (%d) exceeded for %s %s", self.MAX_RETRIES, method, endpoint)
        return response

    def rest_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Dict]:
        """
        Make REST API request with rate limiting and error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "products.json")
            data: Request body for POST/PUT
            params: Query string parameters
            timeout: Request timeout in seconds

        Returns:
            Response JSON or None on error
        """
        try:
            response = self._send(method, endpoint, data=data, params=params, timeout=timeout)
        except requests.exceptions.Timeout:
            logger.error("Request timeout: %s", endpoint)
            return None
        except requests.exceptions.RequestException as e:
            logger.error("Request failed: %s", e)
            return None

        if response.status_code >= 400:
            logger.error("API Error %d: %s", response.status_code, response.text[:200])
            return None

        try:
            return response.json()
        except ValueError:
            logger.error("Invalid JSON from %s: %s", endpoint, response.text[:200])
            return None

    def paged_request(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> Tuple[Dict, Optional[str]]:
        """
        Fetch one page of a cursor-paginated GET endpoint.

        Args:
            endpoint: API endpoint (e.g., "products.json")
            params: Query string parameters (limit, fields, page_info)
            timeout: Request timeout in seconds

        Returns:
            Tuple of (response JSON, next page_info or None)

        Raises:
            ShopifyAPIError: On any non-success response or transport failure
                (status_code 0 for the latter), or a body that is not JSON
        """
        try:
            response = self._send("GET", endpoint, params=params, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise ShopifyAPIError(0, str(e)) from e

        if response.status_code >= 400:
            raise ShopifyAPIError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyAPIError(response.status_code, response.text[:200]) from e

        next_page_info = parse_next_page_info(response.headers.get("Link", ""))
        return data, next_page_info

    def test_connection(self) -> bool:
        """
        Test API connection by fetching shop info.

        Returns:
            True if connection successful
        """
        result = self.rest_request("GET", "shop.json")
        if result and "shop" in result:
            shop_name = result["shop"].get("name", "Unknown")
            logger.info("Connected to: %s", shop_name)
            return True
        return False
