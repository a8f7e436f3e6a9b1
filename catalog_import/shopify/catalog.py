"""
Shopify Catalog Reader

Walks the products endpoint page by page and fetches per-product metafields.
Raw API JSON is converted into the source models here so nothing downstream
depends on Shopify's response layout.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..common.constants import IMPORT_MODES, MODE_PUBLIC, SHOPIFY_ACTIVE_STATUS
from ..models import (
    SourceImage,
    SourceMetafield,
    SourceOption,
    SourceProduct,
    SourceVariant,
)
from .api_client import ShopifyAPIClient

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_FIELDS = (
    "id", "title", "handle", "body_html", "product_type", "vendor",
    "status", "tags", "images", "variants", "options",
)


def parse_product(data: Dict) -> SourceProduct:
    """Build a SourceProduct from a products.json entry."""
    images = [
        SourceImage(
            src=img.get("src") or "",
            position=img.get("position") or 0,
            id=img.get("id"),
            alt=img.get("alt") or "",
        )
        for img in data.get("images") or []
    ]
    variants = [
        SourceVariant(
            sku=v.get("sku") or "",
            price=v.get("price") or "",
            compare_at_price=v.get("compare_at_price"),
            title=v.get("title") or "",
            option1=v.get("option1"),
            option2=v.get("option2"),
            option3=v.get("option3"),
            id=v.get("id"),
        )
        for v in data.get("variants") or []
    ]
    options = [
        SourceOption(name=o.get("name") or "", values=list(o.get("values") or []))
        for o in data.get("options") or []
    ]
    return SourceProduct(
        id=data["id"],
        title=data.get("title") or "",
        handle=data.get("handle") or "",
        body_html=data.get("body_html") or "",
        product_type=data.get("product_type") or "",
        vendor=data.get("vendor") or "",
        status=data.get("status") or "draft",
        tags=data.get("tags") or "",
        images=images,
        variants=variants,
        options=options,
    )


def matches_mode(product: SourceProduct, mode: str) -> bool:
    """public keeps active products; draft keeps draft and archived ones."""
    if mode == MODE_PUBLIC:
        return product.status == SHOPIFY_ACTIVE_STATUS
    return product.status != SHOPIFY_ACTIVE_STATUS


class ShopifyCatalogClient:
    """
    Reads the Shopify catalog.

    Usage:
        with ShopifyAPIClient(shop, token) as api:
            catalog = ShopifyCatalogClient(api)
            products = catalog.fetch_all("public")
            metafields = catalog.fetch_metafields(products[0].id)
    """

    def __init__(
        self,
        client: ShopifyAPIClient,
        page_size: int = 250,
        fields: Sequence[str] = DEFAULT_PRODUCT_FIELDS,
    ):
        self.client = client
        self.page_size = page_size
        self.fields = list(fields)

    def fetch_page(self, page_info: Optional[str] = None) -> Tuple[List[SourceProduct], Optional[str]]:
        """
        Fetch one page of products.

        Returns:
            Tuple of (list of SourceProduct, next page_info or None)

        Raises:
            ShopifyAPIError: If Shopify answers with a non-success status
        """
        params = {"limit": self.page_size, "fields": ",".join(self.fields)}
        if page_info:
            params["page_info"] = page_info

        data, next_page_info = self.client.paged_request("products.json", params=params)
        products = [parse_product(p) for p in data.get("products") or []]
        return products, next_page_info

    def fetch_all(self, mode: str = "draft") -> List[SourceProduct]:
        """
        Fetch every product, walking pagination, then filter by import mode.

        A failing page aborts the whole fetch; a partial catalog is never
        returned.

        Args:
            mode: "draft" (non-active products) or "public" (active products)

        Raises:
            ValueError: Unknown mode
            ShopifyAPIError: A page request failed
        """
        if mode not in IMPORT_MODES:
            raise ValueError(f"Unknown import mode: {mode}")

        all_products: List[SourceProduct] = []
        page_info = None
        pages = 0

        while True:
            products, page_info = self.fetch_page(page_info)
            all_products.extend(products)
            pages += 1
            logger.debug("Page %d: %d products", pages, len(products))
            if not page_info:
                break

        filtered = [p for p in all_products if matches_mode(p, mode)]
        logger.info("Fetched %d products in %d page(s), %d match mode '%s'",
                    len(all_products), pages, len(filtered), mode)
        return filtered

    def fetch_metafields(self, product_id: int) -> List[SourceMetafield]:
        """
        Fetch metafields for one product.

        Metafields only enrich specs, so any failure yields an empty list.
        """
        result = self.client.rest_request("GET", f"products/{product_id}/metafields.json")
        if not result:
            logger.debug("No metafields for product %s", product_id)
            return []

        return [
            SourceMetafield(
                namespace=m.get("namespace") or "",
                key=m.get("key") or "",
                value="" if m.get("value") is None else str(m.get("value")),
                type=m.get("type") or "",
            )
            for m in result.get("metafields") or []
        ]
