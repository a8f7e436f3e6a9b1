"""
Batch Importer

Imports a filtered Shopify catalog into the document store.

Features:
- Duplicate check by item code (existing products are never updated)
- Per-product error handling; one failure never stops the batch
- Progress callbacks before and after every product
- Cooperative cancellation, checked once per product
- Fixed delay between products to spare the upload endpoint
"""

import logging
import time
from typing import Callable, List, Optional

from ..common.constants import IMPORT_MODES, PRODUCTS_COLLECTION
from ..common.text_utils import utc_now_iso
from ..models import ImportResult, STATUS_FAILED, STATUS_SKIPPED, STATUS_SUCCESS
from ..shopify import ShopifyCatalogClient
from ..store import DocumentStore
from .normalizer import ProductNormalizer, item_code_for

logger = logging.getLogger(__name__)

# on_progress(current, total, message, result)
ProgressCallback = Callable[[int, int, str, Optional[ImportResult]], None]
CancelCheck = Callable[[], bool]


class BatchImporter:
    """
    Sequential Shopify-to-CMS product import.

    Usage:
        importer = BatchImporter(catalog, normalizer, store)
        results = importer.run(mode="public", on_progress=print_progress)
    """

    def __init__(
        self,
        catalog: ShopifyCatalogClient,
        normalizer: ProductNormalizer,
        store: DocumentStore,
        delay: float = 0.08,
    ):
        """
        Args:
            catalog: Shopify catalog reader
            normalizer: Product normalizer
            store: Document store holding products and taxonomy
            delay: Seconds to wait between products
        """
        self.catalog = catalog
        self.normalizer = normalizer
        self.store = store
        self.delay = delay

    def run(
        self,
        mode: str = "draft",
        on_progress: Optional[ProgressCallback] = None,
        is_cancelled: Optional[CancelCheck] = None,
    ) -> List[ImportResult]:
        """
        Fetch the catalog and import every product in it.

        Args:
            mode: "draft" or "public"
            on_progress: Called as (current, total, message, result)
            is_cancelled: Polled before each product; True stops the run

        Returns:
            One ImportResult per processed product, in catalog order. A
            cancelled run returns the results gathered so far.

        Raises:
            ValueError: Unknown mode
            ShopifyAPIError: The catalog could not be fetched
        """
        if mode not in IMPORT_MODES:
            raise ValueError(f"Unknown import mode: {mode}")

        results: List[ImportResult] = []

        def report(current: int, total: int, message: str,
                   result: Optional[ImportResult] = None) -> None:
            if on_progress:
                on_progress(current, total, message, result)

        logger.info("Fetching Shopify products (mode: %s)...", mode)
        report(0, 0, f"Fetching Shopify products (mode: {mode})...")
        products = self.catalog.fetch_all(mode)
        total = len(products)
        logger.info("%d product(s) to import", total)
        report(0, total, f"{total} product(s) to import.")

        for i, product in enumerate(products):
            if is_cancelled and is_cancelled():
                logger.warning("Import cancelled after %d/%d product(s)", i, total)
                report(i, total, "Import cancelled.")
                break

            logger.info("[%d/%d] %s", i + 1, total, product.title[:60])
            report(i, total, f"Processing: {product.title}")

            result = self._import_one(
                product, mode, lambda msg, i=i: report(i, total, msg)
            )
            results.append(result)

            if result.status == STATUS_SUCCESS:
                report(i + 1, total, f"Saved: {product.title}", result)
            elif result.status == STATUS_SKIPPED:
                report(i + 1, total, f"Skipped: {product.title}", result)
            else:
                report(i + 1, total, f"Failed: {product.title} ({result.reason})", result)

            # Rate limiting
            if i + 1 < total and self.delay:
                time.sleep(self.delay)

        return results

    def _import_one(self, product, mode: str, log: Callable[[str], None]) -> ImportResult:
        """Dedup-check, normalize and persist one product."""
        try:
            item_code = item_code_for(product)
            if self.store.find_one(PRODUCTS_COLLECTION, "ecoItemCode", item_code):
                logger.info("Skipped (duplicate SKU): %s", item_code)
                return ImportResult(
                    shopify_product_id=product.id,
                    title=product.title,
                    status=STATUS_SKIPPED,
                    reason=f'Duplicate SKU "{item_code}"',
                )

            normalized = self.normalizer.normalize(product, mode, on_progress=log)

            now = utc_now_iso()
            document = normalized.to_document()
            document["createdAt"] = now
            document["updatedAt"] = now
            doc_id = self.store.insert(PRODUCTS_COLLECTION, document)

        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)[:200]}"
            logger.error("Failed: %s (%s)", product.title[:60], error_msg)
            return ImportResult(
                shopify_product_id=product.id,
                title=product.title,
                status=STATUS_FAILED,
                reason=error_msg,
            )

        logger.info("OK: %s -> %s", product.title[:50], doc_id)
        return ImportResult(
            shopify_product_id=product.id,
            title=product.title,
            status=STATUS_SUCCESS,
            document_id=doc_id,
        )
