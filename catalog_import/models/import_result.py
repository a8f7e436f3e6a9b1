"""Batch import outcome model."""

from dataclasses import dataclass

STATUS_SUCCESS = "success"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class ImportResult:
    """Outcome of importing one Shopify product."""
    shopify_product_id: int
    title: str
    status: str
    reason: str = ""
    document_id: str = ""
