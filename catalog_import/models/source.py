"""
Shopify source data models.

Read-only views of the records returned by the Shopify Admin REST API.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SourceImage:
    """Product image as hosted by Shopify."""
    src: str
    position: int
    id: Optional[int] = None
    alt: str = ""


@dataclass
class SourceVariant:
    """Product variant with pricing and up to three option values."""
    sku: str = ""
    price: str = ""
    compare_at_price: Optional[str] = None
    title: str = ""
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    id: Optional[int] = None

    def option_value(self, index: int) -> Optional[str]:
        """Value of the option at a zero-based position (None past option3)."""
        return (self.option1, self.option2, self.option3)[index] if index < 3 else None


@dataclass
class SourceOption:
    """Named product option and its declared values."""
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class SourceMetafield:
    """Auxiliary product attribute (Shopify metafield)."""
    namespace: str
    key: str
    value: str
    type: str = ""


@dataclass
class SourceProduct:
    """
    Shopify product record.

    status is one of "active", "draft" or "archived".
    """
    id: int
    title: str
    handle: str = ""
    body_html: str = ""
    product_type: str = ""
    vendor: str = ""
    status: str = "draft"
    tags: str = ""
    images: List[SourceImage] = field(default_factory=list)
    variants: List[SourceVariant] = field(default_factory=list)
    options: List[SourceOption] = field(default_factory=list)

    @property
    def primary_variant(self) -> Optional[SourceVariant]:
        return self.variants[0] if self.variants else None
