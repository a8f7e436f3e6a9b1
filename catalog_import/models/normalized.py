"""
Normalized product models.

NormalizedProduct mirrors the document the CMS writes when a product is
created by hand, so imported and manual records are interchangeable.

Field Groups:
- Identity: descriptions, slug, item codes
- Pricing: regular and sale price
- Specs: technical specs grouped by spec group
- Images: re-hosted image URLs
- Classification: family, brand, applications, website assignment
- Visibility: draft / public
- SEO: search engine metadata
- Provenance: import source tag and Shopify product id
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SpecEntry:
    """Single spec value on a product."""
    name: str
    value: str

    def to_document(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass
class TechnicalSpec:
    """Specs of one spec group as stored on a product."""
    spec_group: str
    specs: List[SpecEntry] = field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        return {
            "specGroup": self.spec_group,
            "specs": [s.to_document() for s in self.specs],
        }


@dataclass
class SeoPayload:
    """SEO sub-object. canonical is filled in later, once a website is assigned."""
    item_description: str
    description: str
    og_image: str
    last_updated: str
    canonical: str = ""
    robots: str = "index, follow"

    def to_document(self) -> Dict[str, str]:
        return {
            "itemDescription": self.item_description,
            "description": self.description,
            "canonical": self.canonical,
            "ogImage": self.og_image,
            "robots": self.robots,
            "lastUpdated": self.last_updated,
        }


@dataclass
class NormalizedProduct:
    """Product document ready to be persisted."""

    # Identity
    item_description: str
    short_description: str
    slug: str
    eco_item_code: str
    lit_item_code: str = ""
    product_class: str = ""

    # Pricing (regular >= sale; sale is 0 without a discount)
    regular_price: float = 0.0
    sale_price: float = 0.0

    # Specs
    technical_specs: List[TechnicalSpec] = field(default_factory=list)

    # Images (re-hosted URLs)
    main_image: str = ""
    raw_image: str = ""
    qr_code_image: str = ""     # Not available from Shopify
    gallery_images: List[str] = field(default_factory=list)

    # Classification (website assignment is left to the caller)
    product_family: str = ""
    brand: str = ""
    applications: List[str] = field(default_factory=list)
    website: List[str] = field(default_factory=list)
    websites: List[str] = field(default_factory=list)

    # Visibility
    status: str = "draft"

    # SEO
    seo: Optional[SeoPayload] = None

    # Provenance
    import_source: str = ""
    shopify_product_id: int = 0

    def to_document(self) -> Dict[str, Any]:
        """Serialize using the CMS field names."""
        return {
            "productClass": self.product_class,
            "itemDescription": self.item_description,
            "shortDescription": self.short_description,
            "slug": self.slug,
            "ecoItemCode": self.eco_item_code,
            "litItemCode": self.lit_item_code,
            "regularPrice": self.regular_price,
            "salePrice": self.sale_price,
            "technicalSpecs": [t.to_document() for t in self.technical_specs],
            "mainImage": self.main_image,
            "rawImage": self.raw_image,
            "qrCodeImage": self.qr_code_image,
            "galleryImages": list(self.gallery_images),
            "website": list(self.website),
            "websites": list(self.websites),
            "productFamily": self.product_family,
            "brand": self.brand,
            "applications": list(self.applications),
            "status": self.status,
            "seo": self.seo.to_document() if self.seo else {},
            "importSource": self.import_source,
            "shopifyProductId": self.shopify_product_id,
        }
