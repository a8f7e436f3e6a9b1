"""
Product Normalizer

Converts a Shopify product into the CMS product document, field for field
the same as a product created by hand:

- Identity: title, stripped short description, slug, item codes
- Pricing: regular = max(price, compare-at), sale only when discounted
- Images: sorted by position and re-hosted to Cloudinary
- Specs: metafields + options, resolved against the shared taxonomy
- Family: upserted from the product type with the resolved spec groups
- SEO and provenance stamps

Every step either merges into existing data or short-circuits on it, so
normalizing the same product twice leaves the taxonomy unchanged.
"""

import logging
from typing import Callable, Iterable, Optional, Tuple

from ..assets import CloudinaryRehoster
from ..common.constants import IMPORT_MODES, IMPORT_SOURCE
from ..common.text_utils import parse_price, strip_html, to_slug, utc_now_iso
from ..models import NormalizedProduct, SeoPayload, SourceProduct
from ..shopify import ShopifyCatalogClient
from ..specs import SpecResolver, extract_raw_specs
from ..taxonomy import SpecTaxonomy

logger = logging.getLogger(__name__)

ProgressLog = Callable[[str], None]


def item_code_for(product: SourceProduct) -> str:
    """Primary variant SKU, or the Shopify id when the SKU is blank."""
    variant = product.primary_variant
    sku = variant.sku.strip() if variant and variant.sku else ""
    return sku or str(product.id)


def resolve_pricing(price_raw, compare_at_raw) -> Tuple[float, float]:
    """
    Map Shopify price / compare-at price to (regular, sale).

    Example:
        >>> resolve_pricing("80.00", "100.00")
        (100.0, 80.0)
        >>> resolve_pricing("80.00", None)
        (80.0, 0.0)
    """
    price = parse_price(price_raw)
    compare_at = parse_price(compare_at_raw)
    if compare_at > price:
        return compare_at, price
    return price, 0.0


class ProductNormalizer:
    """
    Builds NormalizedProduct documents.

    Usage:
        normalizer = ProductNormalizer(catalog, rehoster, taxonomy)
        product_doc = normalizer.normalize(shopify_product, mode="draft")
    """

    def __init__(
        self,
        catalog: ShopifyCatalogClient,
        rehoster: CloudinaryRehoster,
        taxonomy: SpecTaxonomy,
        generic_namespaces: Iterable[str] = ("custom", "global"),
        short_description_length: int = 250,
        default_family: str = "UNCATEGORISED",
        robots: str = "index, follow",
    ):
        self.catalog = catalog
        self.rehoster = rehoster
        self.taxonomy = taxonomy
        self.resolver = SpecResolver(taxonomy)
        self.generic_namespaces = list(generic_namespaces)
        self.short_description_length = short_description_length
        self.default_family = default_family
        self.robots = robots

    def family_title(self, product: SourceProduct) -> str:
        return (product.product_type or "").strip().upper() or self.default_family

    def normalize(
        self,
        product: SourceProduct,
        mode: str = "draft",
        on_progress: Optional[ProgressLog] = None,
    ) -> NormalizedProduct:
        """
        Normalize one Shopify product.

        Args:
            product: Source product
            mode: Import mode; becomes the document status as-is
            on_progress: Optional callback for step messages

        Returns:
            NormalizedProduct ready to insert
        """
        if mode not in IMPORT_MODES:
            raise ValueError(f"Unknown import mode: {mode}")

        def log(msg: str) -> None:
            logger.debug(msg)
            if on_progress:
                on_progress(msg)

        # Basic field mapping
        variant = product.primary_variant
        item_description = product.title.strip()
        short_description = strip_html(product.body_html)[:self.short_description_length]
        slug = to_slug(product.handle or item_description)
        regular_price, sale_price = resolve_pricing(
            variant.price if variant else None,
            variant.compare_at_price if variant else None,
        )
        family = self.family_title(product)

        # Images
        log(f'Uploading images for "{item_description}"...')
        sorted_images = sorted(product.images, key=lambda img: img.position)
        uploaded = self.rehoster.rehost_many(img.src for img in sorted_images)
        if len(uploaded) < len(sorted_images):
            logger.warning("%s: %d of %d image(s) uploaded",
                           item_description, len(uploaded), len(sorted_images))

        main_image = uploaded[0] if uploaded else ""
        raw_image = uploaded[1] if len(uploaded) > 1 else ""
        gallery_images = uploaded[2:]

        # Metafields and specs
        log("Fetching metafields...")
        metafields = self.catalog.fetch_metafields(product.id)
        raw_specs = extract_raw_specs(product, metafields, self.generic_namespaces)

        log(f"Resolving {len(raw_specs)} spec(s)...")
        resolved = self.resolver.resolve(raw_specs)

        # Product family
        log(f'Upserting product family "{family}"...')
        self.taxonomy.upsert_product_family(family, resolved.spec_group_ids)

        seo = SeoPayload(
            item_description=item_description,
            description=short_description,
            og_image=main_image,
            robots=self.robots,
            last_updated=utc_now_iso(),
        )

        return NormalizedProduct(
            item_description=item_description,
            short_description=short_description,
            slug=slug,
            eco_item_code=item_code_for(product),
            regular_price=regular_price,
            sale_price=sale_price,
            technical_specs=resolved.technical_specs,
            main_image=main_image,
            raw_image=raw_image,
            gallery_images=gallery_images,
            product_family=family,
            brand=(product.vendor or "").strip(),
            status=mode,
            seo=seo,
            import_source=IMPORT_SOURCE,
            shopify_product_id=product.id,
        )
