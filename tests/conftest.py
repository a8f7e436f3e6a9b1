"""Shared test fixtures."""

from typing import Dict, List

import pytest

from catalog_import.models import (
    SourceImage,
    SourceMetafield,
    SourceOption,
    SourceProduct,
    SourceVariant,
)
from catalog_import.store import MemoryDocumentStore
from catalog_import.taxonomy import SpecTaxonomy


class FakeCatalog:
    """In-memory catalog that records which products had metafields fetched."""

    def __init__(self, products: List[SourceProduct] = None,
                 metafields: Dict[int, List[SourceMetafield]] = None):
        self.products = list(products or [])
        self.metafields = metafields or {}
        self.fetch_all_calls: List[str] = []
        self.metafield_calls: List[int] = []

    def fetch_all(self, mode: str = "draft") -> List[SourceProduct]:
        self.fetch_all_calls.append(mode)
        return list(self.products)

    def fetch_metafields(self, product_id: int) -> List[SourceMetafield]:
        self.metafield_calls.append(product_id)
        return list(self.metafields.get(product_id, []))


class FakeRehoster:
    """Maps every URL to a fake Cloudinary URL; URLs in `failing` are dropped."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls: List[List[str]] = []

    def rehost_many(self, urls) -> List[str]:
        urls = list(urls)
        self.calls.append(urls)
        return [
            "https://res.cloudinary.com/test/" + u.rsplit("/", 1)[-1]
            for u in urls if u and u not in self.failing
        ]


def build_product(
    product_id: int = 1001,
    title: str = "LED Panel 60x60",
    sku: str = "LP-6060",
    price: str = "80.00",
    compare_at_price=None,
    product_type: str = "Lighting",
    status: str = "draft",
    options=None,
    option_values=(None, None, None),
    images=None,
) -> SourceProduct:
    """Build a SourceProduct with sensible defaults."""
    if options is None:
        options = [SourceOption(name="Title", values=["Default Title"])]
    if images is None:
        images = [
            SourceImage(src="https://cdn.shopify.com/s/files/panel-2.jpg", position=2),
            SourceImage(src="https://cdn.shopify.com/s/files/panel-1.jpg", position=1),
        ]
    return SourceProduct(
        id=product_id,
        title=title,
        handle="",
        body_html="<p>Slim <strong>LED</strong> panel for office ceilings.</p>",
        product_type=product_type,
        vendor="Lumina ",
        status=status,
        tags="led, panel",
        images=images,
        variants=[SourceVariant(
            sku=sku,
            price=price,
            compare_at_price=compare_at_price,
            option1=option_values[0],
            option2=option_values[1],
            option3=option_values[2],
        )],
        options=options,
    )


@pytest.fixture
def make_product():
    """Factory for SourceProduct objects."""
    return build_product


@pytest.fixture
def memory_store():
    return MemoryDocumentStore()


@pytest.fixture
def taxonomy(memory_store):
    return SpecTaxonomy(memory_store)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def fake_rehoster():
    return FakeRehoster()


@pytest.fixture
def shopify_product_json():
    """A products.json entry as returned by Shopify."""
    return {
        "id": 7001,
        "title": "Track Light 20W",
        "handle": "track-light-20w",
        "body_html": "<p>20W LED COB track light, 3000K, 24 degree beam.</p>",
        "product_type": "Track Lights",
        "vendor": "Lumina",
        "status": "active",
        "tags": "track, cob",
        "images": [
            {"id": 1, "src": "https://cdn.shopify.com/s/files/track-b.jpg", "alt": None, "position": 2},
            {"id": 2, "src": "https://cdn.shopify.com/s/files/track-a.jpg", "alt": "Front", "position": 1},
        ],
        "variants": [
            {
                "id": 11, "sku": "TL-20", "price": "45.00", "compare_at_price": "60.00",
                "title": "Black / 3000K", "option1": "Black", "option2": "3000K", "option3": None,
            },
        ],
        "options": [
            {"name": "Color", "values": ["Black", "White"]},
            {"name": "Light/Color Temperature", "values": ["3000K", "4000K"]},
        ],
    }
