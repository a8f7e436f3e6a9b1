"""Tests for catalog_import/importer/normalizer.py"""

import pytest

from catalog_import.common.constants import IMPORT_SOURCE, UNGROUPED_SPEC_GROUP
from catalog_import.importer import ProductNormalizer, item_code_for, resolve_pricing
from catalog_import.models import SourceImage, SourceMetafield, SourceOption, SpecEntry


@pytest.fixture
def normalizer(fake_catalog, fake_rehoster, taxonomy):
    return ProductNormalizer(fake_catalog, fake_rehoster, taxonomy)


class TestResolvePricing:
    def test_discounted(self):
        assert resolve_pricing("80.00", "100.00") == (100.0, 80.0)

    def test_no_compare_price(self):
        assert resolve_pricing("80.00", None) == (80.0, 0.0)

    def test_compare_price_not_higher(self):
        assert resolve_pricing("80.00", "70.00") == (80.0, 0.0)
        assert resolve_pricing("80.00", "80.00") == (80.0, 0.0)

    @pytest.mark.parametrize("price,compare", [
        ("0", None), ("10", "5"), ("10", "15"), ("", "12"), ("abc", ""),
    ])
    def test_regular_never_below_sale(self, price, compare):
        regular, sale = resolve_pricing(price, compare)
        assert regular >= sale


class TestItemCode:
    def test_uses_sku(self, make_product):
        assert item_code_for(make_product(sku=" LP-1 ")) == "LP-1"

    def test_falls_back_to_product_id(self, make_product):
        assert item_code_for(make_product(product_id=55, sku="")) == "55"


class TestNormalize:
    def test_identity_fields(self, normalizer, make_product):
        result = normalizer.normalize(make_product(title="  LED Panel 60x60 "), "draft")

        assert result.item_description == "LED Panel 60x60"
        assert result.short_description == "Slim LED panel for office ceilings."
        assert result.slug == "led-panel-60x60"
        assert result.eco_item_code == "LP-6060"
        assert result.lit_item_code == ""
        assert result.brand == "Lumina"

    def test_slug_prefers_handle(self, normalizer, make_product):
        product = make_product()
        product.handle = "custom-Handle_2"
        assert normalizer.normalize(product).slug == "custom-handle-2"

    def test_short_description_truncated(self, fake_catalog, fake_rehoster, taxonomy, make_product):
        normalizer = ProductNormalizer(fake_catalog, fake_rehoster, taxonomy,
                                       short_description_length=10)
        assert normalizer.normalize(make_product()).short_description == "Slim LED p"

    def test_pricing(self, normalizer, make_product):
        result = normalizer.normalize(make_product(price="80.00", compare_at_price="100.00"))
        assert (result.regular_price, result.sale_price) == (100.0, 80.0)

    def test_images_by_position(self, normalizer, make_product, fake_rehoster):
        images = [
            SourceImage(src="https://cdn.shopify.com/c.jpg", position=3),
            SourceImage(src="https://cdn.shopify.com/a.jpg", position=1),
            SourceImage(src="https://cdn.shopify.com/d.jpg", position=4),
            SourceImage(src="https://cdn.shopify.com/b.jpg", position=2),
        ]

        result = normalizer.normalize(make_product(images=images))

        assert fake_rehoster.calls == [[
            "https://cdn.shopify.com/a.jpg", "https://cdn.shopify.com/b.jpg",
            "https://cdn.shopify.com/c.jpg", "https://cdn.shopify.com/d.jpg",
        ]]
        assert result.main_image == "https://res.cloudinary.com/test/a.jpg"
        assert result.raw_image == "https://res.cloudinary.com/test/b.jpg"
        assert result.gallery_images == [
            "https://res.cloudinary.com/test/c.jpg", "https://res.cloudinary.com/test/d.jpg",
        ]
        assert result.qr_code_image == ""
        assert result.seo.og_image == result.main_image

    def test_no_images(self, normalizer, make_product):
        result = normalizer.normalize(make_product(images=[]))
        assert result.main_image == ""
        assert result.raw_image == ""
        assert result.gallery_images == []

    def test_failed_uploads_shorten_gallery(self, normalizer, make_product, fake_rehoster):
        fake_rehoster.failing.add("https://cdn.shopify.com/s/files/panel-1.jpg")

        result = normalizer.normalize(make_product())

        assert result.main_image == "https://res.cloudinary.com/test/panel-2.jpg"
        assert result.raw_image == ""

    def test_compound_option_spec(self, normalizer, make_product):
        product = make_product(
            options=[SourceOption("Dimensions/Width", ["10cm"])],
            option_values=("10cm", None, None),
        )

        result = normalizer.normalize(product)

        dims = [t for t in result.technical_specs if t.spec_group == "DIMENSIONS"]
        assert dims and SpecEntry("Width", "10cm") in dims[0].specs

    def test_ungrouped_metafield_spec(self, normalizer, make_product, fake_catalog, memory_store):
        product = make_product()
        fake_catalog.metafields[product.id] = [SourceMetafield("custom", "weight_kg", "5")]

        result = normalizer.normalize(product)

        assert memory_store.find_one("specItems", "label", "Weight Kg") is not None
        ungrouped = [t for t in result.technical_specs if t.spec_group == UNGROUPED_SPEC_GROUP]
        assert ungrouped[0].specs == [SpecEntry("Weight Kg", "5")]

    def test_family_upserted_with_spec_groups(self, normalizer, make_product, memory_store):
        product = make_product(
            product_type=" Lighting ",
            options=[SourceOption("Dimensions/Width", ["10cm"])],
        )

        result = normalizer.normalize(product)

        family = memory_store.find_one("productfamilies", "title", "LIGHTING")
        group = memory_store.find_one("specs", "name", "DIMENSIONS")
        assert result.product_family == "LIGHTING"
        assert family["specifications"] == [group["id"]]

    def test_default_family(self, normalizer, make_product, memory_store):
        result = normalizer.normalize(make_product(product_type=""))
        assert result.product_family == "UNCATEGORISED"
        assert memory_store.find_one("productfamilies", "title", "UNCATEGORISED") is not None

    @pytest.mark.parametrize("mode", ["draft", "public"])
    def test_status_mirrors_mode(self, normalizer, make_product, mode):
        # Source status is ignored on purpose
        assert normalizer.normalize(make_product(status="active"), mode).status == mode

    def test_unknown_mode(self, normalizer, make_product):
        with pytest.raises(ValueError):
            normalizer.normalize(make_product(), "archived")

    def test_seo_and_provenance(self, normalizer, make_product):
        result = normalizer.normalize(make_product(product_id=4242))

        assert result.seo.item_description == result.item_description
        assert result.seo.description == result.short_description
        assert result.seo.canonical == ""
        assert result.seo.robots == "index, follow"
        assert result.seo.last_updated
        assert result.import_source == IMPORT_SOURCE
        assert result.shopify_product_id == 4242

    def test_progress_messages(self, normalizer, make_product):
        messages = []
        normalizer.normalize(make_product(), on_progress=messages.append)
        assert any("Uploading images" in m for m in messages)
        assert any("metafields" in m for m in messages)

    def test_document_uses_cms_field_names(self, normalizer, make_product):
        doc = normalizer.normalize(make_product(), "public").to_document()

        assert {
            "productClass", "itemDescription", "shortDescription", "slug", "ecoItemCode",
            "litItemCode", "regularPrice", "salePrice", "technicalSpecs", "mainImage",
            "rawImage", "qrCodeImage", "galleryImages", "website", "websites",
            "productFamily", "brand", "applications", "status", "seo", "importSource",
            "shopifyProductId",
        } == set(doc)
        assert doc["website"] == [] and doc["websites"] == [] and doc["applications"] == []
        assert set(doc["seo"]) == {
            "itemDescription", "description", "canonical", "ogImage", "robots", "lastUpdated",
        }
