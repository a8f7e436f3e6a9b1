"""Tests for catalog_import/specs/extractor.py"""

from catalog_import.models import RawSpec, SourceMetafield, SourceOption
from catalog_import.specs import extract_raw_specs, specs_from_metafields, specs_from_options
from catalog_import.specs.extractor import is_default_option


class TestSpecsFromMetafields:
    def test_generic_namespace_is_ungrouped(self):
        specs = specs_from_metafields([SourceMetafield("custom", "weight_kg", "5")])
        assert specs == [RawSpec(group_name=None, label="Weight Kg", value="5")]

    def test_global_and_empty_namespaces_are_ungrouped(self):
        specs = specs_from_metafields([
            SourceMetafield("global", "finish", "Matte"),
            SourceMetafield("", "ip_rating", "IP65"),
        ])
        assert [s.group_name for s in specs] == [None, None]

    def test_namespace_becomes_group(self):
        specs = specs_from_metafields([SourceMetafield("optics", "beam_angle", "24°")])
        assert specs == [RawSpec(group_name="OPTICS", label="Beam Angle", value="24°")]

    def test_empty_values_skipped(self):
        assert specs_from_metafields([SourceMetafield("optics", "lens", "")]) == []

    def test_custom_generic_namespaces(self):
        specs = specs_from_metafields(
            [SourceMetafield("custom", "finish", "Matte")],
            generic_namespaces=["global"],
        )
        assert specs[0].group_name == "CUSTOM"


class TestSpecsFromOptions:
    def test_compound_option_name(self, make_product):
        product = make_product(
            options=[SourceOption("Dimensions/Width", ["10cm", "20cm"])],
            option_values=("10cm", None, None),
        )
        assert specs_from_options(product) == [
            RawSpec(group_name="DIMENSIONS", label="Width", value="10cm")
        ]

    def test_plain_option_is_ungrouped(self, make_product):
        product = make_product(
            options=[SourceOption("Color", ["Black", "White"])],
            option_values=("White", None, None),
        )
        assert specs_from_options(product) == [RawSpec(group_name=None, label="Color", value="White")]

    def test_uses_positional_variant_slot(self, make_product):
        product = make_product(
            options=[SourceOption("Color", ["Black"]), SourceOption("Wattage", ["10W", "20W"])],
            option_values=("Black", "20W", None),
        )
        assert [s.value for s in specs_from_options(product)] == ["Black", "20W"]

    def test_falls_back_to_first_declared_value(self, make_product):
        product = make_product(
            options=[SourceOption("Color", ["Black", "White"])],
            option_values=(None, None, None),
        )
        assert specs_from_options(product)[0].value == "Black"

    def test_skips_default_title_option(self, make_product):
        product = make_product(
            options=[SourceOption("Title", ["Default Title"])],
            option_values=("Default Title", None, None),
        )
        assert specs_from_options(product) == []

    def test_skips_empty_values(self, make_product):
        product = make_product(options=[SourceOption("Color", [])])
        assert specs_from_options(product) == []

    def test_only_first_delimiter_splits(self, make_product):
        product = make_product(
            options=[SourceOption("Electrical/Input/Output", ["12V"])],
        )
        spec = specs_from_options(product)[0]
        assert spec.group_name == "ELECTRICAL"
        assert spec.label == "Input/Output"


def test_extract_combines_metafields_then_options(make_product):
    product = make_product(
        options=[SourceOption("Dimensions/Width", ["10cm"])],
        option_values=("10cm", None, None),
    )
    metafields = [SourceMetafield("custom", "weight_kg", "5")]

    specs = extract_raw_specs(product, metafields)

    assert specs == [
        RawSpec(group_name=None, label="Weight Kg", value="5"),
        RawSpec(group_name="DIMENSIONS", label="Width", value="10cm"),
    ]


class TestIsDefaultOption:
    def test_placeholder_option(self):
        assert is_default_option(" Title ", ["Default Title"])

    def test_real_title_option(self):
        assert not is_default_option("Title", ["Mr", "Ms"])

    def test_no_values(self):
        assert not is_default_option("Title", [])
