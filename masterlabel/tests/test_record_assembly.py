import pytest

from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.schemas.record import CertificationInput, MaterialInput, PartyInput
from masterlabel.app.services.assembler import (
    assemble_label_record,
    build_dpp_url,
    format_party_address,
    packaging_material_codes,
)
from masterlabel.app.services.product_group import detect_product_group
from masterlabel.tests.fixtures.label_data import sample_batch, sample_importer, sample_product


# ---------------------------------------------------------------------------
# Product group detection
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "category, group",
    [
        ("Electronics", "electronics"),
        ("consumer electronics", "electronics"),
        ("USB Charger Accessories", "electronics"),
        ("Footwear", "textiles"),
        ("Winter Jacket", "textiles"),
        ("Puzzle Sets", "toys"),
        ("Kitchenware", "household"),
        ("Food contact containers", "household"),
        ("Books", "general"),
        ("", "general"),
    ],
)
def test_detect_product_group(category, group):
    assert detect_product_group(category) == group


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_packaging_material_codes_skip_product_materials_and_dedupe():
    materials = [
        MaterialInput(name="Glass", type="product"),
        MaterialInput(name="Corrugated cardboard box", type="packaging"),
        MaterialInput(name="Paper filler", type="packaging"),
        MaterialInput(name="Bubble wrap", type="packaging"),
        MaterialInput(name="Mystery material", type="packaging"),
    ]

    assert packaging_material_codes(materials) == ["PAP 20", "LDPE 4"]


def test_format_party_address():
    assert format_party_address(sample_importer()) == "Kade 5, 1011 AB Amsterdam, NL"
    assert format_party_address(PartyInput(name="Nameless")) == ""


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({"base_url": "https://dpp.example.com/"}, "https://dpp.example.com/p/123/S1"),
        (
            {"base_url": "https://dpp.example.com", "resolver_format": "gs1"},
            "https://dpp.example.com/01/123/21/S1",
        ),
        (
            {"base_url": "https://ignored.example", "custom_base_url": "https://id.brand.eu/"},
            "https://id.brand.eu/01/123/21/S1",
        ),
        ({}, "/p/123/S1"),
    ],
)
def test_build_dpp_url(kwargs, expected):
    assert build_dpp_url("123", "S1", **kwargs) == expected


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def test_assemble_product_only():
    record = assemble_label_record(sample_product())
    values = record.values

    assert values[FieldKey.PRODUCT_NAME.value] == "Smart Kettle 2000"
    assert values[FieldKey.MADE_IN.value] == "CN"
    assert values[FieldKey.SERIAL_NUMBER.value] is None
    assert values[FieldKey.EPREL_NUMBER.value] == "EPREL-123"
    assert values[FieldKey.WEEE_NUMBER.value] == "DE 12345678"
    assert record.material_codes == ["PAP 20", "LDPE 4"]
    assert record.product_group == "electronics"
    assert record.dpp_url == ""


def test_batch_overrides_product_data():
    batch = sample_batch(
        net_weight=900,
        materials_override=[MaterialInput(name="Glass jar", type="packaging")],
        certifications_override=[CertificationInput(name="CE")],
    )

    record = assemble_label_record(sample_product(batch_number="P-1"), batch, dpp_url="/p/x/y")

    assert record.values[FieldKey.BATCH_NUMBER.value] == "B-2026-01"
    assert record.values[FieldKey.SERIAL_NUMBER.value] == "SN-0001"
    assert record.values[FieldKey.NET_WEIGHT.value] == 900
    assert record.values[FieldKey.GROSS_WEIGHT.value] == 1520
    assert record.values[FieldKey.QUANTITY.value] == 12
    assert record.material_codes == ["GL 70"]
    assert record.certifications == ["CE"]
    assert record.dpp_url == "/p/x/y"


def test_product_batch_number_used_without_batch_override():
    record = assemble_label_record(
        sample_product(batch_number="P-1"), sample_batch(batch_number=None)
    )

    assert record.values[FieldKey.BATCH_NUMBER.value] == "P-1"


def test_supplier_records_populate_party_fields():
    manufacturer = PartyInput(
        name="Acme Manufacturing Ltd",
        country="CN",
        website="https://acme.example",
        email="info@acme.example",
    )

    record = assemble_label_record(
        sample_product(),
        manufacturer=manufacturer,
        importer=sample_importer(),
    )
    values = record.values

    assert values[FieldKey.MANUFACTURER_NAME.value] == "Acme Manufacturing Ltd"
    # No supplier address: the product's free-text address is kept.
    assert values[FieldKey.MANUFACTURER_ADDRESS.value] == "Hauptstrasse 1, 10115 Berlin, DE"
    assert values[FieldKey.MANUFACTURER_WEBSITE.value] == "https://acme.example"
    assert values[FieldKey.IMPORTER_NAME.value] == "EU Import BV"
    assert values[FieldKey.IMPORTER_ADDRESS.value] == "Kade 5, 1011 AB Amsterdam, NL"
    assert values[FieldKey.IMPORTER_EORI.value] == "NL123456789"
    assert record.manufacturer_country == "CN"


def test_supplier_with_country_only_keeps_product_address():
    record = assemble_label_record(
        sample_product(),
        manufacturer=PartyInput(name="Acme Manufacturing Ltd", country="CN"),
    )

    assert record.values[FieldKey.MANUFACTURER_ADDRESS.value] == "Hauptstrasse 1, 10115 Berlin, DE"


def test_supplier_street_address_wins_over_product_address():
    manufacturer = PartyInput(
        name="Acme Manufacturing Ltd",
        address="1 Factory Road",
        city="Shenzhen",
        country="CN",
    )

    record = assemble_label_record(sample_product(), manufacturer=manufacturer)

    assert record.values[FieldKey.MANUFACTURER_ADDRESS.value] == "1 Factory Road, Shenzhen, CN"


def test_supplier_without_street_falls_back_to_formatted_address():
    record = assemble_label_record(
        sample_product(manufacturer_address=None),
        manufacturer=PartyInput(name="Acme Manufacturing Ltd", city="Shenzhen", country="CN"),
    )

    assert record.values[FieldKey.MANUFACTURER_ADDRESS.value] == "Shenzhen, CN"
