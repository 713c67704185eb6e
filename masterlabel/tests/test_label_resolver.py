import pytest
from pydantic import ValidationError

from masterlabel.app.defaults.factory import create_blank_design
from masterlabel.app.registry.registry import get_default_design_for_group
from masterlabel.app.schemas.elements import (
    BarcodeElement,
    DividerElement,
    FieldValueElement,
    ImageElement,
    MaterialCodeElement,
    PackageCounterElement,
    PictogramElement,
    TextElement,
)
from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.services.resolver import (
    MultiLabelExportConfig,
    PackageCounter,
    format_field_value,
    format_package_counter,
    resolve_design,
    resolve_label_series,
)
from masterlabel.tests.fixtures.label_data import sample_record, simple_design


def _design_with(*elements):
    design = create_blank_design()
    design.elements = list(elements)
    return design


def _resolved_ids(label):
    return [item.element.id for section in label.sections for item in section.elements]


def test_sections_and_elements_render_in_sort_order():
    design = _design_with(
        TextElement(id="late", section_id="identity", sort_order=2),
        TextElement(id="early", section_id="identity", sort_order=0),
        TextElement(id="dpp", section_id="dpp", sort_order=0),
    )
    design.sections[0].sort_order = 10

    label = resolve_design(design, sample_record())

    assert [s.section.id for s in label.sections] == ["dpp", "identity"]
    assert _resolved_ids(label) == ["dpp", "early", "late"]


def test_equal_sort_orders_keep_list_order():
    design = _design_with(
        TextElement(id="first", section_id="identity", sort_order=1),
        TextElement(id="second", section_id="identity", sort_order=1),
    )

    assert _resolved_ids(resolve_design(design, sample_record())) == ["first", "second"]


def test_hidden_sections_are_skipped():
    design = simple_design()
    design.sections[1].visible = False

    label = resolve_design(design, sample_record())

    assert [s.section.id for s in label.sections] == ["identity"]


def test_empty_sections_are_dropped():
    label = resolve_design(simple_design(), sample_record())

    assert [s.section.id for s in label.sections] == ["identity", "dpp"]


def test_field_value_binding():
    design = _design_with(
        FieldValueElement(
            id="f", section_id="identity", field_key=FieldKey.NET_WEIGHT, label_text="Net"
        ),
        FieldValueElement(
            id="g", section_id="identity", field_key=FieldKey.PRODUCT_NAME, uppercase=True,
            show_label=False,
        ),
    )

    items = resolve_design(design, sample_record()).sections[0].elements

    assert (items[0].text, items[0].label) == ("1.20 kg", "Net")
    assert (items[1].text, items[1].label) == ("SMART KETTLE 2000", None)


def test_field_label_defaults_to_key():
    design = _design_with(
        FieldValueElement(id="f", section_id="identity", field_key=FieldKey.GTIN),
    )

    item = resolve_design(design, sample_record()).sections[0].elements[0]

    assert item.label == "gtin"


def test_missing_field_value_is_dropped():
    design = _design_with(
        FieldValueElement(id="f", section_id="identity", field_key=FieldKey.HS_CODE),
    )

    assert resolve_design(design, sample_record()).sections == []


def test_qr_code_targets_dpp_url():
    label = resolve_design(simple_design(), sample_record())
    qr = label.sections[1].elements[1]

    assert qr.text == "https://dpp.example.com/p/4012345678901/SN-0001"
    assert qr.label == "Digital Product Passport"


def test_material_codes_auto_populate():
    design = _design_with(
        MaterialCodeElement(id="auto", section_id="sustainability", codes=["GL 70"]),
        MaterialCodeElement(
            id="manual", section_id="sustainability", codes=["GL 70"], auto_populate=False
        ),
    )

    items = resolve_design(design, sample_record()).sections[0].elements

    assert items[0].codes == ["PAP 20", "LDPE 4"]
    assert items[1].codes == ["GL 70"]


def test_material_codes_fall_back_to_literal_codes():
    design = _design_with(
        MaterialCodeElement(id="auto", section_id="sustainability", codes=["GL 70"]),
    )

    label = resolve_design(design, sample_record(material_codes=[]))

    assert label.sections[0].elements[0].codes == ["GL 70"]


def test_empty_material_codes_are_dropped():
    design = _design_with(MaterialCodeElement(id="m", section_id="sustainability"))

    assert resolve_design(design, sample_record(material_codes=[])).sections == []


def test_barcode_value():
    design = _design_with(
        BarcodeElement(id="auto", section_id="identity"),
        BarcodeElement(id="manual", section_id="identity", auto_populate=False, value="123"),
        BarcodeElement(id="empty", section_id="identity", auto_populate=False),
    )

    items = resolve_design(design, sample_record()).sections[0].elements

    assert [(i.element.id, i.text) for i in items] == [
        ("auto", "4012345678901"),
        ("manual", "123"),
    ]


def test_pictogram_resolution():
    design = _design_with(
        PictogramElement(id="known", section_id="compliance", pictogram_id="weee-bin"),
        PictogramElement(id="unknown", section_id="compliance", pictogram_id="unicorn"),
        PictogramElement(id="tenant", section_id="compliance", pictogram_id="db-1", source="database"),
    )

    items = resolve_design(design, sample_record()).sections[0].elements

    assert [i.element.id for i in items] == ["known", "tenant"]
    assert items[0].pictogram.id == "weee-bin"
    assert items[1].pictogram is None


def test_image_without_source_is_dropped():
    design = _design_with(
        ImageElement(id="blank", section_id="custom"),
        ImageElement(id="logo", section_id="custom", src="https://example.com/logo.png"),
    )
    design.sections[4].visible = True

    assert _resolved_ids(resolve_design(design, sample_record())) == ["logo"]


def test_presentational_elements_pass_through():
    design = _design_with(DividerElement(id="d", section_id="identity"))

    assert _resolved_ids(resolve_design(design, sample_record())) == ["d"]


def test_package_counter_requires_counter():
    design = _design_with(PackageCounterElement(id="c", section_id="identity"))

    assert resolve_design(design, sample_record()).sections == []

    label = resolve_design(
        design, sample_record(), counter=PackageCounter(current=2, total=5)
    )
    assert label.sections[0].elements[0].text == "Package 2 of 5"


def test_package_counter_format_override_and_uppercase():
    design = _design_with(
        PackageCounterElement(id="c", section_id="identity", format="x-of-y", uppercase=True)
    )

    label = resolve_design(
        design,
        sample_record(),
        counter=PackageCounter(current=1, total=3, format="box-x-of-y"),
        locale="de",
    )

    assert label.sections[0].elements[0].text == "KARTON 1 VON 3"


@pytest.mark.parametrize(
    "fmt, locale, expected",
    [
        ("x-of-y", "en", "3 of 7"),
        ("x-slash-y", "en", "3/7"),
        ("package-x-of-y", "en", "Package 3 of 7"),
        ("box-x-of-y", "en", "Box 3 of 7"),
        ("parcel-x-of-y", "en", "Parcel 3 of 7"),
        ("x-of-y", "de", "3 von 7"),
        ("x-slash-y", "de", "3/7"),
        ("package-x-of-y", "de", "Paket 3 von 7"),
        ("box-x-of-y", "de", "Karton 3 von 7"),
        ("parcel-x-of-y", "de", "Paket 3 von 7"),
    ],
)
def test_format_package_counter(fmt, locale, expected):
    assert format_package_counter(3, 7, fmt, locale) == expected


@pytest.mark.parametrize(
    "key, value, expected",
    [
        ("grossWeight", 1520, "1.52 kg"),
        ("quantity", 12, "12"),
        ("quantity", 12.0, "12"),
        ("recycledContentPercentage", 42.5, "42.5"),
        ("productName", "  Kettle ", "Kettle"),
        ("productName", None, ""),
    ],
)
def test_format_field_value(key, value, expected):
    assert format_field_value(key, value) == expected


def test_label_series_numbers_every_package():
    design = get_default_design_for_group("logistics")

    labels = resolve_label_series(
        design,
        sample_record(),
        MultiLabelExportConfig(label_count=3, start_number=1, format="x-of-y"),
    )

    counters = [
        item.text
        for label in labels
        for section in label.sections
        for item in section.elements
        if isinstance(item.element, PackageCounterElement)
    ]
    assert counters == ["1 of 3", "2 of 3", "3 of 3"]


def test_label_series_bounds():
    with pytest.raises(ValidationError):
        MultiLabelExportConfig(label_count=0)
    with pytest.raises(ValidationError):
        MultiLabelExportConfig(label_count=1000)


def test_resolved_label_carries_page_geometry():
    design = simple_design()

    label = resolve_design(design, sample_record(), locale="de")

    assert label.page_width == design.page_width
    assert label.padding == design.padding
    assert label.locale == "de"
    assert label.dpp_url == sample_record().dpp_url
