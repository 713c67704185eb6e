"""
Built-in label templates.

One builder per product category. Each builder starts from a blank design
and appends a hand-ordered list of elements expressing that category's
typical compliance requirements. Only the Logistics template replaces the
default sections, with five logistics zones.

Sort orders are assigned from list position within each section, so the
declaration order of a builder is its rendering order.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from masterlabel.app.defaults.factory import create_blank_design
from masterlabel.app.defaults.ids import IdGenerator, default_id_generator
from masterlabel.app.schemas.design import LabelDesign, LabelTemplate, TemplateCategory
from masterlabel.app.schemas.elements import (
    BarcodeElement,
    ComplianceBadgeElement,
    FieldValueElement,
    IconTextElement,
    LabelElement,
    MaterialCodeElement,
    PackageCounterElement,
    PictogramElement,
    QRCodeElement,
    TextElement,
)
from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.schemas.sections import LabelSection


BUILTIN_TIMESTAMP = datetime(2026, 1, 1, tzinfo=timezone.utc)

HEADING_COLOR = "#6b7280"

LOGISTICS_HEADER = "logistics-header"
LOGISTICS_IDENTITY = "logistics-identity"
LOGISTICS_COMPLIANCE = "logistics-compliance"
LOGISTICS_CODES = "logistics-codes"
LOGISTICS_HANDLING = "logistics-handling"


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def _numbered(elements: List[LabelElement]) -> List[LabelElement]:
    """Assign sort orders by list position within each section."""
    positions: Dict[str, int] = {}
    for element in elements:
        element.sort_order = positions.get(element.section_id, 0)
        positions[element.section_id] = element.sort_order + 1
    return elements


def _heading(ids: IdGenerator, section: str, content: str) -> TextElement:
    return TextElement(
        id=ids(),
        section_id=section,
        content=content,
        font_size=5,
        font_weight="bold",
        color=HEADING_COLOR,
        uppercase=True,
    )


def _product_name(ids: IdGenerator, section: str) -> FieldValueElement:
    return FieldValueElement(
        id=ids(),
        section_id=section,
        field_key=FieldKey.PRODUCT_NAME,
        show_label=False,
        font_size=9,
        font_weight="bold",
        layout="stacked",
    )


def _field(
    ids: IdGenerator,
    section: str,
    key: FieldKey,
    *,
    label: Optional[str] = None,
    font_size: float = 6,
    bold: bool = False,
) -> FieldValueElement:
    return FieldValueElement(
        id=ids(),
        section_id=section,
        field_key=key,
        show_label=True,
        label_text=label,
        font_size=font_size,
        font_weight="bold" if bold else "normal",
        layout="inline",
    )


def _badge(
    ids: IdGenerator,
    section: str,
    badge_id: str,
    symbol: str,
    *,
    show_label: bool = False,
) -> ComplianceBadgeElement:
    return ComplianceBadgeElement(
        id=ids(),
        section_id=section,
        badge_id=badge_id,
        symbol=symbol,
        show_label=show_label,
    )


def _pictogram(
    ids: IdGenerator,
    section: str,
    pictogram_id: str,
    size: float,
    label: Optional[str] = None,
) -> PictogramElement:
    return PictogramElement(
        id=ids(),
        section_id=section,
        pictogram_id=pictogram_id,
        size=size,
        show_label=label is not None,
        label_text=label,
    )


def _qr(ids: IdGenerator, section: str, size: float = 52) -> QRCodeElement:
    return QRCodeElement(id=ids(), section_id=section, size=size)


def _material_codes(ids: IdGenerator, section: str) -> MaterialCodeElement:
    return MaterialCodeElement(id=ids(), section_id=section)


def _identity_block(ids: IdGenerator, *, with_importer: bool) -> List[LabelElement]:
    elements: List[LabelElement] = [
        _heading(ids, "identity", "IDENTITY & TRACEABILITY"),
        _product_name(ids, "identity"),
        _field(ids, "identity", FieldKey.GTIN, label="Model/SKU", bold=True),
        _field(ids, "identity", FieldKey.BATCH_NUMBER, bold=True),
        _field(ids, "identity", FieldKey.MANUFACTURER_NAME),
    ]
    if with_importer:
        elements.append(
            _field(ids, "identity", FieldKey.IMPORTER_NAME, label="EU Importer")
        )
    return elements


def _dpp_block(ids: IdGenerator) -> List[LabelElement]:
    return [
        _heading(ids, "dpp", "DIGITAL PRODUCT PASSPORT"),
        _qr(ids, "dpp"),
    ]


def _template(
    *,
    template_id: str,
    name: str,
    description: str,
    category: TemplateCategory,
    design: LabelDesign,
    variant: str = "universal",
) -> LabelTemplate:
    return LabelTemplate(
        id=template_id,
        name=name,
        description=description,
        category=category,
        variant=variant,
        design=design,
        is_default=True,
        created_at=BUILTIN_TIMESTAMP,
        updated_at=BUILTIN_TIMESTAMP,
    )


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_electronics_template(ids: IdGenerator = default_id_generator) -> LabelTemplate:
    design = create_blank_design()
    design.elements = _numbered([
        *_identity_block(ids, with_importer=True),
        *_dpp_block(ids),
        _heading(ids, "compliance", "COMPLIANCE"),
        _badge(ids, "compliance", "ce", "CE"),
        _badge(ids, "compliance", "weee", "WEEE"),
        _badge(ids, "compliance", "rohs", "RoHS"),
        _pictogram(ids, "compliance", "weee-bin", 20),
        _field(ids, "compliance", FieldKey.EPREL_NUMBER, label="EPREL", font_size=5.5),
        _heading(ids, "sustainability", "SUSTAINABILITY & DISPOSAL"),
        _material_codes(ids, "sustainability"),
        _pictogram(ids, "sustainability", "energy-arrow", 18, label="Energy"),
    ])
    return _template(
        template_id="builtin-electronics",
        name="Electronics Standard",
        description="CE, WEEE, RoHS badges with EPREL field and energy pictogram.",
        category=TemplateCategory.ELECTRONICS,
        design=design,
    )


def build_textiles_template(ids: IdGenerator = default_id_generator) -> LabelTemplate:
    design = create_blank_design()
    design.elements = _numbered([
        *_identity_block(ids, with_importer=False),
        *_dpp_block(ids),
        _heading(ids, "compliance", "COMPLIANCE"),
        _badge(ids, "compliance", "oeko_tex", "OT", show_label=True),
        _badge(ids, "compliance", "gots", "GOTS"),
        _badge(ids, "compliance", "reach", "REACH"),
        _heading(ids, "sustainability", "SUSTAINABILITY & DISPOSAL"),
        _material_codes(ids, "sustainability"),
    ])
    return _template(
        template_id="builtin-textiles",
        name="Textiles Standard",
        description="OEKO-TEX, GOTS, REACH badges with care label support.",
        category=TemplateCategory.TEXTILES,
        design=design,
    )


def build_toys_template(ids: IdGenerator = default_id_generator) -> LabelTemplate:
    design = create_blank_design()
    design.elements = _numbered([
        *_identity_block(ids, with_importer=True),
        *_dpp_block(ids),
        _heading(ids, "compliance", "COMPLIANCE & SAFETY"),
        _badge(ids, "compliance", "ce", "CE"),
        _badge(ids, "compliance", "en71", "EN71"),
        IconTextElement(
            id=ids(),
            section_id="compliance",
            icon="AlertTriangle",
            text="Warning: Not suitable for children under 3 years",
            font_size=6,
            color="#dc2626",
            icon_size=10,
        ),
        _heading(ids, "sustainability", "SUSTAINABILITY & DISPOSAL"),
        _material_codes(ids, "sustainability"),
    ])
    return _template(
        template_id="builtin-toys",
        name="Toys Standard",
        description="CE, EN71 badges with age warning and safety pictograms.",
        category=TemplateCategory.TOYS,
        design=design,
    )


def build_household_template(ids: IdGenerator = default_id_generator) -> LabelTemplate:
    design = create_blank_design()
    design.elements = _numbered([
        *_identity_block(ids, with_importer=False),
        *_dpp_block(ids),
        _heading(ids, "compliance", "COMPLIANCE"),
        _badge(ids, "compliance", "ce", "CE"),
        _pictogram(ids, "compliance", "food-safe", 22, label="Food Safe"),
        _badge(ids, "compliance", "reach", "REACH"),
        _heading(ids, "sustainability", "SUSTAINABILITY & DISPOSAL"),
        _material_codes(ids, "sustainability"),
    ])
    return _template(
        template_id="builtin-household",
        name="Household Standard",
        description="CE, food contact, REACH badges with GS mark.",
        category=TemplateCategory.HOUSEHOLD,
        design=design,
    )


def build_general_template(ids: IdGenerator = default_id_generator) -> LabelTemplate:
    design = create_blank_design()
    # Compliance is left empty for the general group.
    design.elements = _numbered([
        _product_name(ids, "identity"),
        _field(ids, "identity", FieldKey.GTIN, label="GTIN", bold=True),
        _field(ids, "identity", FieldKey.BATCH_NUMBER, bold=True),
        _field(ids, "identity", FieldKey.MANUFACTURER_NAME),
        _qr(ids, "dpp"),
        _material_codes(ids, "sustainability"),
    ])
    return _template(
        template_id="builtin-general",
        name="General Minimal",
        description="Minimal label with identity, QR code, and basic compliance.",
        category=TemplateCategory.GENERAL,
        design=design,
    )


def _logistics_sections() -> List[LabelSection]:
    zones = [
        (LOGISTICS_HEADER, "ml.section.logisticsHeader", True),
        (LOGISTICS_IDENTITY, "ml.section.logisticsIdentity", True),
        (LOGISTICS_COMPLIANCE, "ml.section.logisticsCompliance", True),
        (LOGISTICS_CODES, "ml.section.logisticsCodes", True),
        (LOGISTICS_HANDLING, "ml.section.logisticsHandling", False),
    ]
    return [
        LabelSection(
            id=zone_id,
            label=label,
            sort_order=order,
            padding_top=0,
            padding_bottom=6,
            show_border=border,
        )
        for order, (zone_id, label, border) in enumerate(zones)
    ]


def build_logistics_template(ids: IdGenerator = default_id_generator) -> LabelTemplate:
    design = create_blank_design()
    # Sections before elements: element references are validated on assignment.
    design.sections = _logistics_sections()
    design.elements = _numbered([
        _heading(ids, LOGISTICS_HEADER, "SHIPPING UNIT"),
        PackageCounterElement(id=ids(), section_id=LOGISTICS_HEADER),
        _product_name(ids, LOGISTICS_IDENTITY),
        _field(ids, LOGISTICS_IDENTITY, FieldKey.GTIN, label="SKU", bold=True),
        _field(ids, LOGISTICS_IDENTITY, FieldKey.BATCH_NUMBER, label="Batch", bold=True),
        _field(ids, LOGISTICS_IDENTITY, FieldKey.QUANTITY, label="Qty"),
        _field(ids, LOGISTICS_IDENTITY, FieldKey.NET_WEIGHT, label="Net"),
        _field(ids, LOGISTICS_IDENTITY, FieldKey.GROSS_WEIGHT, label="Gross"),
        _heading(ids, LOGISTICS_COMPLIANCE, "IMPORTER & CONFORMITY"),
        _badge(ids, LOGISTICS_COMPLIANCE, "ce", "CE"),
        _field(ids, LOGISTICS_COMPLIANCE, FieldKey.IMPORTER_NAME, label="EU Importer", bold=True),
        _field(ids, LOGISTICS_COMPLIANCE, FieldKey.IMPORTER_ADDRESS, label="Address"),
        _field(ids, LOGISTICS_COMPLIANCE, FieldKey.IMPORTER_EORI, label="EORI"),
        _field(ids, LOGISTICS_COMPLIANCE, FieldKey.COUNTRY_OF_ORIGIN, label="Origin"),
        _field(ids, LOGISTICS_COMPLIANCE, FieldKey.HS_CODE, label="HS Code"),
        _qr(ids, LOGISTICS_CODES, size=48),
        BarcodeElement(id=ids(), section_id=LOGISTICS_CODES, format="ean13", height=28),
        _material_codes(ids, LOGISTICS_CODES),
        _heading(ids, LOGISTICS_HANDLING, "HANDLING (ISO 780)"),
        _pictogram(ids, LOGISTICS_HANDLING, "iso780-this-way-up", 18),
        _pictogram(ids, LOGISTICS_HANDLING, "iso780-fragile", 18),
        _pictogram(ids, LOGISTICS_HANDLING, "iso780-keep-dry", 18),
    ])
    return _template(
        template_id="builtin-logistics-2026",
        name="Logistics 2026",
        description=(
            "B2B shipping label: package counter, SKU/batch/weights, CE mark, "
            "EU importer with EORI, QR + EAN-13, material codes and ISO 780 "
            "handling pictograms."
        ),
        category=TemplateCategory.LOGISTICS,
        variant="b2b",
        design=design,
    )


BUILTIN_TEMPLATE_BUILDERS = (
    build_electronics_template,
    build_textiles_template,
    build_toys_template,
    build_household_template,
    build_general_template,
    build_logistics_template,
)


def build_builtin_templates(ids: IdGenerator = default_id_generator) -> List[LabelTemplate]:
    return [builder(ids) for builder in BUILTIN_TEMPLATE_BUILDERS]
