"""
Regulatory compliance checks for label designs.

Evaluates a design against the labelling obligations of the record's
product group and the label variant (B2B / B2C). Each check reports
whether it passed and, where the editor can fix it in one step, the fix
action to apply (add a field, add a badge, add a pictogram, or fix an
offending element).

Checks are advisory. The score weights critical failures highest.
"""

import math
from typing import List, Literal, Optional

from masterlabel.app.schemas.base import LabelModel
from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.schemas.elements import (
    BarcodeElement,
    ComplianceBadgeElement,
    FieldValueElement,
    MaterialCodeElement,
    PictogramElement,
    QRCodeElement,
    has_font_size,
)
from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.schemas.record import LabelRecord, LabelVariant
from masterlabel.app.services.product_group import CE_APPLICABLE_GROUPS
from masterlabel.app.services.validation import MIN_FONT_SIZE_PT


CheckSeverity = Literal["critical", "warning", "info"]

SEVERITY_WEIGHTS = {
    "critical": 3.0,
    "warning": 1.5,
    "info": 0.5,
}

EU_COUNTRIES = frozenset({
    "DE", "FR", "IT", "ES", "NL", "BE", "AT", "PL", "SE", "DK", "FI", "IE",
    "PT", "GR", "CZ", "RO", "HU", "BG", "HR", "SK", "SI", "LT", "LV", "EE",
    "LU", "MT", "CY",
})


class FixAction(LabelModel):
    type: Literal["add-field", "add-badge", "add-pictogram", "fix-element"]
    field_key: Optional[FieldKey] = None
    badge_id: Optional[str] = None
    symbol: Optional[str] = None
    pictogram_id: Optional[str] = None
    element_id: Optional[str] = None


class ComplianceCheck(LabelModel):
    id: str
    label_key: str
    description_key: str
    severity: CheckSeverity
    passed: bool
    fix_action: Optional[FixAction] = None


# ---------------------------------------------------------------------------
# Design inspection helpers
# ---------------------------------------------------------------------------


def _has_field(design: LabelDesign, key: FieldKey) -> bool:
    return any(
        isinstance(e, FieldValueElement) and e.field_key == key
        for e in design.elements
    )


def _has_badge(design: LabelDesign, badge_id: str) -> bool:
    return any(
        isinstance(e, ComplianceBadgeElement) and e.badge_id == badge_id
        for e in design.elements
    )


def _has_pictogram(design: LabelDesign, pictogram_id: str) -> bool:
    return any(
        isinstance(e, PictogramElement) and e.pictogram_id == pictogram_id
        for e in design.elements
    )


def _has_type(design: LabelDesign, element_cls: type) -> bool:
    return any(isinstance(e, element_cls) for e in design.elements)


def _check(
    check_id: str,
    i18n: str,
    severity: CheckSeverity,
    passed: bool,
    fix_action: Optional[FixAction] = None,
) -> ComplianceCheck:
    return ComplianceCheck(
        id=check_id,
        label_key=f"ml.check.{i18n}",
        description_key=f"ml.check.{i18n}Desc",
        severity=severity,
        passed=passed,
        fix_action=fix_action,
    )


def _add_field(key: FieldKey) -> FixAction:
    return FixAction(type="add-field", field_key=key)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


def run_compliance_checks(
    design: LabelDesign,
    record: LabelRecord,
    variant: LabelVariant,
) -> List[ComplianceCheck]:
    group = record.product_group
    checks: List[ComplianceCheck] = []

    if group in CE_APPLICABLE_GROUPS:
        checks.append(_check(
            "ce-marking", "ceMarking", "critical",
            _has_badge(design, "ce"),
            FixAction(type="add-badge", badge_id="ce", symbol="CE"),
        ))

    if group == "electronics":
        checks.append(_check(
            "weee-symbol", "weeeSymbol", "critical",
            _has_pictogram(design, "weee-bin") or _has_badge(design, "weee"),
            FixAction(type="add-pictogram", pictogram_id="weee-bin"),
        ))

    checks.append(_check(
        "manufacturer-name", "manufacturerName", "critical",
        _has_field(design, FieldKey.MANUFACTURER_NAME),
        _add_field(FieldKey.MANUFACTURER_NAME),
    ))
    checks.append(_check(
        "manufacturer-address", "manufacturerAddress", "critical",
        _has_field(design, FieldKey.MANUFACTURER_ADDRESS),
        _add_field(FieldKey.MANUFACTURER_ADDRESS),
    ))

    # An unknown manufacturer country is treated as EU.
    country = (record.manufacturer_country or "").upper()
    eu_manufacturer = not country or country in EU_COUNTRIES
    checks.append(_check(
        "eu-importer", "euImporter",
        "warning" if eu_manufacturer else "critical",
        eu_manufacturer or _has_field(design, FieldKey.IMPORTER_NAME),
        _add_field(FieldKey.IMPORTER_NAME),
    ))

    checks.append(_check(
        "batch-serial", "batchSerial", "critical",
        _has_field(design, FieldKey.BATCH_NUMBER) or _has_field(design, FieldKey.SERIAL_NUMBER),
        _add_field(FieldKey.BATCH_NUMBER),
    ))
    checks.append(_check(
        "gtin", "gtin", "warning",
        _has_field(design, FieldKey.GTIN) or _has_type(design, BarcodeElement),
        _add_field(FieldKey.GTIN),
    ))
    checks.append(_check(
        "product-name", "productName", "warning",
        _has_field(design, FieldKey.PRODUCT_NAME),
        _add_field(FieldKey.PRODUCT_NAME),
    ))
    checks.append(_check(
        "qr-dpp", "qrDpp", "critical",
        _has_type(design, QRCodeElement),
    ))

    if group == "electronics":
        checks.append(_check(
            "rohs-badge", "rohsBadge", "warning",
            _has_badge(design, "rohs"),
            FixAction(type="add-badge", badge_id="rohs", symbol="RoHS"),
        ))

    checks.append(_check(
        "packaging-codes", "packagingCodes", "warning",
        _has_type(design, MaterialCodeElement),
    ))

    if group == "electronics":
        checks.append(_check(
            "eprel", "eprel", "info",
            _has_field(design, FieldKey.EPREL_NUMBER),
            _add_field(FieldKey.EPREL_NUMBER),
        ))

    if variant == "b2c":
        checks.append(_check(
            "country-origin", "countryOrigin", "info",
            _has_field(design, FieldKey.COUNTRY_OF_ORIGIN) or _has_field(design, FieldKey.MADE_IN),
            _add_field(FieldKey.COUNTRY_OF_ORIGIN),
        ))

    offender = next(
        (
            e for e in design.elements
            if has_font_size(e) and e.font_size < MIN_FONT_SIZE_PT
        ),
        None,
    )
    checks.append(_check(
        "min-font-size", "minFontSize", "warning",
        offender is None,
        FixAction(type="fix-element", element_id=offender.id) if offender else None,
    ))

    return checks


def calculate_compliance_score(checks: List[ComplianceCheck]) -> int:
    """Weighted pass rate as a rounded percentage; 100 when there are no checks."""
    total = 0.0
    passed = 0.0
    for check in checks:
        weight = SEVERITY_WEIGHTS[check.severity]
        total += weight
        if check.passed:
            passed += weight

    if total == 0:
        return 100
    # Half-up rounding
    return int(math.floor(passed / total * 100 + 0.5))
