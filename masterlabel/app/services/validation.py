"""
Label validation.

Two independent passes:

- ``validate_label_design`` inspects a design document on its own
  (structure the editor should flag while the user is designing).
- ``validate_label_record`` inspects the data that will populate a label
  (master data the tenant has to complete before printing).

Both return issues rather than raising. A design with ``error`` issues is
still a valid document; it is just not fit for print.
"""

import re
from typing import List, Literal

from masterlabel.app.schemas.base import LabelModel
from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.schemas.elements import (
    FieldValueElement,
    QRCodeElement,
    has_font_size,
)
from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.schemas.record import LabelRecord, LabelVariant
from masterlabel.app.services.product_group import CE_APPLICABLE_GROUPS


# EU minimum x-height of 1.2 mm
MIN_FONT_SIZE_PT = 3.4

CE_CERT_PATTERN = re.compile(r"\bce\b|ce[- ]?kennzeichnung|ce[- ]?mark", re.IGNORECASE)


class ValidationIssue(LabelModel):
    field: str
    message: str
    severity: Literal["error", "warning", "info"]
    i18n_key: str


def _has_field(design: LabelDesign, *keys: FieldKey) -> bool:
    return any(
        isinstance(e, FieldValueElement) and e.field_key in keys
        for e in design.elements
    )


# ---------------------------------------------------------------------------
# Design
# ---------------------------------------------------------------------------


def validate_label_design(design: LabelDesign) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    if not any(isinstance(e, QRCodeElement) for e in design.elements):
        issues.append(
            ValidationIssue(
                field="qrCode",
                message="QR code element is required for the DPP link.",
                severity="error",
                i18n_key="ml.validation.qrElementRequired",
            )
        )

    if not _has_field(design, FieldKey.PRODUCT_NAME):
        issues.append(
            ValidationIssue(
                field="productName",
                message="Product name field is recommended on the label.",
                severity="warning",
                i18n_key="ml.validation.productNameRecommended",
            )
        )

    # Reported once, for the first offending element.
    for element in design.elements:
        if has_font_size(element) and element.font_size < MIN_FONT_SIZE_PT:
            issues.append(
                ValidationIssue(
                    field=f"element.{element.id}",
                    message=(
                        "Font size below 3.4pt (1.2mm). EU regulation requires "
                        "minimum 1.2mm text height."
                    ),
                    severity="error",
                    i18n_key="ml.validation.fontSizeTooSmall",
                )
            )
            break

    if not _has_field(design, FieldKey.MANUFACTURER_NAME, FieldKey.MANUFACTURER_ADDRESS):
        issues.append(
            ValidationIssue(
                field="manufacturer",
                message="Manufacturer information is recommended on the label.",
                severity="warning",
                i18n_key="ml.validation.manufacturerRecommended",
            )
        )

    return issues


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------


def validate_label_record(record: LabelRecord, variant: LabelVariant) -> List[ValidationIssue]:
    values = record.values
    issues: List[ValidationIssue] = []

    if not values.get(FieldKey.IMPORTER_NAME.value):
        issues.append(
            ValidationIssue(
                field="importer",
                message=(
                    "EU Importer or Authorized Representative is missing. "
                    "Required for EU market since 2026."
                ),
                severity="error",
                i18n_key="ml.validation.importerMissing",
            )
        )

    if not values.get(FieldKey.BATCH_NUMBER.value):
        issues.append(
            ValidationIssue(
                field="batchNumber",
                message="Batch number is missing. Select a batch to include on the label.",
                severity="error",
                i18n_key="ml.validation.batchNumberMissing",
            )
        )

    if variant == "b2c" and not values.get(FieldKey.COUNTRY_OF_ORIGIN.value):
        issues.append(
            ValidationIssue(
                field="targetCountry",
                message=(
                    "Target country not set. B2C labels should specify the "
                    "target market for language requirements."
                ),
                severity="warning",
                i18n_key="ml.validation.targetCountryMissing",
            )
        )

    if not values.get(FieldKey.MANUFACTURER_ADDRESS.value):
        issues.append(
            ValidationIssue(
                field="manufacturerAddress",
                message=(
                    "Manufacturer address is incomplete. Full postal address "
                    "is required on product labels."
                ),
                severity="warning",
                i18n_key="ml.validation.manufacturerAddressMissing",
            )
        )

    if record.product_group in CE_APPLICABLE_GROUPS and not any(
        CE_CERT_PATTERN.search(name) for name in record.certifications
    ):
        issues.append(
            ValidationIssue(
                field="ceMark",
                message=(
                    "CE marking not detected in certifications. "
                    "Required for this product group."
                ),
                severity="warning",
                i18n_key="ml.validation.ceMissing",
            )
        )

    if not record.material_codes:
        issues.append(
            ValidationIssue(
                field="packagingCodes",
                message=(
                    "No packaging material codes detected. PPWR requires "
                    "packaging material identification."
                ),
                severity="info",
                i18n_key="ml.validation.packagingCodesMissing",
            )
        )

    if not record.dpp_url:
        issues.append(
            ValidationIssue(
                field="qrCode",
                message="QR code could not be generated. Check DPP URL configuration.",
                severity="error",
                i18n_key="ml.validation.qrCodeMissing",
            )
        )

    return issues
