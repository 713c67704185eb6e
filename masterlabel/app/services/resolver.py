"""
Design resolution (auto-population).

Merges a ``LabelDesign`` with one ``LabelRecord`` into a ``ResolvedLabel``:
the render-ready view handed to a rendering collaborator.

Resolution rules:
- hidden sections are skipped; sections render in ``sort_order``
- elements render in ``sort_order`` within their section
- bound values are substituted and formatted per the field catalog
- elements with nothing to show are dropped (empty field values, empty
  material codes, barcodes without a value, images without a source,
  unknown built-in pictograms, package counters without counter context)
- sections left without renderable elements are dropped

Ties in ``sort_order`` keep list order (Python's sort is stable).
"""

from __future__ import annotations

import logging
from typing import List, Literal, Optional, Union

from pydantic import Field

from masterlabel.app.pictograms import BuiltinPictogram, get_builtin_pictogram
from masterlabel.app.schemas.base import FontFamily, LabelModel
from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.schemas.elements import (
    BarcodeElement,
    FieldValueElement,
    IconTextElement,
    ImageElement,
    LabelElement,
    MaterialCodeElement,
    PackageCounterElement,
    PackageCounterFormat,
    PictogramElement,
    QRCodeElement,
    TextElement,
)
from masterlabel.app.schemas.fields import FieldKey, get_field_metadata
from masterlabel.app.schemas.record import LabelRecord
from masterlabel.app.schemas.sections import LabelSection

logger = logging.getLogger(__name__)


Locale = Literal["en", "de"]

MAX_LABEL_COUNT = 999


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class PackageCounter(LabelModel):
    """Position of one label within a shipment of ``total`` packages."""

    current: int = Field(..., ge=1)
    total: int = Field(..., ge=1)
    format: Optional[PackageCounterFormat] = Field(
        None,
        description="Overrides the element's own format when set",
    )


class MultiLabelExportConfig(LabelModel):
    label_count: int = Field(1, ge=1, le=MAX_LABEL_COUNT)
    format: PackageCounterFormat = "package-x-of-y"
    start_number: int = Field(1, ge=1)


class ResolvedElement(LabelModel):
    """
    One renderable element with its bound data.

    ``text`` carries the final display string (field value, counter text,
    text content, icon text, QR target URL or barcode value). ``label`` is
    the field caption when the element shows one.
    """

    element: LabelElement
    text: Optional[str] = None
    label: Optional[str] = None
    codes: List[str] = Field(default_factory=list)
    pictogram: Optional[BuiltinPictogram] = None


class ResolvedSection(LabelModel):
    section: LabelSection
    elements: List[ResolvedElement]


class ResolvedLabel(LabelModel):
    page_size: str
    page_width: float
    page_height: float
    padding: float
    background_color: str
    font_family: FontFamily
    base_font_size: float
    base_text_color: str
    locale: Locale = "en"
    dpp_url: str = ""
    counter: Optional[PackageCounter] = None
    sections: List[ResolvedSection]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_package_counter(
    current: int,
    total: int,
    fmt: PackageCounterFormat,
    locale: Locale = "en",
) -> str:
    german = locale == "de"
    if fmt == "x-of-y":
        return f"{current} von {total}" if german else f"{current} of {total}"
    if fmt == "package-x-of-y":
        return f"Paket {current} von {total}" if german else f"Package {current} of {total}"
    if fmt == "box-x-of-y":
        return f"Karton {current} von {total}" if german else f"Box {current} of {total}"
    if fmt == "parcel-x-of-y":
        return f"Paket {current} von {total}" if german else f"Parcel {current} of {total}"
    return f"{current}/{total}"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_field_value(field_key: str, value: Union[str, int, float, None]) -> str:
    """
    Display string for a bound value; empty string when there is none.

    Weights are stored in grams and rendered in kilograms.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()

    fmt = get_field_metadata(field_key).format
    if fmt == "weight":
        return f"{value / 1000:.2f} kg"
    return _format_number(value)


# ---------------------------------------------------------------------------
# Element resolution
# ---------------------------------------------------------------------------


def _resolve_element(
    element: LabelElement,
    record: LabelRecord,
    counter: Optional[PackageCounter],
    locale: Locale,
) -> Optional[ResolvedElement]:
    if isinstance(element, FieldValueElement):
        key = element.field_key.value
        value = format_field_value(key, record.values.get(key))
        if not value:
            return None
        return ResolvedElement(
            element=element,
            text=value.upper() if element.uppercase else value,
            label=(element.label_text or key) if element.show_label else None,
        )

    if isinstance(element, TextElement):
        text = element.content.upper() if element.uppercase else element.content
        return ResolvedElement(element=element, text=text)

    if isinstance(element, IconTextElement):
        return ResolvedElement(element=element, text=element.text)

    if isinstance(element, QRCodeElement):
        return ResolvedElement(
            element=element,
            text=record.dpp_url,
            label=element.label_text if element.show_label else None,
        )

    if isinstance(element, MaterialCodeElement):
        codes = element.codes
        if element.auto_populate and record.material_codes:
            codes = record.material_codes
        if not codes:
            return None
        return ResolvedElement(element=element, codes=list(codes))

    if isinstance(element, BarcodeElement):
        if element.auto_populate:
            value = str(record.values.get(FieldKey.GTIN.value) or "")
        else:
            value = element.value
        if not value:
            return None
        return ResolvedElement(element=element, text=value)

    if isinstance(element, PictogramElement):
        pictogram = None
        if element.source == "builtin":
            pictogram = get_builtin_pictogram(element.pictogram_id)
            if pictogram is None:
                logger.debug("Dropping unknown pictogram '%s'", element.pictogram_id)
                return None
        return ResolvedElement(
            element=element,
            pictogram=pictogram,
            label=element.label_text if element.show_label else None,
        )

    if isinstance(element, ImageElement):
        if not element.src:
            return None
        return ResolvedElement(element=element)

    if isinstance(element, PackageCounterElement):
        if counter is None:
            return None
        text = format_package_counter(
            counter.current,
            counter.total,
            counter.format or element.format,
            locale,
        )
        return ResolvedElement(
            element=element,
            text=text.upper() if element.uppercase else text,
        )

    # divider, spacer, compliance-badge: purely presentational
    return ResolvedElement(element=element)


# ---------------------------------------------------------------------------
# Design resolution
# ---------------------------------------------------------------------------


def resolve_design(
    design: LabelDesign,
    record: LabelRecord,
    *,
    counter: Optional[PackageCounter] = None,
    locale: Locale = "en",
) -> ResolvedLabel:
    sections: List[ResolvedSection] = []

    for section in sorted(design.sections, key=lambda s: s.sort_order):
        if not section.visible:
            continue

        members = sorted(
            (e for e in design.elements if e.section_id == section.id),
            key=lambda e: e.sort_order,
        )
        resolved = [
            r
            for r in (_resolve_element(e, record, counter, locale) for e in members)
            if r is not None
        ]
        if resolved:
            sections.append(ResolvedSection(section=section, elements=resolved))

    return ResolvedLabel(
        page_size=design.page_size,
        page_width=design.page_width,
        page_height=design.page_height,
        padding=design.padding,
        background_color=design.background_color,
        font_family=design.font_family,
        base_font_size=design.base_font_size,
        base_text_color=design.base_text_color,
        locale=locale,
        dpp_url=record.dpp_url,
        counter=counter,
        sections=sections,
    )


def resolve_label_series(
    design: LabelDesign,
    record: LabelRecord,
    export_config: MultiLabelExportConfig,
    *,
    locale: Locale = "en",
) -> List[ResolvedLabel]:
    """One resolved label per package, numbered from ``start_number``."""
    total = export_config.label_count
    return [
        resolve_design(
            design,
            record,
            counter=PackageCounter(
                current=export_config.start_number + i,
                total=total,
                format=export_config.format,
            ),
            locale=locale,
        )
        for i in range(total)
    ]
