"""
Default factories for label designs.

- ``create_element``: one fully-populated element per type
- ``create_default_sections``: the six canonical sections
- ``create_blank_design``: A6 page, default typography, no elements

Every call returns fresh objects; callers are free to mutate the result.
"""

from __future__ import annotations

from typing import List, Optional

from masterlabel.app.defaults.ids import IdGenerator, default_id_generator
from masterlabel.app.schemas.base import enum_value
from masterlabel.app.schemas.design import DESIGN_FORMAT_VERSION, LabelDesign
from masterlabel.app.schemas.elements import (
    ELEMENT_CLASSES,
    ElementType,
    LabelElement,
)
from masterlabel.app.schemas.sections import LabelSection, SectionId


# A6 in points (105 x 148 mm)
A6_WIDTH_PT = 297.64
A6_HEIGHT_PT = 419.53

DEFAULT_PAGE_PADDING_PT = 14
DEFAULT_BASE_FONT_SIZE_PT = 6.5
DEFAULT_BORDER_COLOR = "#d1d5db"


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


def create_element(
    element_type: ElementType | str,
    section_id: SectionId | str,
    sort_order: int = 0,
    *,
    id_generator: Optional[IdGenerator] = None,
) -> LabelElement:
    """
    Create an element of the given type with its documented defaults.

    Raises ValueError for a type outside the closed element set.
    """
    try:
        kind = ElementType(element_type)
    except ValueError:
        raise ValueError(f"Unknown label element type: {element_type!r}") from None

    element_cls = ELEMENT_CLASSES[kind]
    next_id = id_generator or default_id_generator

    return element_cls(
        id=next_id(),
        section_id=enum_value(section_id),
        sort_order=sort_order,
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _section(
    section_id: SectionId,
    sort_order: int,
    *,
    visible: bool = True,
    show_border: bool = False,
    padding_top: float = 0,
    padding_bottom: float = 6,
) -> LabelSection:
    return LabelSection(
        id=section_id.value,
        label=f"ml.section.{section_id.value}",
        visible=visible,
        collapsed=False,
        sort_order=sort_order,
        padding_top=padding_top,
        padding_bottom=padding_bottom,
        show_border=show_border,
        border_color=DEFAULT_BORDER_COLOR,
    )


def create_default_sections() -> List[LabelSection]:
    """The six canonical sections; ``custom`` and ``footer`` start hidden."""
    return [
        _section(SectionId.IDENTITY, 0, show_border=True),
        _section(SectionId.DPP, 1, show_border=True),
        _section(SectionId.COMPLIANCE, 2, show_border=True),
        _section(SectionId.SUSTAINABILITY, 3),
        _section(SectionId.CUSTOM, 4, visible=False),
        _section(SectionId.FOOTER, 5, visible=False, padding_top=4, padding_bottom=0),
    ]


# ---------------------------------------------------------------------------
# Design
# ---------------------------------------------------------------------------


def create_blank_design() -> LabelDesign:
    return LabelDesign(
        version=DESIGN_FORMAT_VERSION,
        page_size="A6",
        page_width=A6_WIDTH_PT,
        page_height=A6_HEIGHT_PT,
        padding=DEFAULT_PAGE_PADDING_PT,
        background_color="#ffffff",
        font_family="Helvetica",
        base_font_size=DEFAULT_BASE_FONT_SIZE_PT,
        base_text_color="#1a1a1a",
        sections=create_default_sections(),
        elements=[],
    )
