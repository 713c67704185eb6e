"""
Page break calculation.

Walks visible sections top to bottom, accumulating element heights
against the page content area (page height minus top and bottom margin).
When the next element does not fit, a new page starts; sections may be
split between elements, elements themselves are atomic.

All measurements are in points. Callers with real layout measurements
pass a ``measure`` callable; otherwise every element counts as
``DEFAULT_ELEMENT_HEIGHT``.
"""

from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, Field

from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.schemas.sections import LabelSection


# Section header row (title + collapse affordance)
SECTION_HEADER_HEIGHT = 13.5
SECTION_GAP = 6.75
DEFAULT_ELEMENT_HEIGHT = 12.0
# Border line plus margin below the section
BORDER_OVERHEAD = 5.25
BORDERLESS_OVERHEAD = 2.25
CONTINUATION_EXTRA = 3.0

MeasureFn = Callable[[str, int], Optional[float]]


class SectionSlice(BaseModel):
    section_id: str
    section: LabelSection
    # [start, end) within the section's sorted elements
    element_range: Tuple[int, int]
    is_partial: bool = False


class PageContent(BaseModel):
    page_index: int
    sections: List[SectionSlice] = Field(default_factory=list)
    used_height: float = 0


class PageBreakResult(BaseModel):
    pages: List[PageContent]


def calculate_page_breaks(
    design: LabelDesign,
    measure: Optional[MeasureFn] = None,
) -> PageBreakResult:
    content_height = design.page_height - 2 * design.padding

    pages: List[PageContent] = []
    page = PageContent(page_index=0)

    def next_page() -> PageContent:
        pages.append(page)
        return PageContent(page_index=len(pages))

    def element_height(section_id: str, index: int) -> float:
        if measure is not None:
            measured = measure(section_id, index)
            if measured is not None:
                return measured
        return DEFAULT_ELEMENT_HEIGHT

    visible = sorted(
        (s for s in design.sections if s.visible),
        key=lambda s: s.sort_order,
    )

    for section in visible:
        count = sum(1 for e in design.elements if e.section_id == section.id)

        if section.collapsed:
            header = SECTION_HEADER_HEIGHT + SECTION_GAP
            if page.used_height + header > content_height and page.sections:
                page = next_page()
            page.sections.append(
                SectionSlice(section_id=section.id, section=section, element_range=(0, 0))
            )
            page.used_height += header
            continue

        border = BORDER_OVERHEAD if section.show_border else BORDERLESS_OVERHEAD
        overhead = (
            SECTION_HEADER_HEIGHT
            + section.padding_top
            + section.padding_bottom
            + border
        )

        if page.used_height + overhead > content_height and page.sections:
            page = next_page()

        if count == 0:
            page.sections.append(
                SectionSlice(section_id=section.id, section=section, element_range=(0, 0))
            )
            page.used_height += overhead
            continue

        start = 0
        first_slice = True
        while start < count:
            slice_overhead = overhead if first_slice else SECTION_HEADER_HEIGHT + CONTINUATION_EXTRA

            if page.used_height + slice_overhead > content_height and page.sections:
                page = next_page()

            available = content_height - page.used_height - slice_overhead
            accumulated = 0.0
            end = start

            for i in range(start, count):
                height = element_height(section.id, i)
                # At least one element per slice, so the walk always advances.
                if accumulated + height > available and i > start:
                    break
                accumulated += height
                end = i + 1
                if accumulated >= available:
                    break

            page.sections.append(
                SectionSlice(
                    section_id=section.id,
                    section=section,
                    element_range=(start, end),
                    is_partial=start > 0 or end < count,
                )
            )
            page.used_height += slice_overhead + accumulated

            start = end
            first_slice = False
            if start < count:
                page = next_page()

    if page.sections or not pages:
        pages.append(page)

    return PageBreakResult(pages=pages)
