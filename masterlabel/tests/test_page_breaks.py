import pytest

from masterlabel.app.defaults.factory import create_blank_design
from masterlabel.app.schemas.elements import TextElement
from masterlabel.app.services.editor import set_section_collapsed, set_section_visibility
from masterlabel.app.services.pagination import (
    SECTION_GAP,
    SECTION_HEADER_HEIGHT,
    calculate_page_breaks,
)
from masterlabel.tests.fixtures.label_data import simple_design


def _design_with_texts(count, section_id="identity"):
    design = create_blank_design()
    design.elements = [
        TextElement(id=f"t{i}", section_id=section_id, sort_order=i) for i in range(count)
    ]
    return design


def test_small_design_fits_one_page():
    result = calculate_page_breaks(simple_design())

    assert len(result.pages) == 1
    page = result.pages[0]
    assert [s.section_id for s in page.sections] == [
        "identity",
        "dpp",
        "compliance",
        "sustainability",
    ]
    assert [s.element_range for s in page.sections] == [(0, 1), (0, 2), (0, 0), (0, 0)]
    assert not any(s.is_partial for s in page.sections)
    assert page.used_height == pytest.approx(132.0)


def test_long_section_splits_between_elements():
    result = calculate_page_breaks(_design_with_texts(40))

    assert len(result.pages) == 2
    first, second = result.pages
    assert first.sections[0].element_range == (0, 30)
    assert first.sections[0].is_partial is True
    assert second.sections[0].section_id == "identity"
    assert second.sections[0].element_range == (30, 40)
    assert second.sections[0].is_partial is True
    assert [p.page_index for p in result.pages] == [0, 1]


def test_oversized_elements_still_advance():
    result = calculate_page_breaks(_design_with_texts(3), measure=lambda section, index: 1000.0)

    identity_slices = [
        s.element_range
        for page in result.pages
        for s in page.sections
        if s.section_id == "identity"
    ]
    assert identity_slices == [(0, 1), (1, 2), (2, 3)]
    assert len(result.pages) == 4


def test_measure_none_uses_default_height():
    measured = calculate_page_breaks(simple_design(), measure=lambda section, index: None)

    assert measured == calculate_page_breaks(simple_design())


def test_collapsed_section_takes_header_only():
    design = set_section_collapsed(_design_with_texts(40), "identity", True)
    for section_id in ("dpp", "compliance", "sustainability"):
        design = set_section_visibility(design, section_id, False)

    result = calculate_page_breaks(design)

    assert len(result.pages) == 1
    assert result.pages[0].sections[0].element_range == (0, 0)
    assert result.pages[0].used_height == pytest.approx(SECTION_HEADER_HEIGHT + SECTION_GAP)


def test_no_visible_sections_yields_one_empty_page():
    design = create_blank_design()
    for section in design.sections:
        section.visible = False

    result = calculate_page_breaks(design)

    assert len(result.pages) == 1
    assert result.pages[0].sections == []
