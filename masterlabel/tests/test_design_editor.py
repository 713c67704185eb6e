import pytest
from pydantic import ValidationError

from masterlabel.app.defaults.ids import SequentialIdGenerator
from masterlabel.app.schemas.elements import TextElement
from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.services.compliance import FixAction
from masterlabel.app.services.editor import (
    DuplicateSectionError,
    ElementNotFoundError,
    SectionNotFoundError,
    add_element,
    add_section,
    apply_fix_action,
    duplicate_element,
    elements_in_section,
    get_element,
    get_section,
    insert_element,
    move_element,
    remove_element,
    remove_section,
    reorder_sections,
    set_section_collapsed,
    set_section_visibility,
    shift_element,
    sorted_sections,
    update_element,
)
from masterlabel.app.services.validation import MIN_FONT_SIZE_PT
from masterlabel.tests.fixtures.label_data import simple_design


def _order(design, section_id):
    return [(e.id, e.sort_order) for e in elements_in_section(design, section_id)]


def test_add_element_appends_with_defaults():
    design = simple_design()

    updated, element = add_element(design, "divider", "dpp", id_generator=SequentialIdGenerator())

    assert element.id == "el_1"
    assert _order(updated, "dpp") == [("heading", 0), ("qr", 1), ("el_1", 2)]
    assert len(design.elements) == 3


def test_add_element_at_index_renumbers():
    updated, element = add_element(
        simple_design(), "spacer", "dpp", index=0, id_generator=SequentialIdGenerator()
    )

    assert _order(updated, "dpp") == [(element.id, 0), ("heading", 1), ("qr", 2)]


def test_add_element_to_unknown_section():
    with pytest.raises(SectionNotFoundError):
        add_element(simple_design(), "text", "nowhere")


def test_insert_element_rejects_duplicate_id():
    with pytest.raises(ValueError, match="already present"):
        insert_element(simple_design(), TextElement(id="qr", section_id="dpp"))


def test_remove_element_renumbers_section():
    updated = remove_element(simple_design(), "heading")

    assert _order(updated, "dpp") == [("qr", 0)]


def test_remove_unknown_element():
    with pytest.raises(ElementNotFoundError):
        remove_element(simple_design(), "ghost")


def test_update_element_changes_visual_attributes():
    design = simple_design()

    updated = update_element(design, "heading", content="DPP", font_size=9)

    assert get_element(updated, "heading").content == "DPP"
    assert get_element(updated, "heading").font_size == 9
    assert get_element(design, "heading").content == "Passport"


def test_update_element_rejects_structural_attributes():
    with pytest.raises(ValueError, match="structural"):
        update_element(simple_design(), "heading", section_id="identity")


def test_update_element_rejects_foreign_attributes():
    with pytest.raises(ValidationError):
        update_element(simple_design(), "heading", pictogram_id="weee-bin")


def test_move_element_within_section():
    updated = move_element(simple_design(), "qr", index=0)

    assert _order(updated, "dpp") == [("qr", 0), ("heading", 1)]


def test_move_element_across_sections():
    updated = move_element(simple_design(), "heading", index=0, section_id="identity")

    assert _order(updated, "identity") == [("heading", 0), ("name", 1)]
    assert _order(updated, "dpp") == [("qr", 0)]


def test_shift_element():
    design = simple_design()

    assert _order(shift_element(design, "qr", "up"), "dpp") == [("qr", 0), ("heading", 1)]
    assert _order(shift_element(design, "qr", "down"), "dpp") == [("heading", 0), ("qr", 1)]


def test_duplicate_element_inserts_after_source():
    updated, clone = duplicate_element(
        simple_design(), "heading", id_generator=SequentialIdGenerator(prefix="copy")
    )

    assert clone.id == "copy_1"
    assert clone.content == "Passport"
    assert _order(updated, "dpp") == [("heading", 0), ("copy_1", 1), ("qr", 2)]


def test_add_section_at_index():
    updated = add_section(simple_design(), "warnings", index=1)

    assert [s.id for s in sorted_sections(updated)][:3] == ["identity", "warnings", "dpp"]
    assert get_section(updated, "warnings").label == "ml.section.warnings"


def test_add_duplicate_section():
    with pytest.raises(DuplicateSectionError):
        add_section(simple_design(), "dpp")


def test_remove_section_deletes_elements():
    updated = remove_section(simple_design(), "dpp")

    assert "dpp" not in {s.id for s in updated.sections}
    assert {e.id for e in updated.elements} == {"name"}
    assert [s.sort_order for s in sorted_sections(updated)] == list(range(5))


def test_remove_section_reassigns_elements():
    updated = remove_section(simple_design(), "dpp", reassign_to="identity")

    assert _order(updated, "identity") == [("name", 0), ("heading", 1), ("qr", 2)]


def test_remove_section_into_itself():
    with pytest.raises(ValueError):
        remove_section(simple_design(), "dpp", reassign_to="dpp")


def test_reorder_sections():
    design = simple_design()
    ids = [s.id for s in design.sections][::-1]

    updated = reorder_sections(design, ids)

    assert [s.id for s in sorted_sections(updated)] == ids


def test_reorder_sections_requires_permutation():
    with pytest.raises(ValueError):
        reorder_sections(simple_design(), ["identity", "dpp"])


def test_section_visibility_and_collapse():
    design = simple_design()

    hidden = set_section_visibility(design, "dpp", False)
    collapsed = set_section_collapsed(design, "dpp", True)

    assert get_section(hidden, "dpp").visible is False
    assert get_section(collapsed, "dpp").collapsed is True
    assert get_section(design, "dpp").visible is True
    assert {e.id for e in hidden.elements} == {e.id for e in design.elements}


def test_fix_add_field_targets_first_visible_section():
    updated = apply_fix_action(
        simple_design(),
        FixAction(type="add-field", field_key=FieldKey.BATCH_NUMBER),
        id_generator=SequentialIdGenerator(),
    )

    added = get_element(updated, "el_1")
    assert added.section_id == "identity"
    assert added.field_key == FieldKey.BATCH_NUMBER


def test_fix_add_badge_targets_compliance_section():
    updated = apply_fix_action(
        simple_design(),
        FixAction(type="add-badge", badge_id="ce", symbol="CE"),
        id_generator=SequentialIdGenerator(),
    )

    assert get_element(updated, "el_1").section_id == "compliance"


def test_fix_add_pictogram_falls_back_when_compliance_hidden():
    design = set_section_visibility(simple_design(), "compliance", False)

    updated = apply_fix_action(
        design,
        FixAction(type="add-pictogram", pictogram_id="weee-bin"),
        id_generator=SequentialIdGenerator(),
    )

    assert get_element(updated, "el_1").section_id == "identity"


def test_fix_element_raises_font_size():
    design = update_element(simple_design(), "heading", font_size=2)

    updated = apply_fix_action(design, FixAction(type="fix-element", element_id="heading"))

    assert get_element(updated, "heading").font_size == MIN_FONT_SIZE_PT


def test_incomplete_fix_action():
    with pytest.raises(ValueError, match="Incomplete fix action"):
        apply_fix_action(simple_design(), FixAction(type="add-field"))
