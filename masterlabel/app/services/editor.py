"""
Design editing operations.

Every operation takes a design and returns an edited deep copy; the input
design is never modified. Element and section ordering is normalised on
every structural edit: the affected sections are renumbered ``0..n-1`` in
their current order, so ``sort_order`` stays strictly increasing within
each section.

Structural errors raise:
- ``ElementNotFoundError`` / ``SectionNotFoundError`` for unknown ids
- ``DuplicateSectionError`` when adding a section id that already exists
- ``ValueError`` for inconsistent arguments
"""

from __future__ import annotations

import logging
from typing import Any, List, Literal, Optional, Sequence, Tuple

from masterlabel.app.defaults.factory import DEFAULT_BORDER_COLOR, create_element
from masterlabel.app.defaults.ids import IdGenerator, default_id_generator
from masterlabel.app.schemas.base import enum_value
from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.schemas.elements import (
    ComplianceBadgeElement,
    ElementType,
    FieldValueElement,
    LabelElement,
    PictogramElement,
    element_adapter,
    has_font_size,
)
from masterlabel.app.schemas.sections import LabelSection, SectionId
from masterlabel.app.services.compliance import FixAction
from masterlabel.app.services.validation import MIN_FONT_SIZE_PT

logger = logging.getLogger(__name__)


class ElementNotFoundError(LookupError):
    """Raised when an element id is not present in the design."""


class SectionNotFoundError(LookupError):
    """Raised when a section id is not present in the design."""


class DuplicateSectionError(ValueError):
    """Raised when adding a section whose id already exists."""


# Changed only through the dedicated move/duplicate operations.
_STRUCTURAL_ATTRIBUTES = frozenset({"id", "type", "section_id", "sort_order"})


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def sorted_sections(design: LabelDesign) -> List[LabelSection]:
    """Sections in rendering order (ties keep list order)."""
    return sorted(design.sections, key=lambda s: s.sort_order)


def elements_in_section(design: LabelDesign, section_id: SectionId | str) -> List[LabelElement]:
    """Elements of one section in rendering order."""
    wanted = enum_value(section_id)
    return sorted(
        (e for e in design.elements if e.section_id == wanted),
        key=lambda e: e.sort_order,
    )


def get_section(design: LabelDesign, section_id: SectionId | str) -> LabelSection:
    wanted = enum_value(section_id)
    for section in design.sections:
        if section.id == wanted:
            return section
    raise SectionNotFoundError(f"Section '{wanted}' not found in design")


def get_element(design: LabelDesign, element_id: str) -> LabelElement:
    for element in design.elements:
        if element.id == element_id:
            return element
    raise ElementNotFoundError(f"Element '{element_id}' not found in design")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _renumber(items: Sequence[Any]) -> None:
    for position, item in enumerate(items):
        item.sort_order = position


def _clamp(index: Optional[int], size: int) -> int:
    if index is None:
        return size
    return max(0, min(index, size))


def _commit_elements(design: LabelDesign, elements: List[LabelElement]) -> LabelDesign:
    # Reassignment re-runs the document's reference checks.
    design.elements = elements
    return design


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


def insert_element(
    design: LabelDesign,
    element: LabelElement,
    *,
    index: Optional[int] = None,
) -> LabelDesign:
    """
    Insert a prepared element into its section at ``index`` (default: end).

    The element's ``sort_order`` is overwritten by its final position.
    """
    get_section(design, element.section_id)
    if any(e.id == element.id for e in design.elements):
        raise ValueError(f"Element id '{element.id}' already present in design")

    updated = design.model_copy(deep=True)
    element = element.model_copy(deep=True)

    siblings = elements_in_section(updated, element.section_id)
    siblings.insert(_clamp(index, len(siblings)), element)
    _renumber(siblings)

    return _commit_elements(updated, [*updated.elements, element])


def add_element(
    design: LabelDesign,
    element_type: ElementType | str,
    section_id: SectionId | str,
    *,
    index: Optional[int] = None,
    id_generator: Optional[IdGenerator] = None,
) -> Tuple[LabelDesign, LabelElement]:
    """Create an element with its defaults and insert it. Returns (design, element)."""
    element = create_element(element_type, section_id, id_generator=id_generator)
    updated = insert_element(design, element, index=index)
    return updated, get_element(updated, element.id)


def remove_element(design: LabelDesign, element_id: str) -> LabelDesign:
    target = get_element(design, element_id)

    updated = design.model_copy(deep=True)
    remaining = [e for e in updated.elements if e.id != element_id]
    _renumber([e for e in sorted(remaining, key=lambda e: e.sort_order) if e.section_id == target.section_id])

    return _commit_elements(updated, remaining)


def update_element(design: LabelDesign, element_id: str, **changes: Any) -> LabelDesign:
    """
    Change visual attributes of one element (snake_case attribute names).

    Identity, variant, section and position are structural and rejected
    here; use ``move_element`` to relocate an element. Values are validated
    against the element's variant.
    """
    blocked = _STRUCTURAL_ATTRIBUTES.intersection(changes)
    if blocked:
        raise ValueError(f"Cannot update structural attributes: {sorted(blocked)}")

    current = get_element(design, element_id)
    data = current.model_dump()
    data.update(changes)
    replacement = element_adapter.validate_python(data)

    updated = design.model_copy(deep=True)
    elements = [replacement if e.id == element_id else e for e in updated.elements]
    return _commit_elements(updated, elements)


def move_element(
    design: LabelDesign,
    element_id: str,
    *,
    index: int,
    section_id: Optional[SectionId | str] = None,
) -> LabelDesign:
    """
    Move an element to ``index`` within ``section_id`` (default: its own
    section). Source and target sections are renumbered.
    """
    source_id = get_element(design, element_id).section_id
    target_id = enum_value(section_id) if section_id is not None else source_id
    get_section(design, target_id)

    updated = design.model_copy(deep=True)
    moving = get_element(updated, element_id)

    source = [e for e in elements_in_section(updated, source_id) if e.id != element_id]
    if target_id == source_id:
        target = source
    else:
        target = elements_in_section(updated, target_id)
        _renumber(source)

    moving.section_id = target_id
    target.insert(_clamp(index, len(target)), moving)
    _renumber(target)

    return _commit_elements(updated, list(updated.elements))


def shift_element(
    design: LabelDesign,
    element_id: str,
    direction: Literal["up", "down"],
) -> LabelDesign:
    """Swap an element with its neighbour. A move past either end is a no-op."""
    element = get_element(design, element_id)
    siblings = elements_in_section(design, element.section_id)
    position = next(i for i, e in enumerate(siblings) if e.id == element_id)
    target = position - 1 if direction == "up" else position + 1
    if target < 0 or target >= len(siblings):
        return design.model_copy(deep=True)
    return move_element(design, element_id, index=target)


def duplicate_element(
    design: LabelDesign,
    element_id: str,
    *,
    id_generator: Optional[IdGenerator] = None,
) -> Tuple[LabelDesign, LabelElement]:
    """Insert a copy directly after the source element. Returns (design, copy)."""
    source = get_element(design, element_id)
    next_id = id_generator or default_id_generator

    clone = source.model_copy(deep=True, update={"id": next_id()})
    siblings = elements_in_section(design, source.section_id)
    position = next(i for i, e in enumerate(siblings) if e.id == element_id)

    updated = insert_element(design, clone, index=position + 1)
    return updated, get_element(updated, clone.id)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def add_section(
    design: LabelDesign,
    section_id: SectionId | str,
    *,
    label: Optional[str] = None,
    index: Optional[int] = None,
    visible: bool = True,
    show_border: bool = False,
) -> LabelDesign:
    """Add an empty section at ``index`` in rendering order (default: last)."""
    new_id = enum_value(section_id)
    if any(s.id == new_id for s in design.sections):
        raise DuplicateSectionError(f"Section '{new_id}' already exists")

    section = LabelSection(
        id=new_id,
        label=label or f"ml.section.{new_id}",
        visible=visible,
        show_border=show_border,
        border_color=DEFAULT_BORDER_COLOR,
    )

    updated = design.model_copy(deep=True)
    ordered = sorted_sections(updated)
    ordered.insert(_clamp(index, len(ordered)), section)
    _renumber(ordered)

    updated.sections = [*updated.sections, section]
    return updated


def remove_section(
    design: LabelDesign,
    section_id: SectionId | str,
    *,
    reassign_to: Optional[SectionId | str] = None,
) -> LabelDesign:
    """
    Remove a section.

    Its elements are deleted, or appended to ``reassign_to`` in their
    current order when given.
    """
    removed = get_section(design, section_id).id
    target_id = enum_value(reassign_to) if reassign_to is not None else None
    if target_id is not None:
        if target_id == removed:
            raise ValueError("Cannot reassign elements to the section being removed")
        get_section(design, target_id)

    updated = design.model_copy(deep=True)
    orphans = elements_in_section(updated, removed)

    if target_id is None:
        if orphans:
            logger.debug("Removing section '%s' with %d elements", removed, len(orphans))
        elements = [e for e in updated.elements if e.section_id != removed]
    else:
        target = elements_in_section(updated, target_id)
        for element in orphans:
            element.section_id = target_id
        _renumber(target + orphans)
        elements = list(updated.elements)

    _commit_elements(updated, elements)

    remaining = [s for s in updated.sections if s.id != removed]
    _renumber(sorted(remaining, key=lambda s: s.sort_order))
    updated.sections = remaining
    return updated


def reorder_sections(design: LabelDesign, ordered_ids: Sequence[SectionId | str]) -> LabelDesign:
    """Assign section sort orders from ``ordered_ids`` (a permutation of all ids)."""
    wanted = [enum_value(s) for s in ordered_ids]
    existing = [s.id for s in design.sections]
    if len(wanted) != len(existing) or set(wanted) != set(existing):
        raise ValueError(
            f"Section order must list every section exactly once: got {wanted}, "
            f"design has {existing}"
        )

    updated = design.model_copy(deep=True)
    by_id = {s.id: s for s in updated.sections}
    _renumber([by_id[section_id] for section_id in wanted])
    return updated


def set_section_visibility(
    design: LabelDesign,
    section_id: SectionId | str,
    visible: bool,
) -> LabelDesign:
    """Show or hide a section. Hidden sections keep their elements."""
    wanted = get_section(design, section_id).id
    updated = design.model_copy(deep=True)
    get_section(updated, wanted).visible = visible
    return updated


def set_section_collapsed(
    design: LabelDesign,
    section_id: SectionId | str,
    collapsed: bool,
) -> LabelDesign:
    wanted = get_section(design, section_id).id
    updated = design.model_copy(deep=True)
    get_section(updated, wanted).collapsed = collapsed
    return updated


# ---------------------------------------------------------------------------
# Compliance fixes
# ---------------------------------------------------------------------------


def _first_visible_section(design: LabelDesign) -> LabelSection:
    for section in sorted_sections(design):
        if section.visible:
            return section
    raise SectionNotFoundError("Design has no visible section")


def _compliance_section(design: LabelDesign) -> LabelSection:
    for section in design.sections:
        if section.id == SectionId.COMPLIANCE.value and section.visible:
            return section
    return _first_visible_section(design)


def apply_fix_action(
    design: LabelDesign,
    action: FixAction,
    *,
    id_generator: Optional[IdGenerator] = None,
) -> LabelDesign:
    """
    Apply a one-step compliance fix.

    Fields go to the first visible section; badges and pictograms to the
    compliance section when visible. ``fix-element`` raises the offending
    element's font size to the legal minimum.
    """
    next_id = id_generator or default_id_generator

    if action.type == "add-field" and action.field_key is not None:
        section = _first_visible_section(design)
        element = FieldValueElement(
            id=next_id(),
            section_id=section.id,
            field_key=action.field_key,
            show_label=True,
            layout="inline",
        )
        return insert_element(design, element)

    if action.type == "add-badge" and action.badge_id and action.symbol:
        section = _compliance_section(design)
        element = ComplianceBadgeElement(
            id=next_id(),
            section_id=section.id,
            badge_id=action.badge_id,
            symbol=action.symbol,
        )
        return insert_element(design, element)

    if action.type == "add-pictogram" and action.pictogram_id:
        section = _compliance_section(design)
        element = PictogramElement(
            id=next_id(),
            section_id=section.id,
            pictogram_id=action.pictogram_id,
            source="builtin",
            show_label=False,
        )
        return insert_element(design, element)

    if action.type == "fix-element" and action.element_id:
        element = get_element(design, action.element_id)
        if has_font_size(element) and element.font_size < MIN_FONT_SIZE_PT:
            return update_element(design, element.id, font_size=MIN_FONT_SIZE_PT)
        return design.model_copy(deep=True)

    raise ValueError(f"Incomplete fix action: {action!r}")
