"""
Label template registry.

Holds the built-in label templates and resolves the default design for a
product category. Each registry entry binds together:

- a public template identifier
- a product category
- an embedded design document
- human-readable catalogue metadata

The registry is an in-memory lookup over a static list. It never hands
out its canonical template objects: designs are deep-copied on every read
so callers can mutate them freely without aliasing registry state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from pydantic import ConfigDict

from masterlabel.app.defaults.factory import create_blank_design
from masterlabel.app.defaults.ids import generate_template_id
from masterlabel.app.registry.builtin import build_builtin_templates
from masterlabel.app.schemas.base import LabelModel, enum_value
from masterlabel.app.schemas.design import (
    LabelDesign,
    LabelTemplate,
    TemplateCategory,
)

logger = logging.getLogger(__name__)


class TemplateNotFoundError(LookupError):
    """Raised when a template id is not registered."""


class DesignLookup(LabelModel):
    """
    Result of resolving the default design for a category.

    ``matched`` is False when no template exists for the category and the
    design is a blank fallback.
    """

    design: LabelDesign
    matched: bool
    template_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TemplateRegistry:
    """In-memory registry of immutable label templates."""

    def __init__(self, templates: Iterable[LabelTemplate]) -> None:
        self._templates: Dict[str, LabelTemplate] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate template id '{template.id}'")
            self._templates[template.id] = template

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def list_templates(self) -> List[LabelTemplate]:
        """All templates in registration order (design deep-copied)."""
        return [self._copy(t) for t in self._templates.values()]

    def get(self, template_id: str) -> LabelTemplate:
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template '{template_id}' not found.")
        return self._copy(template)

    def find_by_category(self, category: TemplateCategory | str) -> Optional[LabelTemplate]:
        """First template registered for the category, or None."""
        wanted = enum_value(category)
        for template in self._templates.values():
            if template.category.value == wanted:
                return self._copy(template)
        return None

    def lookup_default_design(self, category: TemplateCategory | str) -> DesignLookup:
        """
        Resolve the starting design for a category.

        Never raises: an unknown category yields a blank design with
        ``matched=False``.
        """
        template = self.find_by_category(category)
        if template is None:
            logger.debug(
                "No label template for category '%s'; using blank design",
                enum_value(category),
            )
            return DesignLookup(design=create_blank_design(), matched=False)

        return DesignLookup(
            design=template.design,
            matched=True,
            template_id=template.id,
        )

    def get_default_design_for_group(self, category: TemplateCategory | str) -> LabelDesign:
        """Deep copy of the category's template design, or a blank design."""
        return self.lookup_default_design(category).design

    def clone(
        self,
        template_id: str,
        *,
        name: Optional[str] = None,
        category: Optional[TemplateCategory] = None,
    ) -> LabelTemplate:
        """
        Create a tenant-owned copy of a registered template.

        The clone gets a fresh id and timestamps and is never a default.
        It is not added to the registry.
        """
        source = self.get(template_id)
        now = datetime.now(timezone.utc)
        return source.model_copy(
            update={
                "id": generate_template_id(),
                "name": name or f"{source.name} (copy)",
                "category": category or source.category,
                "is_default": False,
                "created_at": now,
                "updated_at": now,
            }
        )

    @staticmethod
    def _copy(template: LabelTemplate) -> LabelTemplate:
        return template.model_copy(update={"design": template.design.model_copy(deep=True)})


TEMPLATE_REGISTRY = TemplateRegistry(build_builtin_templates())


def get_default_design_for_group(category: TemplateCategory | str) -> LabelDesign:
    """Module-level shortcut over the built-in registry."""
    return TEMPLATE_REGISTRY.get_default_design_for_group(category)
