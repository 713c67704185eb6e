"""
Tenant design lookup.

A tenant's working design for a category is, in order of preference:

1. the design the tenant saved for that category
2. a copy of the built-in template design for the category
3. a blank design
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

from masterlabel.app.registry.registry import TEMPLATE_REGISTRY, TemplateRegistry
from masterlabel.app.schemas.base import enum_value
from masterlabel.app.schemas.design import LabelDesign, TemplateCategory
from masterlabel.app.services.serialization import deserialize_design, serialize_design
from masterlabel.app.storage.store import DesignStore, StoredDesign


class TenantDesign(BaseModel):
    design: LabelDesign
    source: Literal["stored", "template", "blank"]
    revision: Optional[str] = None
    template_id: Optional[str] = None


def load_tenant_design(
    store: DesignStore,
    tenant_id: str,
    category: TemplateCategory | str,
    *,
    registry: TemplateRegistry = TEMPLATE_REGISTRY,
) -> TenantDesign:
    key = enum_value(category)
    stored = store.get(tenant_id, key)
    if stored is not None:
        return TenantDesign(
            design=deserialize_design(stored.payload),
            source="stored",
            revision=stored.revision,
        )

    lookup = registry.lookup_default_design(key)
    return TenantDesign(
        design=lookup.design,
        source="template" if lookup.matched else "blank",
        template_id=lookup.template_id,
    )


def save_tenant_design(
    store: DesignStore,
    tenant_id: str,
    category: TemplateCategory | str,
    design: LabelDesign,
    *,
    expected_revision: Optional[str] = None,
) -> StoredDesign:
    return store.save(
        tenant_id,
        enum_value(category),
        serialize_design(design),
        expected_revision=expected_revision,
    )
