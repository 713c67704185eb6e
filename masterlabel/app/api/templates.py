"""
Template and catalogue discovery endpoints.

These endpoints expose the built-in label templates, the default design
per category, the built-in pictogram library and the field catalog. All
routes are read-only and served from in-process registries; every design
returned is a fresh copy.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from masterlabel.app.api.dependencies import get_template_registry
from masterlabel.app.pictograms import (
    BUILTIN_PICTOGRAMS,
    BuiltinPictogram,
    get_builtin_pictograms_by_category,
)
from masterlabel.app.registry.registry import (
    DesignLookup,
    TemplateNotFoundError,
    TemplateRegistry,
)
from masterlabel.app.schemas.base import LabelModel
from masterlabel.app.schemas.design import LabelTemplate, TemplateCategory, TemplateVariant
from masterlabel.app.schemas.fields import FIELD_CATALOG, FieldMetadata

router = APIRouter()
catalog_router = APIRouter()


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TemplateListItem(LabelModel):
    id: str
    name: str
    description: str
    category: TemplateCategory
    variant: TemplateVariant
    is_default: bool


# ---------------------------------------------------------------------------
# GET /templates
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[TemplateListItem],
    summary="List label templates",
)
def list_templates(
    registry: TemplateRegistry = Depends(get_template_registry),
) -> List[TemplateListItem]:
    return [
        TemplateListItem(
            id=t.id,
            name=t.name,
            description=t.description,
            category=t.category,
            variant=t.variant,
            is_default=t.is_default,
        )
        for t in registry.list_templates()
    ]


# ---------------------------------------------------------------------------
# GET /templates/defaults/{category}
# ---------------------------------------------------------------------------


@router.get(
    "/defaults/{category}",
    response_model=DesignLookup,
    response_model_exclude_none=True,
    summary="Default design for a product category",
)
def get_default_design(
    category: str,
    registry: TemplateRegistry = Depends(get_template_registry),
) -> DesignLookup:
    """
    Return the starting design for a category.

    Unknown categories are not an error: the response carries a blank
    design with ``matched`` set to false.
    """
    return registry.lookup_default_design(category)


# ---------------------------------------------------------------------------
# GET /templates/{template_id}
# ---------------------------------------------------------------------------


@router.get(
    "/{template_id}",
    response_model=LabelTemplate,
    response_model_exclude_none=True,
    summary="Return one label template with its design",
)
def get_template(
    template_id: str,
    registry: TemplateRegistry = Depends(get_template_registry),
) -> LabelTemplate:
    try:
        return registry.get(template_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Catalogues
# ---------------------------------------------------------------------------


@catalog_router.get(
    "/pictograms",
    response_model=List[BuiltinPictogram],
    summary="List built-in pictograms",
)
def list_pictograms(category: Optional[str] = None) -> List[BuiltinPictogram]:
    if category:
        return get_builtin_pictograms_by_category(category)
    return list(BUILTIN_PICTOGRAMS)


@catalog_router.get(
    "/fields",
    response_model=List[FieldMetadata],
    summary="List bindable product and batch fields",
)
def list_fields() -> List[FieldMetadata]:
    return list(FIELD_CATALOG)
