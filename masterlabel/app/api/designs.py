"""
Tenant design endpoints.

Tenants keep one saved design per category. Reads fall back to the
category's built-in template (or a blank design) when nothing is saved.

Writes use optimistic concurrency: ``GET`` returns the stored revision as
an ``ETag``; a ``PUT`` carrying ``If-Match`` only succeeds when that
revision is still current.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Response

from masterlabel.app.api.dependencies import get_design_store, get_template_registry
from masterlabel.app.registry.registry import TemplateRegistry
from masterlabel.app.schemas.base import LabelModel
from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.services.designs import load_tenant_design, save_tenant_design
from masterlabel.app.services.serialization import (
    DesignDeserializationError,
    deserialize_design,
)
from masterlabel.app.services.validation import ValidationIssue, validate_label_design
from masterlabel.app.storage.store import DesignStore, RevisionConflictError
from masterlabel.app.utils.hashing import revision_from_etag, revision_to_etag

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TenantDesignResponse(LabelModel):
    design: LabelDesign
    source: Literal["stored", "template", "blank"]
    revision: Optional[str] = None
    template_id: Optional[str] = None


class SavedDesignResponse(LabelModel):
    tenant_id: str
    category: str
    revision: str


class DesignValidationResponse(LabelModel):
    valid: bool
    issues: List[ValidationIssue]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_design(payload: Dict[str, Any]) -> LabelDesign:
    try:
        return deserialize_design(payload)
    except DesignDeserializationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# POST /designs/validate
# ---------------------------------------------------------------------------


@router.post(
    "/validate",
    response_model=DesignValidationResponse,
    summary="Validate a design document",
)
def validate_design(payload: Dict[str, Any] = Body(...)) -> DesignValidationResponse:
    """
    Structural errors (dangling section references, duplicate ids,
    unknown element attributes) are rejected with 422. A structurally
    valid design is checked for print readiness; ``valid`` is false when
    any issue has ``error`` severity.
    """
    design = _parse_design(payload)
    issues = validate_label_design(design)
    return DesignValidationResponse(
        valid=not any(issue.severity == "error" for issue in issues),
        issues=issues,
    )


# ---------------------------------------------------------------------------
# /designs/{tenant_id}/{category}
# ---------------------------------------------------------------------------


@router.get(
    "/{tenant_id}/{category}",
    response_model=TenantDesignResponse,
    response_model_exclude_none=True,
    summary="Return a tenant's design for a category",
)
def get_tenant_design(
    tenant_id: str,
    category: str,
    response: Response,
    store: DesignStore = Depends(get_design_store),
    registry: TemplateRegistry = Depends(get_template_registry),
) -> TenantDesignResponse:
    try:
        loaded = load_tenant_design(store, tenant_id, category, registry=registry)
    except DesignDeserializationError as exc:
        logger.exception(
            "Stored design unreadable for tenant='%s' category='%s'",
            tenant_id,
            category,
        )
        raise HTTPException(
            status_code=500,
            detail="Stored design could not be read. See service logs for details.",
        ) from exc

    if loaded.revision:
        response.headers["ETag"] = revision_to_etag(loaded.revision)

    return TenantDesignResponse(
        design=loaded.design,
        source=loaded.source,
        revision=loaded.revision,
        template_id=loaded.template_id,
    )


@router.put(
    "/{tenant_id}/{category}",
    response_model=SavedDesignResponse,
    summary="Save a tenant's design for a category",
)
def put_tenant_design(
    tenant_id: str,
    category: str,
    response: Response,
    payload: Dict[str, Any] = Body(...),
    if_match: Optional[str] = Header(default=None),
    store: DesignStore = Depends(get_design_store),
) -> SavedDesignResponse:
    design = _parse_design(payload)

    try:
        stored = save_tenant_design(
            store,
            tenant_id,
            category,
            design,
            expected_revision=revision_from_etag(if_match),
        )
    except RevisionConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    response.headers["ETag"] = revision_to_etag(stored.revision)
    return SavedDesignResponse(
        tenant_id=tenant_id,
        category=category,
        revision=stored.revision,
    )


@router.delete(
    "/{tenant_id}/{category}",
    status_code=204,
    summary="Delete a tenant's saved design",
)
def delete_tenant_design(
    tenant_id: str,
    category: str,
    store: DesignStore = Depends(get_design_store),
) -> Response:
    if not store.delete(tenant_id, category):
        raise HTTPException(
            status_code=404,
            detail=f"No saved design for tenant '{tenant_id}' category '{category}'.",
        )
    return Response(status_code=204)
