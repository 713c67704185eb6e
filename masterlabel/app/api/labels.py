"""
Label resolution endpoints.

Each request carries a design plus the product/batch data it should be
populated with. The service assembles the label record, builds the DPP
link from configuration and returns either the resolved label(s), an
HTML preview, or the compliance report for the combination.

Nothing here is persisted.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from masterlabel.app.config import Settings, get_settings
from masterlabel.app.schemas.base import LabelModel
from masterlabel.app.schemas.design import LabelDesign
from masterlabel.app.schemas.record import (
    BatchInput,
    LabelRecord,
    LabelVariant,
    PartyInput,
    ProductInput,
)
from masterlabel.app.services.assembler import assemble_label_record, build_dpp_url
from masterlabel.app.services.compliance import (
    ComplianceCheck,
    calculate_compliance_score,
    run_compliance_checks,
)
from masterlabel.app.services.preview import PreviewRenderError, render_label_html
from masterlabel.app.services.resolver import (
    Locale,
    MultiLabelExportConfig,
    PackageCounter,
    ResolvedLabel,
    resolve_design,
    resolve_label_series,
)
from masterlabel.app.services.validation import (
    ValidationIssue,
    validate_label_design,
    validate_label_record,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class LabelDataRequest(LabelModel):
    design: LabelDesign
    product: ProductInput
    batch: Optional[BatchInput] = None
    manufacturer: Optional[PartyInput] = None
    importer: Optional[PartyInput] = None
    variant: LabelVariant = "b2c"
    locale: Optional[Locale] = None
    counter: Optional[PackageCounter] = None
    series: Optional[MultiLabelExportConfig] = None


class ComplianceReport(LabelModel):
    checks: List[ComplianceCheck]
    score: int
    design_issues: List[ValidationIssue]
    record_issues: List[ValidationIssue]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_record(request: LabelDataRequest, settings: Settings) -> LabelRecord:
    dpp_url = ""
    if request.batch is not None and request.product.gtin:
        dpp_url = build_dpp_url(
            request.product.gtin,
            request.batch.serial_number,
            base_url=settings.public_base_url,
            resolver_format=settings.dpp_resolver_format,
        )

    return assemble_label_record(
        request.product,
        request.batch,
        manufacturer=request.manufacturer,
        importer=request.importer,
        dpp_url=dpp_url,
    )


def _resolve(request: LabelDataRequest, settings: Settings) -> List[ResolvedLabel]:
    record = _build_record(request, settings)
    locale = request.locale or settings.default_locale

    if request.series is not None:
        if request.series.label_count > settings.max_label_count:
            raise HTTPException(
                status_code=422,
                detail=(
                    f"labelCount {request.series.label_count} exceeds the "
                    f"configured maximum of {settings.max_label_count}."
                ),
            )
        return resolve_label_series(
            request.design,
            record,
            request.series,
            locale=locale,
        )

    return [
        resolve_design(
            request.design,
            record,
            counter=request.counter,
            locale=locale,
        )
    ]


# ---------------------------------------------------------------------------
# POST /labels/resolve
# ---------------------------------------------------------------------------


@router.post(
    "/resolve",
    response_model=List[ResolvedLabel],
    response_model_exclude_none=True,
    summary="Populate a design with product data",
)
def resolve_labels(
    request: LabelDataRequest,
    settings: Settings = Depends(get_settings),
) -> List[ResolvedLabel]:
    """
    Returns one resolved label, or one per package when ``series`` is
    given.
    """
    return _resolve(request, settings)


# ---------------------------------------------------------------------------
# POST /labels/preview
# ---------------------------------------------------------------------------


@router.post(
    "/preview",
    response_class=HTMLResponse,
    summary="Render an HTML preview of a populated label",
)
def preview_label(
    request: LabelDataRequest,
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    # A series previews its first label.
    label = _resolve(request, settings)[0]

    try:
        html = render_label_html(label)
    except PreviewRenderError as exc:
        logger.exception("Label preview rendering failed")
        raise HTTPException(
            status_code=500,
            detail="Label preview rendering failed. See service logs for details.",
        ) from exc

    return HTMLResponse(content=html)


# ---------------------------------------------------------------------------
# POST /labels/compliance
# ---------------------------------------------------------------------------


@router.post(
    "/compliance",
    response_model=ComplianceReport,
    response_model_exclude_none=True,
    summary="Check a design and its data against labelling obligations",
)
def check_compliance(
    request: LabelDataRequest,
    settings: Settings = Depends(get_settings),
) -> ComplianceReport:
    record = _build_record(request, settings)
    checks = run_compliance_checks(request.design, record, request.variant)

    return ComplianceReport(
        checks=checks,
        score=calculate_compliance_score(checks),
        design_issues=validate_label_design(request.design),
        record_issues=validate_label_record(record, request.variant),
    )
