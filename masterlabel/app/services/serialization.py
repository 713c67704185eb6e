"""
Design serialization and format migration.

Persisted designs are one canonical JSON document per tenant/category:

- camelCase keys, ``_version`` at the top level
- keys sorted, compact separators, UTF-8
- optional attributes that are unset are omitted

Canonical bytes are deterministic, so equal designs serialize to equal
bytes and share a content revision.

Format history:

    1   flat element list, no sections; elements carry no ``sectionId``
    2   sections + ``sectionId`` on every element (current)

Older payloads are upgraded on read. Payloads from a newer format are
rejected rather than silently truncated.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Union

from pydantic import ValidationError

from masterlabel.app.defaults.factory import create_default_sections
from masterlabel.app.schemas.design import DESIGN_FORMAT_VERSION, LabelDesign
from masterlabel.app.schemas.sections import SectionId
from masterlabel.app.utils.hashing import compute_content_hash

logger = logging.getLogger(__name__)


class DesignDeserializationError(ValueError):
    """Raised when a persisted payload cannot be turned into a design."""


class UnsupportedDesignVersionError(DesignDeserializationError):
    """Raised for payloads written by a newer format version."""


# ---------------------------------------------------------------------------
# Canonical serialization
# ---------------------------------------------------------------------------


def design_to_payload(design: LabelDesign) -> Dict[str, Any]:
    return design.model_dump(mode="json", by_alias=True, exclude_none=True)


def canonical_json_bytes(payload: Dict[str, Any]) -> bytes:
    return json.dumps(
        payload,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


def serialize_design(design: LabelDesign) -> bytes:
    return canonical_json_bytes(design_to_payload(design))


def compute_design_revision(design: LabelDesign) -> str:
    """``SHA-256:<hex>`` over the canonical bytes."""
    return compute_content_hash(serialize_design(design))


# ---------------------------------------------------------------------------
# Migration
# ---------------------------------------------------------------------------


def _upgrade_v1(payload: Dict[str, Any]) -> Dict[str, Any]:
    upgraded = dict(payload)

    sections = [dict(s) for s in upgraded.get("sections") or []]
    if not sections:
        sections = [
            s.model_dump(mode="json", by_alias=True, exclude_none=True)
            for s in create_default_sections()
        ]

    custom_id = SectionId.CUSTOM.value
    elements = []
    unplaced = 0
    for raw in upgraded.get("elements") or []:
        element = dict(raw)
        if not element.get("sectionId") and not element.get("section_id"):
            element.pop("section_id", None)
            element["sectionId"] = custom_id
            element["sortOrder"] = unplaced
            unplaced += 1
        elements.append(element)

    if unplaced:
        custom = next((s for s in sections if s.get("id") == custom_id), None)
        if custom is None:
            next_order = max((s.get("sortOrder", 0) for s in sections), default=-1) + 1
            custom = {
                "id": custom_id,
                "label": f"ml.section.{custom_id}",
                "sortOrder": next_order,
            }
            sections.append(custom)
        custom["visible"] = True

    upgraded["sections"] = sections
    upgraded["elements"] = elements
    upgraded["_version"] = 2
    return upgraded


def upgrade_design_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring a raw payload up to the current format version.

    A payload without ``_version`` is format 1. The input is not modified.
    """
    version = payload.get("_version", 1)
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise DesignDeserializationError(f"Invalid design format version: {version!r}")

    if version > DESIGN_FORMAT_VERSION:
        raise UnsupportedDesignVersionError(
            f"Design format version {version} is newer than supported "
            f"version {DESIGN_FORMAT_VERSION}"
        )

    if version == 1:
        logger.info("Upgrading label design from format version 1")
        payload = _upgrade_v1(payload)

    return payload


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------


def deserialize_design(data: Union[bytes, str, Dict[str, Any]]) -> LabelDesign:
    if isinstance(data, (bytes, bytearray, str)):
        try:
            payload = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DesignDeserializationError(f"Design payload is not valid JSON: {exc}") from exc
    else:
        payload = data

    if not isinstance(payload, dict):
        raise DesignDeserializationError(
            f"Design payload must be a JSON object, got {type(payload).__name__}"
        )

    payload = upgrade_design_payload(payload)

    try:
        return LabelDesign.model_validate(payload)
    except ValidationError as exc:
        raise DesignDeserializationError(str(exc)) from exc
