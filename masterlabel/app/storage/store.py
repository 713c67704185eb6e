"""
Tenant design persistence.

Designs are stored as opaque canonical JSON blobs, one per
``(tenant_id, category)``. The store never interprets the blob; decoding
and format migration happen in the serialization layer on read.

``DesignStore`` is the interface consumed by the service layer.
``InMemoryDesignStore`` is the process-local implementation used by the
HTTP app and tests.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict

from masterlabel.app.utils.hashing import compute_content_hash

logger = logging.getLogger(__name__)


class RevisionConflictError(RuntimeError):
    """Raised when a write's expected revision does not match the stored one."""

    def __init__(self, tenant_id: str, category: str, expected: str, actual: Optional[str]):
        self.tenant_id = tenant_id
        self.category = category
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Design for tenant '{tenant_id}' category '{category}' is at "
            f"revision {actual or '<none>'}, expected {expected}"
        )


class StoredDesign(BaseModel):
    tenant_id: str
    category: str
    payload: bytes
    revision: str
    updated_at: datetime

    model_config = ConfigDict(frozen=True)


class DesignStore(Protocol):
    """
    Interface for tenant design persistence.

    Implementations must:
    - treat payloads as opaque bytes
    - reject writes whose ``expected_revision`` is stale
    - return ``None`` (not raise) for missing designs on read
    """

    def get(self, tenant_id: str, category: str) -> Optional[StoredDesign]:
        ...

    def save(
        self,
        tenant_id: str,
        category: str,
        payload: bytes,
        *,
        expected_revision: Optional[str] = None,
    ) -> StoredDesign:
        ...

    def delete(self, tenant_id: str, category: str) -> bool:
        ...

    def list_for_tenant(self, tenant_id: str) -> List[StoredDesign]:
        ...


class InMemoryDesignStore:
    """Thread-safe dict-backed store."""

    def __init__(self) -> None:
        self._items: Dict[Tuple[str, str], StoredDesign] = {}
        self._lock = threading.Lock()

    def get(self, tenant_id: str, category: str) -> Optional[StoredDesign]:
        with self._lock:
            return self._items.get((tenant_id, category))

    def save(
        self,
        tenant_id: str,
        category: str,
        payload: bytes,
        *,
        expected_revision: Optional[str] = None,
    ) -> StoredDesign:
        record = StoredDesign(
            tenant_id=tenant_id,
            category=category,
            payload=bytes(payload),
            revision=compute_content_hash(payload),
            updated_at=datetime.now(timezone.utc),
        )

        with self._lock:
            current = self._items.get((tenant_id, category))
            if expected_revision is not None:
                actual = current.revision if current else None
                if actual != expected_revision:
                    logger.warning(
                        "Revision conflict for tenant='%s' category='%s'",
                        tenant_id,
                        category,
                    )
                    raise RevisionConflictError(tenant_id, category, expected_revision, actual)
            self._items[(tenant_id, category)] = record

        logger.info(
            "Stored design tenant='%s' category='%s' revision=%s",
            tenant_id,
            category,
            record.revision,
        )
        return record

    def delete(self, tenant_id: str, category: str) -> bool:
        with self._lock:
            removed = self._items.pop((tenant_id, category), None)
        if removed is not None:
            logger.info("Deleted design tenant='%s' category='%s'", tenant_id, category)
        return removed is not None

    def list_for_tenant(self, tenant_id: str) -> List[StoredDesign]:
        with self._lock:
            items = [item for (tenant, _), item in self._items.items() if tenant == tenant_id]
        return sorted(items, key=lambda item: item.category)
