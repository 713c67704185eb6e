"""
Content revisions for stored label designs.

A revision is ``SHA-256:<hex>`` over a design's canonical bytes. Because
equal designs serialize to equal bytes, the revision serves as the HTTP
entity tag and as the expected value for conditional writes.

Bytes are canonicalized by ``services.serialization``; this module only
hashes them and converts revisions to and from header values.
"""

import hashlib
from typing import Optional, Union

REVISION_ALGORITHM = "SHA-256"


def compute_content_hash(canonical_bytes: Union[bytes, bytearray]) -> str:
    """Revision string for canonical design bytes, e.g. ``SHA-256:3b7c...``."""
    if not isinstance(canonical_bytes, (bytes, bytearray)):
        raise TypeError(
            f"expected canonical design bytes, got {type(canonical_bytes).__name__}"
        )
    return f"{REVISION_ALGORITHM}:{hashlib.sha256(canonical_bytes).hexdigest()}"


def revision_to_etag(revision: str) -> str:
    """Strong entity tag for a revision."""
    return f'"{revision}"'


def revision_from_etag(header: Optional[str]) -> Optional[str]:
    """
    Revision named by an ``ETag``/``If-Match`` value.

    Weak tags are accepted since revisions are compared by value. Returns
    None for a missing or empty header and for the ``*`` wildcard.
    """
    if header is None:
        return None
    value = header.strip()
    if value.startswith("W/"):
        value = value[2:]
    value = value.strip('"')
    if not value or value == "*":
        return None
    return value
