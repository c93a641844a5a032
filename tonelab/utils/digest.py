"""Canonical JSON and SHA-256 digests for export documents."""
from __future__ import annotations
import hashlib
import json

INTEGRITY_KEY = "integrity"


def canonical_dumps(obj) -> str:
    """Serialize to canonical JSON (sorted keys, minimal whitespace, no bare NaN/Infinity)."""
    return json.dumps(
        obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"), allow_nan=False
    )


def document_digest(doc: dict) -> str:
    """SHA-256 hex of the canonical JSON of doc, integrity block excluded."""
    body = {k: v for k, v in doc.items() if k != INTEGRITY_KEY}
    return hashlib.sha256(canonical_dumps(body).encode("utf-8")).hexdigest()


def verify_document(doc: dict) -> bool:
    """True when the stored document hash matches the document body."""
    stored = (doc.get(INTEGRITY_KEY) or {}).get("document_hash_sha256")
    return stored == document_digest(doc)
