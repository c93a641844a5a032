from __future__ import annotations

import math

import pytest

from tonelab.utils.digest import canonical_dumps, document_digest, verify_document


def test_canonical_dumps_is_deterministic():
    obj = {"b": 1, "a": 2, "nested": {"z": 1, "y": 2}}
    assert canonical_dumps(obj) == '{"a":2,"b":1,"nested":{"y":2,"z":1}}'


def test_canonical_dumps_rejects_bare_non_finite():
    with pytest.raises(ValueError):
        canonical_dumps({"snr": math.inf})


def test_document_digest_ignores_key_order_and_integrity():
    doc1 = {"b": 1, "a": [2.5, "NaN"]}
    doc2 = {"a": [2.5, "NaN"], "b": 1, "integrity": {"document_hash_sha256": "x"}}
    assert document_digest(doc1) == document_digest(doc2)


def test_verify_document_without_integrity_block():
    assert not verify_document({"a": 1})
    doc = {"a": 1}
    doc["integrity"] = {"document_hash_sha256": document_digest(doc)}
    assert verify_document(doc)
