# -*- encoding: utf-8 -*-
"""
Self-addressing identifiers for registry records.

Schema and attestation identifiers are SAIDs: Blake3-256 digests of the
record's inception data, serialized as canonical JSON and encoded in CESR
qb64. The inception data always carries a registry-wide sequence number, so
two calls never produce the same identifier even with identical arguments.
"""

import json
from typing import Any

from keri.core.coring import Diger, MtrDex


def canonical_json(content: Any) -> str:
    """Deterministic JSON serialization (sorted keys, no whitespace)."""
    return json.dumps(content, sort_keys=True, separators=(',', ':'), default=str)


def compute_said(content: Any) -> str:
    """Compute SAID for content.

    Uses Diger (not Saider) because we're hashing arbitrary JSON content,
    not Self-Addressing Data with a 'd' field placeholder.
    """
    return Diger(ser=canonical_json(content).encode(), code=MtrDex.Blake3_256).qb64


def compute_payload_said(payload: Any) -> str:
    """Compute a digest for an opaque attestation payload.

    Never fails on payload shape: bytes and str are hashed as-is, other
    values as canonical JSON when they have one, else by their repr.
    """
    if isinstance(payload, bytes):
        ser = payload
    elif isinstance(payload, str):
        ser = payload.encode()
    else:
        try:
            ser = canonical_json(payload).encode()
        except (TypeError, ValueError):
            # Mixed-type or non-string keys have no canonical JSON form.
            ser = repr(payload).encode()
    return Diger(ser=ser, code=MtrDex.Blake3_256).qb64
