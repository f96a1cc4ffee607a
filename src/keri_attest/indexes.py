# -*- encoding: utf-8 -*-
"""
IndexManager - Secondary indexes over the attestation table.

Maintains two append-only mappings:
- subject   -> attestation IDs about that subject
- schema ID -> attestation IDs issued under that schema

Entries are appended in creation order and never removed, including on
revocation. Queries return every ID ever indexed; callers that want only
live claims filter with AttestationStore.is_valid.

The manager shares its lock with the attestation table so a create can
insert the record and append to both indexes as one unit.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class IndexManager:
    """Subject and schema indexes for attestation enumeration."""

    def __init__(self, lock: Any = None):
        self._by_subject: Dict[str, List[str]] = {}
        self._by_schema: Dict[str, List[str]] = {}
        self._lock = lock if lock is not None else threading.RLock()

    # ------------------------------------------------------------------
    # Appends
    # ------------------------------------------------------------------

    def append_to_subject_index(self, subject: str, attestation_id: str) -> None:
        with self._lock:
            self._by_subject.setdefault(subject, []).append(attestation_id)

    def append_to_schema_index(self, schema_id: str, attestation_id: str) -> None:
        with self._lock:
            self._by_schema.setdefault(schema_id, []).append(attestation_id)

    # Rollback of an uncommitted append. Only the attestation store's atomic
    # create calls these; committed entries are never removed.

    def discard_last_from_subject_index(self, subject: str, attestation_id: str) -> None:
        with self._lock:
            self._discard_last(self._by_subject, subject, attestation_id)
        logger.debug(f"Rolled back subject index entry {attestation_id[:16]}...")

    def discard_last_from_schema_index(self, schema_id: str, attestation_id: str) -> None:
        with self._lock:
            self._discard_last(self._by_schema, schema_id, attestation_id)
        logger.debug(f"Rolled back schema index entry {attestation_id[:16]}...")

    @staticmethod
    def _discard_last(index: Dict[str, List[str]], key: str, attestation_id: str) -> None:
        entries = index.get(key)
        if not entries or entries[-1] != attestation_id:
            return
        entries.pop()
        if not entries:
            del index[key]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query_by_subject(self, subject: str) -> List[str]:
        """Attestation IDs about subject, oldest first. Empty if none."""
        with self._lock:
            return list(self._by_subject.get(subject, ()))

    def query_by_schema(self, schema_id: str) -> List[str]:
        """Attestation IDs under schema_id, oldest first. Empty if none."""
        with self._lock:
            return list(self._by_schema.get(schema_id, ()))

    def subjects(self) -> List[str]:
        """Every subject with at least one indexed attestation."""
        with self._lock:
            return list(self._by_subject)

    def stats(self, schema_id: Optional[str] = None) -> Dict[str, int]:
        """Index sizes for monitoring."""
        with self._lock:
            if schema_id is not None:
                return {"attestations": len(self._by_schema.get(schema_id, ()))}
            return {
                "subjects": len(self._by_subject),
                "schemas": len(self._by_schema),
                "entries": sum(len(ids) for ids in self._by_subject.values()),
            }
