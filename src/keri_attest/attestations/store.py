# -*- encoding: utf-8 -*-
"""
Attestation Store - Canonical table of attestations and their lifecycle.

Lifecycle:
    create  -> record stored, indexed by subject and schema (one atomic unit)
    revoke  -> revoked flag set, false -> true only, attester only
    is_valid -> not revoked

Records are never deleted. Revocation replaces the stored snapshot with one
whose `revoked` flag is set; indexes are untouched.

The schema's `revocable` flag is not consulted here. An attester can revoke
any attestation they created.

Usage:
    store = AttestationStore(schemas=schema_registry, indexes=index_manager)

    attestation_id = store.create(
        schema_id=schema_id,
        subject="BSUBJECT_AID...",
        data={"level": 2},
        caller="BATTESTER_AID...",
    )
    store.is_valid(attestation_id)      # True
    store.revoke(attestation_id, caller="BATTESTER_AID...")
    store.is_valid(attestation_id)      # False
"""

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional

from ..base_registry import BaseRegistry
from ..config import utcnow
from ..digest import compute_payload_said, compute_said
from ..errors import AttestationNotFound
from ..events import AttestationCreated, AttestationRevoked, EventBus
from ..governance.gate import AuthorizationGate
from ..indexes import IndexManager
from ..schemas.registry import SchemaRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attestation:
    """
    An attestation record.

    `data` is an opaque payload; the registry never interprets it.
    `data_said` is its digest, fixed at creation for integrity audits.
    """
    attestation_id: str
    schema_id: str
    attester: str
    subject: str
    timestamp: str
    sn: int
    data: Any = field(default=None, compare=False)
    data_said: str = ""
    revoked: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.revoked

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for export. The payload is deep-copied."""
        return {
            "attestation_id": self.attestation_id,
            "schema_id": self.schema_id,
            "attester": self.attester,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "sn": self.sn,
            "data": copy.deepcopy(self.data),
            "data_said": self.data_said,
            "revoked": self.revoked,
        }


class AttestationDetails(NamedTuple):
    """Read-only view returned by AttestationStore.get_details."""
    schema_id: str
    attester: str
    subject: str
    timestamp: str
    revoked: bool
    data: Any


class AttestationStore(BaseRegistry[Attestation]):
    """
    Store of attestation records.

    Shares its lock with the schema registry and the index manager; create
    holds it across schema lookup, authorization, insert and both index
    appends.
    """

    def __init__(
        self,
        schemas: SchemaRegistry,
        indexes: IndexManager,
        events: Optional[EventBus] = None,
        clock: Callable[[], str] = utcnow,
        lock: Any = None,
        sequence: Optional[Iterator[int]] = None,
    ):
        super().__init__(lock=lock, sequence=sequence)
        self._schemas = schemas
        self._indexes = indexes
        self._events = events if events is not None else EventBus()
        self._clock = clock

    def _not_found(self, identifier: str) -> AttestationNotFound:
        return AttestationNotFound(identifier)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(self, schema_id: str, subject: str, data: Any, caller: str) -> str:
        """
        Create an attestation under a schema.

        Args:
            schema_id: Schema to attest under
            subject: Identity (or opaque reference) the claim is about
            data: Opaque payload, stored as a private deep copy
            caller: Identity of the attester

        Returns:
            The new attestation ID

        Raises:
            SchemaNotFound: If schema_id was never registered
            UnauthorizedAttester: If caller is not in the schema's non-empty policy
        """
        payload = copy.deepcopy(data)

        with self._lock:
            schema = self._schemas.lookup(schema_id)
            AuthorizationGate.enforce_attester(schema, caller)

            sn = self._next_sn()
            timestamp = self._clock()
            data_said = compute_payload_said(payload)
            attestation_id = compute_said({
                "t": "att",
                "sn": sn,
                "schema_id": schema_id,
                "attester": caller,
                "subject": subject,
                "data_said": data_said,
                "timestamp": timestamp,
            })
            record = Attestation(
                attestation_id=attestation_id,
                schema_id=schema_id,
                attester=caller,
                subject=subject,
                timestamp=timestamp,
                sn=sn,
                data=payload,
                data_said=data_said,
            )
            self._commit(record)

        logger.info(
            f"Created attestation {attestation_id[:16]}... "
            f"under {schema.name} by {caller} about {subject}"
        )
        self._events.emit(AttestationCreated(
            attestation_id=attestation_id,
            schema_id=schema_id,
            attester=caller,
            subject=subject,
        ))
        return attestation_id

    def _commit(self, record: Attestation) -> None:
        """Insert record and append to both indexes, or apply nothing.

        Caller holds the lock.
        """
        attestation_id = record.attestation_id
        self._insert(attestation_id, record)
        try:
            self._indexes.append_to_subject_index(record.subject, attestation_id)
            try:
                self._indexes.append_to_schema_index(record.schema_id, attestation_id)
            except Exception:
                self._indexes.discard_last_from_subject_index(record.subject, attestation_id)
                raise
        except Exception as e:
            self._discard(attestation_id)
            logger.error(f"Indexing failed, attestation {attestation_id[:16]}... not created: {e}")
            raise

    def revoke(self, attestation_id: str, caller: str) -> None:
        """
        Revoke an attestation. Only its attester may do so.

        Revoking an already-revoked attestation is a no-op: no error and no
        second notification.

        Raises:
            AttestationNotFound: If attestation_id is unknown
            UnauthorizedAttester: If caller is not the record's attester
        """
        with self._lock:
            record = self._get(attestation_id)
            AuthorizationGate.enforce_revoker(record, caller)
            if record.revoked:
                logger.debug(f"Attestation {attestation_id[:16]}... already revoked")
                return
            self._replace(attestation_id, replace(record, revoked=True))

        logger.info(f"Revoked attestation {attestation_id[:16]}... by {caller}")
        self._events.emit(AttestationRevoked(
            attestation_id=attestation_id,
            schema_id=record.schema_id,
            attester=record.attester,
        ))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def is_valid(self, attestation_id: str) -> bool:
        """
        True unless revoked. No expiry or schema checks.

        Raises:
            AttestationNotFound: If attestation_id is unknown
        """
        return not self._get(attestation_id).revoked

    def get(self, attestation_id: str) -> Attestation:
        """Snapshot of the record with a private copy of its payload."""
        record = self._get(attestation_id)
        return replace(record, data=copy.deepcopy(record.data))

    def get_details(self, attestation_id: str) -> AttestationDetails:
        """
        Raises:
            AttestationNotFound: If attestation_id is unknown
        """
        record = self._get(attestation_id)
        return AttestationDetails(
            schema_id=record.schema_id,
            attester=record.attester,
            subject=record.subject,
            timestamp=record.timestamp,
            revoked=record.revoked,
            data=copy.deepcopy(record.data),
        )

    def list_attestations(self, attester: Optional[str] = None) -> List[Attestation]:
        """List records in creation order, optionally filtered by attester."""
        records = self.list_all()
        if attester is not None:
            records = [r for r in records if r.attester == attester]
        return [replace(r, data=copy.deepcopy(r.data)) for r in records]
