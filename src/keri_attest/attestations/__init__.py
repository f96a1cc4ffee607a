# -*- encoding: utf-8 -*-
"""
Attestations - Claim records and their lifecycle.

Usage:
    from keri_attest.attestations import Attestation, AttestationStore

    attestation_id = store.create(schema_id, subject, data, caller)
    details = store.get_details(attestation_id)
"""

from .store import (
    Attestation,
    AttestationDetails,
    AttestationStore,
)

__all__ = [
    "Attestation",
    "AttestationDetails",
    "AttestationStore",
]
