# -*- encoding: utf-8 -*-
"""
Governance - Authorization for the attestation registry.

Two tiers of policy lists (global schema creators, per-schema attesters)
plus the single-issue AdminToken that gates updates to the global tier.

Usage:
    from keri_attest.governance import (
        AuthorizationGate,
        is_authorized_schema_creator,
        is_authorized_attester,
        AdminAuthority,
        AdminToken,
    )
"""

from .admin import AdminAuthority, AdminToken
from .gate import (
    AuthorizationGate,
    is_authorized_attester,
    is_authorized_schema_creator,
)

__all__ = [
    # Gate
    "AuthorizationGate",
    "is_authorized_attester",
    "is_authorized_schema_creator",
    # Admin capability
    "AdminAuthority",
    "AdminToken",
]
