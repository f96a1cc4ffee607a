# -*- encoding: utf-8 -*-
"""
keri-attest - KERI-Identified Attestation Registry

A registry of verifiable claims ("attestations") about subjects, governed by
reusable schemas and two tiers of authorization:

    - Global schema-creator policy: who may define schemas
      (replaceable only with the registry's AdminToken)
    - Per-schema attester policy: who may attest under a schema

An empty policy list means "unrestricted"; a non-empty list requires an
exact identity match.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                  AttestationRegistry                    │
    │   One lock over schemas, attestations and indexes       │
    └──────────────────────┬──────────────────────────────────┘
                           │
          ┌────────────────┼─────────────────┐
          ▼                ▼                 ▼
    SchemaRegistry   AttestationStore   IndexManager
          │                │
          └──── AuthorizationGate ───┘

Identifiers are SAIDs (Blake3-256, CESR qb64) computed with keripy.

Usage:
    from keri_attest import AttestationRegistry, RegistryConfig

    registry = AttestationRegistry(RegistryConfig(admin_holder="BDEPLOYER..."))
    admin_token = registry.claim_admin_token()

    schema_id = registry.register_schema(
        "KYC", "Know-your-customer level", True, [], caller="BCREATOR...",
    )
    attestation_id = registry.create_attestation(
        schema_id, subject="BUSER...", data={"level": 2}, caller="BATTESTER...",
    )
    registry.is_valid(attestation_id)           # True
    registry.query_by_subject("BUSER...")       # [attestation_id]
"""

__version__ = "0.1.0"

from .attestations import Attestation, AttestationDetails, AttestationStore
from .config import RegistryConfig
from .errors import (
    AttestationNotFound,
    AuthorizationError,
    InvalidAdminToken,
    NotFoundError,
    RegistryError,
    SchemaNotFound,
    UnauthorizedAttester,
    UnauthorizedSchemaCreator,
)
from .events import (
    AttestationCreated,
    AttestationRevoked,
    EventBus,
    RegistryEvent,
    SchemaCreatorsUpdated,
    SchemaRegistered,
)
from .governance import (
    AdminAuthority,
    AdminToken,
    AuthorizationGate,
    is_authorized_attester,
    is_authorized_schema_creator,
)
from .indexes import IndexManager
from .registry import (
    AttestationRegistry,
    get_attestation_registry,
    reset_attestation_registry,
)
from .schemas import Schema, SchemaRegistry

__all__ = [
    "__version__",
    # Service
    "AttestationRegistry",
    "RegistryConfig",
    "get_attestation_registry",
    "reset_attestation_registry",
    # Components
    "SchemaRegistry",
    "AttestationStore",
    "IndexManager",
    "AuthorizationGate",
    "is_authorized_schema_creator",
    "is_authorized_attester",
    "AdminAuthority",
    # Records
    "Schema",
    "Attestation",
    "AttestationDetails",
    "AdminToken",
    # Events
    "EventBus",
    "RegistryEvent",
    "SchemaRegistered",
    "SchemaCreatorsUpdated",
    "AttestationCreated",
    "AttestationRevoked",
    # Errors
    "RegistryError",
    "AuthorizationError",
    "NotFoundError",
    "UnauthorizedSchemaCreator",
    "UnauthorizedAttester",
    "InvalidAdminToken",
    "SchemaNotFound",
    "AttestationNotFound",
]
