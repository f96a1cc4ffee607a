# -*- encoding: utf-8 -*-
"""
AttestationRegistry - The long-lived registry service.

Composes the four components around one transactional boundary:

    ┌────────────────────────────────────────────────────────┐
    │                 AttestationRegistry                    │
    │   shared RLock · shared sequence · EventBus · Admin    │
    └──────┬─────────────────┬──────────────────┬────────────┘
           │                 │                  │
           ▼                 ▼                  ▼
    SchemaRegistry ◄── AttestationStore ──► IndexManager
      (schemas,            (attestations)     (by subject,
       creator policy)                         by schema)

Every mutation holds the shared lock for its full check-and-write. Reads
take the same lock, so no reader observes an attestation present in the
table but missing from an index.

The AdminToken is minted at construction and can be claimed exactly once by
the deployer.

Usage:
    from keri_attest import AttestationRegistry, RegistryConfig

    registry = AttestationRegistry(RegistryConfig(admin_holder="BDEPLOYER..."))
    admin_token = registry.claim_admin_token()

    schema_id = registry.register_schema("KYC", "desc", True, [], caller="BCREATOR...")
    att_id = registry.create_attestation(schema_id, "BSUBJECT...", {"level": 2}, caller="BATT...")
    registry.revoke_attestation(att_id, caller="BATT...")
"""

import itertools
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from .attestations.store import AttestationDetails, AttestationStore
from .config import RegistryConfig
from .digest import compute_said
from .errors import InvalidAdminToken
from .events import EventBus, Observer
from .governance.admin import AdminAuthority, AdminToken
from .indexes import IndexManager
from .schemas.registry import Schema, SchemaRegistry

logger = logging.getLogger(__name__)


class AttestationRegistry:
    """
    Schema registry, attestation store and indexes behind one lock.

    Args:
        config: Construction settings (defaults: unrestricted schema creation,
            random admin key)
    """

    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config or RegistryConfig()
        self._lock = threading.RLock()
        sequence = itertools.count()

        self.registry_id = compute_said({
            "t": "reg",
            "name": self.config.name,
            "admin_holder": self.config.admin_holder,
            "created_at": self.config.clock(),
        })
        self.events = EventBus()
        self._admin = AdminAuthority(
            holder=self.config.admin_holder,
            registry=self.registry_id,
            salt=self.config.admin_salt,
        )
        self._admin_token_claimed = False

        self.schemas = SchemaRegistry(
            admin=self._admin,
            schema_creators=self.config.initial_schema_creators,
            events=self.events,
            clock=self.config.clock,
            lock=self._lock,
            sequence=sequence,
        )
        self.indexes = IndexManager(lock=self._lock)
        self.attestations = AttestationStore(
            schemas=self.schemas,
            indexes=self.indexes,
            events=self.events,
            clock=self.config.clock,
            lock=self._lock,
            sequence=sequence,
        )

        logger.info(
            f"Initialized attestation registry {self.config.name} "
            f"({self.registry_id[:16]}...), admin {self.config.admin_holder}"
        )

    # ------------------------------------------------------------------
    # Admin capability
    # ------------------------------------------------------------------

    def claim_admin_token(self) -> AdminToken:
        """
        Hand the AdminToken to the deployer. Succeeds exactly once.

        Raises:
            InvalidAdminToken: If the token was already claimed
        """
        with self._lock:
            if self._admin_token_claimed:
                raise InvalidAdminToken(
                    f"Admin token for {self.registry_id} was already claimed"
                )
            self._admin_token_claimed = True
        logger.info(f"Admin token claimed by {self._admin.token.holder}")
        return self._admin.token

    @property
    def admin_verifier(self) -> str:
        """qb64 key that verifies the AdminToken signature."""
        return self._admin.verifier

    # ------------------------------------------------------------------
    # Schemas
    # ------------------------------------------------------------------

    def register_schema(
        self,
        name: str,
        description: str,
        revocable: bool,
        authorized_attesters: Iterable[str],
        caller: str,
    ) -> str:
        return self.schemas.register(
            name, description, revocable, authorized_attesters, caller,
        )

    def update_schema_creators(
        self,
        admin_token: AdminToken,
        new_policy: Iterable[str],
    ) -> None:
        self.schemas.update_schema_creators(admin_token, new_policy)

    def lookup_schema(self, schema_id: str) -> Schema:
        return self.schemas.lookup(schema_id)

    # ------------------------------------------------------------------
    # Attestations
    # ------------------------------------------------------------------

    def create_attestation(
        self,
        schema_id: str,
        subject: str,
        data: Any,
        caller: str,
    ) -> str:
        return self.attestations.create(schema_id, subject, data, caller)

    def revoke_attestation(self, attestation_id: str, caller: str) -> None:
        self.attestations.revoke(attestation_id, caller)

    def is_valid(self, attestation_id: str) -> bool:
        return self.attestations.is_valid(attestation_id)

    def get_details(self, attestation_id: str) -> AttestationDetails:
        return self.attestations.get_details(attestation_id)

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def query_by_subject(self, subject: str) -> List[str]:
        return self.indexes.query_by_subject(subject)

    def query_by_schema(self, schema_id: str) -> List[str]:
        return self.indexes.query_by_schema(schema_id)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> None:
        self.events.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self.events.unsubscribe(observer)

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "registry_id": self.registry_id,
                "schemas": len(self.schemas),
                "attestations": len(self.attestations),
                "schema_creators": len(self.schemas.schema_creators),
                **self.indexes.stats(),
            }


# Module-level singleton
_registry: Optional[AttestationRegistry] = None
_registry_lock = threading.Lock()


def get_attestation_registry(
    config: Optional[RegistryConfig] = None,
) -> AttestationRegistry:
    """Get the process-wide attestation registry.

    Args:
        config: Used only when the registry is first created.
    """
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = AttestationRegistry(config)
        elif config is not None:
            logger.warning("Attestation registry already initialized; config ignored")
        return _registry


def reset_attestation_registry():
    """Reset the registry (for testing)."""
    global _registry
    with _registry_lock:
        _registry = None
