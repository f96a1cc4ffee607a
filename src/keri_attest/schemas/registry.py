# -*- encoding: utf-8 -*-
"""
Schema Registry - Canonical store of attestation schemas.

Owns the two policy tiers that govern the registry:
- The global schema-creator policy (who may register schemas), replaceable
  only by the holder of the AdminToken
- Each schema's attester policy (who may attest under it), fixed at
  registration

Schemas are immutable once registered and are never deleted. The `revocable`
flag is recorded on the schema but is informational: revocation of an
attestation is controlled by its attester alone.

Usage:
    registry = SchemaRegistry(admin=authority)

    schema_id = registry.register(
        name="KYC",
        description="Know-your-customer level",
        revocable=True,
        authorized_attesters=[],
        caller="BATTESTER_AID...",
    )

    schema = registry.lookup(schema_id)
    registry.update_schema_creators(admin_token, ["BCREATOR_AID..."])
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..base_registry import BaseRegistry
from ..config import utcnow
from ..digest import compute_said
from ..errors import SchemaNotFound
from ..events import EventBus, SchemaCreatorsUpdated, SchemaRegistered
from ..governance.admin import AdminAuthority, AdminToken
from ..governance.gate import AuthorizationGate

logger = logging.getLogger(__name__)


def _as_policy(identities: Iterable[str], label: str) -> Tuple[str, ...]:
    """Policy list as a tuple. A bare string is not a list of identities."""
    if isinstance(identities, (str, bytes)):
        raise TypeError(f"{label} must be a list of identities, not a single {type(identities).__name__}")
    return tuple(identities)


@dataclass(frozen=True)
class Schema:
    """
    A registered attestation schema.

    An empty `authorized_attesters` tuple means anyone may attest.
    """
    schema_id: str
    name: str
    description: str
    creator: str
    revocable: bool
    authorized_attesters: Tuple[str, ...] = ()
    created_at: str = field(default_factory=utcnow)

    @property
    def is_public(self) -> bool:
        """True if any caller may attest under this schema."""
        return not self.authorized_attesters

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_id": self.schema_id,
            "name": self.name,
            "description": self.description,
            "creator": self.creator,
            "revocable": self.revocable,
            "authorized_attesters": list(self.authorized_attesters),
            "created_at": self.created_at,
        }


class SchemaRegistry(BaseRegistry[Schema]):
    """
    Registry of attestation schemas.

    Supports:
    - Registration gated by the global schema-creator policy
    - Wholesale policy replacement gated by the AdminToken
    - Lookup returning immutable snapshots
    """

    def __init__(
        self,
        admin: AdminAuthority,
        schema_creators: Iterable[str] = (),
        events: Optional[EventBus] = None,
        clock: Callable[[], str] = utcnow,
        lock: Any = None,
        sequence: Optional[Iterator[int]] = None,
    ):
        super().__init__(lock=lock, sequence=sequence)
        self._admin = admin
        self._schema_creators: Tuple[str, ...] = _as_policy(schema_creators, "schema_creators")
        self._events = events if events is not None else EventBus()
        self._clock = clock

    def _not_found(self, identifier: str) -> SchemaNotFound:
        return SchemaNotFound(identifier)

    # -- Global policy --

    @property
    def schema_creators(self) -> Tuple[str, ...]:
        """Snapshot of the global schema-creator policy (empty = unrestricted)."""
        with self._lock:
            return self._schema_creators

    def update_schema_creators(
        self,
        admin_token: AdminToken,
        new_policy: Iterable[str],
    ) -> None:
        """
        Replace the global schema-creator policy wholesale (no merge).

        Args:
            admin_token: The registry's AdminToken
            new_policy: New list of creator identities; empty means unrestricted

        Raises:
            InvalidAdminToken: If admin_token is not the registry's token
        """
        token = self._admin.verify(admin_token)
        creators = _as_policy(new_policy, "new_policy")

        with self._lock:
            previous = self._schema_creators
            self._schema_creators = creators

        logger.info(
            f"Schema-creator policy replaced by {token.holder}: "
            f"{len(previous)} -> {len(creators)} members"
        )
        self._events.emit(SchemaCreatorsUpdated(holder=token.holder, creators=creators))

    # -- Registration --

    def register(
        self,
        name: str,
        description: str,
        revocable: bool,
        authorized_attesters: Iterable[str],
        caller: str,
    ) -> str:
        """
        Register a new schema.

        The schema ID is a SAID computed from the inception data, which
        includes a registry-wide sequence number so IDs are never reused.

        Args:
            name: Schema name (e.g. 'KYC')
            description: Human-readable description
            revocable: Informational flag, stored but not enforced
            authorized_attesters: Identities allowed to attest; empty = anyone
            caller: Identity of the registering principal (becomes creator)

        Returns:
            The new schema ID

        Raises:
            UnauthorizedSchemaCreator: If caller is not in a non-empty policy
            TypeError: If authorized_attesters is a single string
        """
        attesters = _as_policy(authorized_attesters, "authorized_attesters")

        with self._lock:
            AuthorizationGate.enforce_schema_creator(self._schema_creators, caller)

            sn = self._next_sn()
            created_at = self._clock()
            schema_id = compute_said({
                "t": "sch",
                "sn": sn,
                "name": name,
                "description": description,
                "creator": caller,
                "revocable": revocable,
                "authorized_attesters": list(attesters),
                "created_at": created_at,
            })
            schema = Schema(
                schema_id=schema_id,
                name=name,
                description=description,
                creator=caller,
                revocable=bool(revocable),
                authorized_attesters=attesters,
                created_at=created_at,
            )
            self._insert(schema_id, schema)

        logger.info(f"Registered schema: {name} -> {schema_id[:16]}... by {caller}")
        self._events.emit(SchemaRegistered(schema_id=schema_id, name=name, creator=caller))
        return schema_id

    # -- Reads --

    def lookup(self, schema_id: str) -> Schema:
        """
        Resolve a schema by exact ID.

        Raises:
            SchemaNotFound: If the ID was never registered
        """
        return self._get(schema_id)

    def list_schemas(self, creator: Optional[str] = None) -> List[Schema]:
        """List schemas in registration order, optionally filtered by creator."""
        schemas = self.list_all()
        if creator is not None:
            schemas = [s for s in schemas if s.creator == creator]
        return schemas
