# -*- encoding: utf-8 -*-
"""
Registry configuration.

Usage:
    config = RegistryConfig(
        admin_holder="BDEPLOYER_AID...",
        initial_schema_creators=["BCREATOR_AID..."],
    )
    registry = AttestationRegistry(config)

    # Or from a mapping (e.g. parsed JSON)
    config = RegistryConfig.from_dict(json.loads(path.read_text()))
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional


def utcnow() -> str:
    """Default clock: ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class RegistryConfig:
    """
    Construction-time settings for AttestationRegistry.

    Attributes:
        admin_holder: Identity of the deployer receiving the AdminToken
        initial_schema_creators: Initial global schema-creator policy.
            Empty (the default) means anyone may register schemas.
        admin_salt: Optional qb64 salt for deterministic admin key derivation
        name: Label included in the registry identifier and logs
        clock: Zero-argument callable returning the write timestamp
    """
    admin_holder: str = "deployer"
    initial_schema_creators: List[str] = field(default_factory=list)
    admin_salt: Optional[str] = None
    name: str = "attestation-registry"
    clock: Callable[[], str] = utcnow

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistryConfig":
        """Build from a mapping; unknown keys are ignored."""
        return cls(
            admin_holder=data.get("admin_holder", "deployer"),
            initial_schema_creators=list(data.get("initial_schema_creators", [])),
            admin_salt=data.get("admin_salt"),
            name=data.get("name", "attestation-registry"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "admin_holder": self.admin_holder,
            "initial_schema_creators": list(self.initial_schema_creators),
            "name": self.name,
        }
