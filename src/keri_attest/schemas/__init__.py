# -*- encoding: utf-8 -*-
"""
Schema Registry - Governed attestation schema definitions.

Usage:
    from keri_attest.schemas import Schema, SchemaRegistry

    schema_id = registry.register(
        name="KYC",
        description="Know-your-customer level",
        revocable=True,
        authorized_attesters=["BATTESTER_AID..."],
        caller="BCREATOR_AID...",
    )
    schema = registry.lookup(schema_id)
"""

from .registry import (
    Schema,
    SchemaRegistry,
)

__all__ = [
    "Schema",
    "SchemaRegistry",
]
