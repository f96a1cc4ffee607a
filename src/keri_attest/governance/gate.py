# -*- encoding: utf-8 -*-
"""
AuthorizationGate - Fail-closed policy-list checks for registry operations.

Two tiers of authorization:
- Global schema-creator policy: who may register schemas
- Per-schema attester policy: who may attest under a given schema

A policy list that is empty means "unrestricted". A non-empty list requires
the caller's identity to appear in it by exact match; there is no prefix or
partial matching.

Usage:
    from keri_attest.governance import AuthorizationGate, is_authorized_attester

    if is_authorized_attester(schema, caller):
        ...

    # Or fail-closed: raises UnauthorizedAttester
    AuthorizationGate.enforce_attester(schema, caller)
"""

import logging
from typing import TYPE_CHECKING, Sequence

from ..errors import UnauthorizedAttester, UnauthorizedSchemaCreator

if TYPE_CHECKING:
    from ..attestations.store import Attestation
    from ..schemas.registry import Schema

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def _policy_allows(policy: Sequence[str], caller: str) -> bool:
    if not policy:
        return True
    for member in policy:
        if member == caller:
            return True
    return False


def is_authorized_schema_creator(policy: Sequence[str], caller: str) -> bool:
    """True if policy is empty or lists caller exactly."""
    return _policy_allows(policy, caller)


def is_authorized_attester(schema: "Schema", caller: str) -> bool:
    """True if the schema's attester policy is empty or lists caller exactly."""
    return _policy_allows(schema.authorized_attesters, caller)


# ---------------------------------------------------------------------------
# AuthorizationGate
# ---------------------------------------------------------------------------


class AuthorizationGate:
    """
    Enforcement wrapper around the policy predicates.

    Each enforce_* call either returns None or raises the matching
    AuthorizationError. Denials are logged for audit. Read-only operations
    (lookup, get_details, queries) are not gated.
    """

    @staticmethod
    def enforce_schema_creator(policy: Sequence[str], caller: str) -> None:
        """
        Raises:
            UnauthorizedSchemaCreator: If caller is not in a non-empty policy
        """
        if not is_authorized_schema_creator(policy, caller):
            logger.warning(
                f"Authorization denied: {caller} is not in the schema-creator "
                f"policy ({len(policy)} members)"
            )
            raise UnauthorizedSchemaCreator(caller)

    @staticmethod
    def enforce_attester(schema: "Schema", caller: str) -> None:
        """
        Raises:
            UnauthorizedAttester: If caller is not in the schema's non-empty policy
        """
        if not is_authorized_attester(schema, caller):
            logger.warning(
                f"Authorization denied: {caller} may not attest under "
                f"{schema.name} ({schema.schema_id[:16]}...)"
            )
            raise UnauthorizedAttester(caller, schema_id=schema.schema_id)

    @staticmethod
    def enforce_revoker(record: "Attestation", caller: str) -> None:
        """
        Only the original attester may revoke. Subjects and administrators
        have no revocation rights.

        Raises:
            UnauthorizedAttester: If caller is not the record's attester
        """
        if record.attester != caller:
            logger.warning(
                f"Authorization denied: {caller} may not revoke "
                f"{record.attestation_id[:16]}... (attester {record.attester})"
            )
            raise UnauthorizedAttester(
                caller,
                schema_id=record.schema_id,
                attestation_id=record.attestation_id,
            )
