# -*- encoding: utf-8 -*-
"""
Registry Errors - Synchronous, non-retryable failures.

Every error here means a caller or policy violation, or a reference to an
identifier that was never registered. None of them is transient: the registry
never retries, and an operation that raises has applied no state change.

Hierarchy:
    RegistryError
    ├── AuthorizationError
    │   ├── UnauthorizedSchemaCreator
    │   ├── UnauthorizedAttester
    │   └── InvalidAdminToken
    └── NotFoundError (also a KeyError)
        ├── SchemaNotFound
        └── AttestationNotFound
"""

from typing import Optional


class RegistryError(Exception):
    """Base exception for attestation registry errors."""
    pass


# =============================================================================
# Authorization
# =============================================================================


class AuthorizationError(RegistryError):
    """Caller is not permitted to perform the operation."""
    pass


class UnauthorizedSchemaCreator(AuthorizationError):
    """Caller is not in the (non-empty) global schema-creator policy."""

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"Not an authorized schema creator: {caller}")


class UnauthorizedAttester(AuthorizationError):
    """
    Caller may not attest under a schema, or may not revoke an attestation.

    Raised for both cases because revocation rights belong exclusively to the
    attester that created the record.
    """

    def __init__(
        self,
        caller: str,
        schema_id: Optional[str] = None,
        attestation_id: Optional[str] = None,
    ):
        self.caller = caller
        self.schema_id = schema_id
        self.attestation_id = attestation_id
        if attestation_id is not None:
            message = f"{caller} is not the attester of {attestation_id}"
        else:
            message = f"{caller} is not an authorized attester for schema {schema_id}"
        super().__init__(message)


class InvalidAdminToken(AuthorizationError):
    """Presented admin token is not the registry's single valid token."""
    pass


# =============================================================================
# Missing references
# =============================================================================


class NotFoundError(RegistryError, KeyError):
    """Referenced identifier is absent from its table."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class SchemaNotFound(NotFoundError):
    """Schema identifier was never registered."""

    def __init__(self, schema_id: str):
        self.schema_id = schema_id
        super().__init__(f"Schema not found: {schema_id}")


class AttestationNotFound(NotFoundError):
    """Attestation identifier was never created."""

    def __init__(self, attestation_id: str):
        self.attestation_id = attestation_id
        super().__init__(f"Attestation not found: {attestation_id}")
