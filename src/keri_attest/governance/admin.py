# -*- encoding: utf-8 -*-
"""
AdminToken - Single-issue capability for the global schema-creator policy.

The token is an explicit, auditable credential rather than an opaque object:

    said      = Blake3-256 SAID of {holder, registry, issued_at}
    signature = Ed25519 signature over said by a one-time admin signer

AdminAuthority mints exactly one token, keeps only the verification key,
and discards the signing key. Without the signing key no second token can
be produced, so verification reduces to "every field matches the issued
token, and the signature verifies against the retained key". Audit records
use the issued token, never the presented copy.

Usage:
    authority = AdminAuthority(holder="BDEPLOYER_AID...", registry="EREG...")
    token = authority.token          # hand to the deployer
    authority.verify(token)          # raises InvalidAdminToken if forged
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from keri.core.signing import Salter, Signer

from ..digest import compute_said
from ..errors import InvalidAdminToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminToken:
    """Capability credential authorizing schema-creator policy updates."""
    holder: str
    registry: str
    said: str
    signature: bytes = field(repr=False)
    issued_at: str = ""

    def to_dict(self) -> dict:
        return {
            "holder": self.holder,
            "registry": self.registry,
            "said": self.said,
            "issued_at": self.issued_at,
        }


class AdminAuthority:
    """
    Issues and verifies the registry's single AdminToken.

    Args:
        holder: Identity of the principal receiving the token (the deployer)
        registry: Identifier of the registry instance the token governs
        salt: Optional qb64 salt for deterministic admin key derivation.
            A fresh random key is used when omitted.
    """

    def __init__(self, holder: str, registry: str, salt: Optional[str] = None):
        if salt is not None:
            signer = Salter(qb64=salt).signer(
                path=f"admin-{registry}", transferable=False, temp=True,
            )
        else:
            signer = Signer(transferable=False)

        issued_at = datetime.now(timezone.utc).isoformat()
        said = compute_said({
            "t": "adm",
            "holder": holder,
            "registry": registry,
            "issued_at": issued_at,
        })
        cigar = signer.sign(ser=said.encode())

        self._verfer = signer.verfer
        self._token = AdminToken(
            holder=holder,
            registry=registry,
            said=said,
            signature=cigar.raw,
            issued_at=issued_at,
        )
        # Signing key goes out of scope here.
        del signer

        logger.info(
            f"Issued admin token {said[:16]}... to {holder} "
            f"(verifier {self._verfer.qb64[:16]}...)"
        )

    @property
    def token(self) -> AdminToken:
        return self._token

    @property
    def verifier(self) -> str:
        """qb64 verification key for auditing issued tokens."""
        return self._verfer.qb64

    def is_valid(self, token: object) -> bool:
        """True if token is the single token this authority issued."""
        if not isinstance(token, AdminToken):
            return False
        if token != self._token:
            return False
        return self._verfer.verify(sig=token.signature, ser=token.said.encode())

    def verify(self, token: object) -> AdminToken:
        """
        Verify a presented token.

        Returns:
            The token this authority issued

        Raises:
            InvalidAdminToken: If the token was not issued by this authority
        """
        if not self.is_valid(token):
            logger.warning(
                f"Rejected admin token for registry {self._token.registry[:16]}..."
            )
            raise InvalidAdminToken(
                f"Admin token not valid for registry {self._token.registry}"
            )
        return self._token
