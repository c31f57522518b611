"""Stored credential representations.

A stored password value is either a bcrypt hash or, for accounts created
before hashing was introduced, the plaintext password itself. The two are
told apart by the bcrypt prefix.

The plaintext variant exists only for rows not yet migrated
(``usergate users migrate-passwords``). Until every row is hashed, anyone
with read access to the users table can log in as those users, and the
comparison does not share bcrypt's cost.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from usergate_auth.services.password_service import PasswordHashingService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HashedCredential:
    """A bcrypt hash."""

    value: str


@dataclass(frozen=True, repr=False)
class LegacyPlaintextCredential:
    """A password stored as plaintext."""

    value: str

    def __repr__(self) -> str:
        return "LegacyPlaintextCredential(value=***)"


StoredCredential = HashedCredential | LegacyPlaintextCredential


def parse_credential(value: str) -> StoredCredential:
    """Classify a stored password value by its prefix."""
    if PasswordHashingService.is_hashed(value):
        return HashedCredential(value)
    return LegacyPlaintextCredential(value or "")


def verify_credential(
    supplied: str,
    stored: StoredCredential,
    hasher: PasswordHashingService,
) -> bool:
    """Check a supplied plaintext password against a stored credential.

    Never raises for a mismatch; a wrong password is simply ``False``.
    """
    if not supplied:
        return False

    if isinstance(stored, HashedCredential):
        return hasher.verify(supplied, stored.value)

    if isinstance(stored, LegacyPlaintextCredential):
        expected = stored.value.strip()
        if not expected:
            return False
        matched = hmac.compare_digest(
            supplied.strip().encode("utf-8"),
            expected.encode("utf-8"),
        )
        if matched:
            logger.warning("Login matched a legacy plaintext credential")
        return matched

    msg = f"Unsupported credential type: {type(stored).__name__}"
    raise TypeError(msg)
