"""Email address normalization and hashing.

Libravatar identifies an avatar by the SHA-256 hex digest of the
normalized (trimmed, lowercased) email address, so ``Alice@Example.com``
and ``  alice@example.com`` resolve to the same image everywhere.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from libravatar_client.protocol.errors import InvalidEmailError


@dataclass(frozen=True)
class EmailAddress:
    """A normalized email address (always lowercase)."""

    address: str
    domain: str

    @property
    def hash(self) -> str:
        """Return the content-addressed identifier for this address."""
        return avatar_hash(self.address)

    def __str__(self) -> str:
        return self.address


def normalize_email(raw: str) -> EmailAddress:
    """Strip, lowercase and split *raw* on its first ``@``.

    Raises:
        InvalidEmailError: If *raw* has no ``@`` or nothing after it.
    """
    normalized = raw.strip().lower()
    _, sep, domain = normalized.partition("@")
    if not sep or not domain:
        raise InvalidEmailError("Email address has no domain")
    return EmailAddress(address=normalized, domain=domain)


def avatar_hash(normalized: str) -> str:
    """Return the SHA-256 hex digest of an already normalized address."""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
