"""Avatar request construction and instance URL helpers."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode, urlsplit, urlunsplit

from libravatar_client.protocol.address import EmailAddress
from libravatar_client.protocol.types import (
    DEFAULT_AVATAR,
    Explicit,
    ExplicitEmpty,
    PlaceholderPreference,
    Unset,
)


@dataclass(frozen=True)
class AvatarRequest:
    """An immutable, content-addressed avatar request."""

    address_hash: str
    size: int
    default_directive: str | None = None

    @property
    def route(self) -> str:
        """Return ``/avatar/<hash>?s=<size>[&d=<directive>]``."""
        params: list[tuple[str, str | int]] = [("s", self.size)]
        if self.default_directive is not None:
            params.append(("d", self.default_directive))
        return f"/avatar/{self.address_hash}?{urlencode(params)}"

    def url_for(self, base_url: str) -> str:
        """Return the full request URL against *base_url*."""
        return base_url.rstrip("/") + self.route


def check_size(size: int) -> None:
    """Reject sizes that are not positive integers (a caller bug, not a miss)."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise ValueError(f"Avatar size must be a positive integer, got {size!r}")


def build_avatar_request(
    email: EmailAddress,
    size: int,
    placeholder: PlaceholderPreference = Unset(),
) -> AvatarRequest:
    """Build the request for *email* at *size* pixels.

    Raises:
        ValueError: If *size* is not a positive integer.
    """
    check_size(size)

    if isinstance(placeholder, Explicit):
        directive: str | None = placeholder.value
    elif isinstance(placeholder, ExplicitEmpty):
        directive = None
    else:
        directive = DEFAULT_AVATAR

    return AvatarRequest(
        address_hash=email.hash,
        size=size,
        default_directive=directive,
    )


def build_secure_url(target: str, port: int) -> str:
    """Build an HTTPS base URL from an SRV target and port.

    The trailing root dot of a DNS name is dropped and port 443 is left
    implicit.
    """
    host = target.rstrip(".")
    if port == 443:
        return f"https://{host}"
    return f"https://{host}:{port}"


def normalize_instance_url(url: str) -> str:
    """Canonicalize an instance base URL for equality checks.

    Lowercases scheme and host, drops a default port and strips trailing
    slashes, so ``https://Example.org:443/`` equals ``https://example.org``.
    """
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError:
        return url.strip().rstrip("/")
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").rstrip(".")
    default_port = {"https": 443, "http": 80}.get(scheme)
    netloc = host if port is None or port == default_port else f"{host}:{port}"
    return urlunsplit((scheme, netloc, parts.path.rstrip("/"), parts.query, ""))
