"""Core types and constants for the libravatar client."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union


# Instance used when the domain has no dedicated one (and as fallback)
DEFAULT_HOST = "https://seccdn.libravatar.org"

# Placeholder directive sent when the user has no preference
DEFAULT_AVATAR = "identicon"

# SRV service label for HTTPS-capable instances
AVATAR_SERVICE = "_avatars-sec._tcp"

# Seconds allowed for each DNS lookup and each HTTP attempt
DEFAULT_TIMEOUT = 3.0


@dataclass(frozen=True)
class ContentTypeMeta:
    """Allow-list entry for a declared image Content-Type.

    ``content_type`` is the canonical form handed to callers, which may
    differ from the key the server declared (``image/jpg`` becomes
    ``image/jpeg``).
    """

    content_type: str
    signature: tuple[int, ...]
    tail: tuple[int, ...] | None = None

    @property
    def extension(self) -> str:
        return self.content_type.split("/")[1]


_JPEG = ContentTypeMeta(
    content_type="image/jpeg",
    signature=(0xFF, 0xD8),
    tail=(0xFF, 0xD9),
)

_PNG = ContentTypeMeta(
    content_type="image/png",
    # http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html
    signature=(137, 80, 78, 71, 13, 10, 26, 10),
)

SUPPORTED_CONTENT_TYPES: Mapping[str, ContentTypeMeta] = MappingProxyType(
    {
        "image/jpg": _JPEG,
        "image/jpeg": _JPEG,
        "image/png": _PNG,
    }
)


# ---------------------------------------------------------------------------
# Default placeholder preference
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Unset:
    """No preference stored: send :data:`DEFAULT_AVATAR`."""


@dataclass(frozen=True)
class ExplicitEmpty:
    """The user cleared the preference: send no ``d=`` directive at all."""


@dataclass(frozen=True)
class Explicit:
    """The user chose a directive: send it verbatim."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Explicit placeholder requires a non-empty value; use ExplicitEmpty")


PlaceholderPreference = Union[Unset, ExplicitEmpty, Explicit]


def placeholder_from_setting(raw: str | None) -> PlaceholderPreference:
    """Map a stored string setting onto a placeholder variant.

    ``None`` means the setting was never stored, ``""`` means it was
    stored empty on purpose.
    """
    if raw is None:
        return Unset()
    if raw == "":
        return ExplicitEmpty()
    return Explicit(raw)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AvatarFile:
    """A validated avatar image held in memory."""

    data: bytes
    content_type: str
    filename: str

    def __repr__(self) -> str:
        return (
            f"AvatarFile(filename={self.filename!r}, "
            f"content_type={self.content_type!r}, size={len(self.data)})"
        )


@dataclass(frozen=True)
class Found:
    """An avatar was resolved and validated."""

    avatar: AvatarFile


@dataclass(frozen=True)
class NotFound:
    """No acceptable avatar could be obtained, for whatever reason."""


NOT_FOUND = NotFound()

AvatarResult = Union[Found, NotFound]
