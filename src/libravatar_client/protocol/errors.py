"""Libravatar client exception hierarchy.

All client-specific exceptions inherit from :class:`LibravatarError`.
None of them escape :func:`libravatar_client.sdk.client.resolve_avatar`,
which collapses every failure into ``NotFound``.
"""

from __future__ import annotations


class LibravatarError(Exception):
    """Base exception for all libravatar client errors."""


class InvalidEmailError(LibravatarError):
    """Raised when an email address has no usable domain."""


class InvalidAvatarError(LibravatarError):
    """Raised when a fetched payload is not an acceptable avatar image."""


class MissingContentTypeError(InvalidAvatarError):
    """Raised when the response carries no Content-Type header."""


class UnsupportedContentTypeError(InvalidAvatarError):
    """Raised when the declared Content-Type is not on the allow-list."""


class SignatureMismatchError(InvalidAvatarError):
    """Raised when the payload bytes do not match the declared image type."""
