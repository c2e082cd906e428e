"""Libravatar protocol -- pure, I/O-free building blocks.

Public API re-exports for ``libravatar_client.protocol``.
"""

from libravatar_client.protocol.types import (
    DEFAULT_HOST,
    DEFAULT_AVATAR,
    AVATAR_SERVICE,
    DEFAULT_TIMEOUT,
    ContentTypeMeta,
    SUPPORTED_CONTENT_TYPES,
    Unset,
    ExplicitEmpty,
    Explicit,
    PlaceholderPreference,
    placeholder_from_setting,
    AvatarFile,
    Found,
    NotFound,
    NOT_FOUND,
    AvatarResult,
)

from libravatar_client.protocol.errors import (
    LibravatarError,
    InvalidEmailError,
    InvalidAvatarError,
    MissingContentTypeError,
    UnsupportedContentTypeError,
    SignatureMismatchError,
)

from libravatar_client.protocol.address import EmailAddress, normalize_email, avatar_hash

from libravatar_client.protocol.request import (
    AvatarRequest,
    build_avatar_request,
    check_size,
    build_secure_url,
    normalize_instance_url,
)

from libravatar_client.protocol.signatures import signatures_match

__all__ = [
    # Types
    "DEFAULT_HOST",
    "DEFAULT_AVATAR",
    "AVATAR_SERVICE",
    "DEFAULT_TIMEOUT",
    "ContentTypeMeta",
    "SUPPORTED_CONTENT_TYPES",
    "Unset",
    "ExplicitEmpty",
    "Explicit",
    "PlaceholderPreference",
    "placeholder_from_setting",
    "AvatarFile",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "AvatarResult",
    # Errors
    "LibravatarError",
    "InvalidEmailError",
    "InvalidAvatarError",
    "MissingContentTypeError",
    "UnsupportedContentTypeError",
    "SignatureMismatchError",
    # Address
    "EmailAddress",
    "normalize_email",
    "avatar_hash",
    # Request
    "AvatarRequest",
    "build_avatar_request",
    "check_size",
    "build_secure_url",
    "normalize_instance_url",
    # Signatures
    "signatures_match",
]
