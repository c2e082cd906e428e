"""Validate a fetched avatar before handing it to the caller.

Avatar servers are untrusted.  Only a closed allow-list of image types
is accepted, and the payload must carry the magic bytes of the type it
claims to be, otherwise it is thrown away as malformed or malicious.
"""

from __future__ import annotations

import logging

import httpx

from libravatar_client.protocol.errors import (
    MissingContentTypeError,
    SignatureMismatchError,
    UnsupportedContentTypeError,
)
from libravatar_client.protocol.signatures import signatures_match
from libravatar_client.protocol.types import (
    SUPPORTED_CONTENT_TYPES,
    AvatarFile,
    ContentTypeMeta,
)

logger = logging.getLogger(__name__)


def lookup_content_type(declared: str | None) -> ContentTypeMeta:
    """Return the allow-list entry for a Content-Type header value.

    Parameters such as ``; charset=binary`` are ignored and matching is
    case-insensitive.

    Raises:
        MissingContentTypeError: If *declared* is empty.
        UnsupportedContentTypeError: If the type is not allow-listed.
    """
    if not declared:
        raise MissingContentTypeError("Response has no Content-Type")

    key = declared.split(";", 1)[0].strip().lower()
    meta = SUPPORTED_CONTENT_TYPES.get(key)
    if meta is None:
        raise UnsupportedContentTypeError(f"Unsupported Content-Type: {declared!r}")
    return meta


async def validate_response(response: httpx.Response, address_hash: str) -> AvatarFile:
    """Check a successful response and package it as an :class:`AvatarFile`.

    The body is only read once the declared type has passed the
    allow-list.

    Raises:
        InvalidAvatarError: If any check fails.
    """
    try:
        meta = lookup_content_type(response.headers.get("content-type"))
    except (MissingContentTypeError, UnsupportedContentTypeError) as exc:
        logger.info("Discarding avatar %s: %s", address_hash, exc)
        raise

    data = await response.aread()

    if not signatures_match(data, meta.signature, meta.tail):
        logger.info(
            "Discarding avatar %s: body is not a valid %s", address_hash, meta.content_type
        )
        raise SignatureMismatchError(
            f"Payload does not match the {meta.content_type} signature"
        )

    return AvatarFile(
        data=data,
        content_type=meta.content_type,
        filename=f"{address_hash}.{meta.extension}",
    )
