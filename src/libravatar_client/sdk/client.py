"""Resolve the avatar for an email address (the client's single entry point).

Pipeline, strictly in order::

    normalize email -> discover instance -> build request
        -> fetch (with one fallback) -> validate payload

Every failure along the way collapses into ``NotFound``; a missing
avatar is indistinguishable from an unreachable network.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from libravatar_client.protocol.address import normalize_email
from libravatar_client.protocol.errors import LibravatarError
from libravatar_client.protocol.request import build_avatar_request, check_size
from libravatar_client.protocol.types import NOT_FOUND, AvatarResult, Found
from libravatar_client.sdk._sync import run_sync
from libravatar_client.sdk.config import AvatarConfig
from libravatar_client.sdk.fetcher import fetch_with_fallback
from libravatar_client.sdk.resolver import InstanceResolver, create_instance_resolver
from libravatar_client.sdk.validator import validate_response

logger = logging.getLogger(__name__)


async def resolve_avatar(
    email: str,
    size: int,
    *,
    config: AvatarConfig | None = None,
    resolver: InstanceResolver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AvatarResult:
    """Get the avatar for *email* at *size* pixels.

    Args:
        email: Raw email address; case and surrounding whitespace are ignored.
        size: Requested edge length in pixels.
        config: Preferences; read from the environment if omitted.
        resolver: Instance resolver; derived from *config* if omitted.
        transport: Optional httpx transport (tests, proxies).

    Returns:
        ``Found(avatar)`` with a validated image, or ``NotFound()``.

    Raises:
        ValueError: If *size* is not a positive integer.
    """
    check_size(size)
    config = config or AvatarConfig()

    try:
        address = normalize_email(email)
    except LibravatarError as exc:
        logger.debug("Not resolving avatar: %s", exc)
        return NOT_FOUND

    resolver = resolver or create_instance_resolver(config)
    instance = await resolver.resolve(address.domain)
    request = build_avatar_request(address, size, config.default_avatar)
    logger.debug(
        "Requesting avatar %s from %s instance %s",
        request.address_hash,
        "discovered" if instance.discovered else "default",
        instance.base_url,
    )

    async with httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(config.timeout),
        follow_redirects=True,
    ) as client:
        response = await fetch_with_fallback(
            client,
            request,
            instance.base_url,
            config.fallback_instance,
            timeout=config.timeout,
        )
        if response is None:
            return NOT_FOUND

        try:
            avatar = await asyncio.wait_for(
                validate_response(response, request.address_hash),
                config.timeout,
            )
        except (LibravatarError, httpx.HTTPError, asyncio.TimeoutError) as exc:
            logger.debug("No avatar for %s: %r", request.address_hash, exc)
            return NOT_FOUND
        finally:
            await response.aclose()

    return Found(avatar)


def resolve_avatar_sync(
    email: str,
    size: int,
    *,
    config: AvatarConfig | None = None,
    resolver: InstanceResolver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AvatarResult:
    """Synchronous wrapper for :func:`resolve_avatar`."""
    return run_sync(
        resolve_avatar(
            email,
            size,
            config=config,
            resolver=resolver,
            transport=transport,
        )
    )
