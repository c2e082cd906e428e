"""Fetch an avatar from the resolved instance, falling back once.

Even when a domain runs its own instance there are times it cannot be
used: the TLS certificate is invalid or expired, the host is down, a
proxy refuses the request, or it answers with an error status.  In that
case the request is repeated exactly once against the fallback instance
(the user's preferred instance, or the default one).  The same instance
is never asked twice.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from libravatar_client.protocol.request import AvatarRequest, normalize_instance_url
from libravatar_client.protocol.types import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


async def _attempt(
    client: httpx.AsyncClient,
    url: str,
    timeout: float,
) -> httpx.Response | None:
    """Issue one GET and return the response only if it is a 2xx.

    The body is left unread (streamed) so the caller can reject it
    before downloading.  Any transport failure returns ``None``.
    """
    try:
        request = client.build_request("GET", url)
        response = await asyncio.wait_for(client.send(request, stream=True), timeout)
    except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as exc:
        logger.debug("Avatar request to %s failed: %r", url, exc)
        return None

    if not response.is_success:
        logger.debug("Avatar request to %s returned HTTP %d", url, response.status_code)
        await response.aclose()
        return None
    return response


async def fetch_with_fallback(
    client: httpx.AsyncClient,
    request: AvatarRequest,
    instance: str,
    fallback: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.Response | None:
    """Fetch *request* from *instance*, then from *fallback* if that fails.

    Returns an open, successful response (the caller must ``aclose()`` it)
    or ``None``.  At most two requests are made, one after the other, and
    the second is skipped when *fallback* names the same instance.
    """
    response = await _attempt(client, request.url_for(instance), timeout)
    if response is not None:
        return response

    if normalize_instance_url(fallback) == normalize_instance_url(instance):
        logger.debug("Fallback instance %s already tried, giving up", fallback)
        return None

    logger.debug("Retrying avatar %s on fallback instance %s", request.address_hash, fallback)
    return await _attempt(client, request.url_for(fallback), timeout)
