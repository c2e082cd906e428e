"""Pluggable instance resolver: DNS discovery with a static default."""

from __future__ import annotations

import abc
import logging
import random
from dataclasses import dataclass

from libravatar_client.protocol.request import build_secure_url
from libravatar_client.protocol.types import DEFAULT_HOST, DEFAULT_TIMEOUT
from libravatar_client.sdk.config import AvatarConfig
from libravatar_client.sdk.discovery import query_avatar_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedInstance:
    """The instance chosen for one resolution call."""

    base_url: str
    discovered: bool = False


class InstanceResolver(abc.ABC):
    """Maps an email domain to the avatar instance to ask first.

    Implementations never raise: any failure resolves to the default
    instance.
    """

    @abc.abstractmethod
    async def resolve(self, domain: str) -> ResolvedInstance:
        """Return the instance responsible for *domain*."""


class StaticInstanceResolver(InstanceResolver):
    """Discovery disabled: every domain maps to the default instance."""

    def __init__(self, default_host: str = DEFAULT_HOST) -> None:
        self._default_host = default_host

    async def resolve(self, domain: str) -> ResolvedInstance:
        return ResolvedInstance(base_url=self._default_host)


class DNSInstanceResolver(InstanceResolver):
    """Resolve via the ``_avatars-sec._tcp`` SRV record of the domain.

    Falls back to the default instance on a negative answer or any
    lookup failure.  The lookup is attempted once.
    """

    def __init__(
        self,
        resolver_endpoint: str,
        default_host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        rng: random.Random | None = None,
    ) -> None:
        self._resolver_endpoint = resolver_endpoint
        self._default_host = default_host
        self._timeout = timeout
        self._rng = rng

    async def resolve(self, domain: str) -> ResolvedInstance:
        record = await query_avatar_service(
            domain,
            self._resolver_endpoint,
            timeout=self._timeout,
            rng=self._rng,
        )
        if record is None:
            return ResolvedInstance(base_url=self._default_host)

        base_url = build_secure_url(record.target, record.port)
        logger.debug("Discovered avatar instance %s for %s", base_url, domain)
        return ResolvedInstance(base_url=base_url, discovered=True)


def create_instance_resolver(config: AvatarConfig) -> InstanceResolver:
    """Pick the resolver matching *config*: DNS if a resolver endpoint is set."""
    if config.doh_server:
        return DNSInstanceResolver(
            config.doh_server,
            default_host=config.default_host,
            timeout=config.timeout,
        )
    return StaticInstanceResolver(config.default_host)
