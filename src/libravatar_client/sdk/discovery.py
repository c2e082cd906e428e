"""DNS service discovery for libravatar instances.

A domain that runs its own avatar instance publishes an SRV record at
``_avatars-sec._tcp.{domain}``::

    _avatars-sec._tcp.example.com. 86400 IN SRV 0 0 443 avatars.example.com.

The lookup goes through a caller-chosen resolver, typically a
DNS-over-HTTPS endpoint such as ``https://cloudflare-dns.com/dns-query``.
Every failure (NXDOMAIN, timeout, unreachable or malformed resolver) is
reported as "no record"; nothing here raises.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable

import dns.asyncresolver
import dns.exception
import dns.rdatatype
import dns.resolver
import httpx

from libravatar_client.protocol.types import AVATAR_SERVICE, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceRecord:
    """One usable SRV answer."""

    target: str
    port: int
    priority: int = 0
    weight: int = 0


def _to_service_record(rdata) -> ServiceRecord | None:
    """Convert an SRV rdata, discarding records that cannot name a host."""
    target = rdata.target.to_text(omit_final_dot=True)
    port = int(rdata.port)
    if target in ("", ".", "@") or not 0 < port < 65536:
        return None
    return ServiceRecord(
        target=target,
        port=port,
        priority=int(rdata.priority),
        weight=int(rdata.weight),
    )


def select_service_record(
    records: Iterable[ServiceRecord],
    rng: random.Random | None = None,
) -> ServiceRecord | None:
    """Pick one record per RFC 2782.

    Only the lowest priority is considered; within it the choice is
    random, weighted by ``weight`` (uniform if every weight is zero).
    """
    records = list(records)
    if not records:
        return None

    rng = rng or random.Random()
    best = min(r.priority for r in records)
    candidates = [r for r in records if r.priority == best]
    if len(candidates) == 1:
        return candidates[0]

    weights = [r.weight for r in candidates]
    if not any(weights):
        return rng.choice(candidates)
    return rng.choices(candidates, weights=weights, k=1)[0]


async def query_avatar_service(
    domain: str,
    resolver_endpoint: str,
    timeout: float = DEFAULT_TIMEOUT,
    rng: random.Random | None = None,
) -> ServiceRecord | None:
    """Look up the avatar instance for *domain* using *resolver_endpoint*.

    *resolver_endpoint* is either a DNS-over-HTTPS URL or a nameserver
    address.  Returns ``None`` when there is no usable record or the
    lookup fails in any way.  Single attempt, no retry.
    """
    if not domain:
        return None

    resolver = dns.asyncresolver.Resolver(configure=False)
    # One query per lookup: the per-query timeout spans the whole lifetime
    resolver.timeout = timeout
    try:
        resolver.nameservers = [resolver_endpoint]
        answer = await resolver.resolve(
            f"{AVATAR_SERVICE}.{domain}",
            rdtype=dns.rdatatype.SRV,
            lifetime=timeout,
        )
    except (
        dns.resolver.NXDOMAIN,
        dns.resolver.NoAnswer,
        dns.resolver.NoNameservers,
        dns.exception.DNSException,
    ):
        logger.debug("No avatar service record for %s", domain)
        return None
    except (httpx.HTTPError, OSError, ValueError):
        logger.debug(
            "Avatar service lookup for %s via %s failed",
            domain,
            resolver_endpoint,
            exc_info=True,
        )
        return None

    records = [r for r in (_to_service_record(rdata) for rdata in answer) if r is not None]
    record = select_service_record(records, rng=rng)
    if record is None:
        logger.debug("Avatar service records for %s name no usable host", domain)
    return record
