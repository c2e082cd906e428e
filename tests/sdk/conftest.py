"""Shared fixtures for libravatar SDK tests."""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import dns.name
import httpx
import pytest


class FakeInstances:
    """In-process stand-in for a set of avatar instances, keyed by host.

    Each host maps to a callable returning an ``httpx.Response`` or to an
    exception to raise.  Unknown hosts are unreachable.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response] | Exception] = {}

    def serve(self, host: str, status: int = 200, content: bytes = b"", content_type: str | None = None) -> None:
        headers = {"content-type": content_type} if content_type else {}
        self.routes[host] = lambda request: httpx.Response(status, headers=headers, content=content)

    def fail(self, host: str, exc: Exception) -> None:
        self.routes[host] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        action = self.routes.get(request.url.host)
        if action is None:
            raise httpx.ConnectError("Name or service not known", request=request)
        if isinstance(action, Exception):
            raise action
        return action(request)

    @property
    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def instances() -> FakeInstances:
    return FakeInstances()


def _srv_rdata(target: str, port: int = 443, priority: int = 0, weight: int = 0) -> MagicMock:
    """Build a fake SRV rdata object like dnspython returns."""
    rdata = MagicMock()
    rdata.target = dns.name.from_text(target)
    rdata.port = port
    rdata.priority = priority
    rdata.weight = weight
    return rdata


def _srv_answer(*rdatas: MagicMock) -> MagicMock:
    answer = MagicMock()
    answer.__iter__ = MagicMock(return_value=iter(rdatas))
    return answer


@pytest.fixture()
def srv_rdata():
    return _srv_rdata


@pytest.fixture()
def srv_answer():
    return _srv_answer


@pytest.fixture()
def mock_dns(monkeypatch):
    """Patch the async resolver; returns the AsyncMock behind ``resolve``."""
    resolver_cls = MagicMock()
    resolve = AsyncMock()
    resolver_cls.return_value.resolve = resolve
    monkeypatch.setattr("libravatar_client.sdk.discovery.dns.asyncresolver.Resolver", resolver_cls)
    return resolve
