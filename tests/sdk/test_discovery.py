"""Tests for libravatar_client.sdk.discovery module."""

from __future__ import annotations

import random

import dns.exception
import dns.rdatatype
import dns.resolver
import httpx
import pytest

from libravatar_client.sdk.discovery import (
    ServiceRecord,
    query_avatar_service,
    select_service_record,
)


# ---------------------------------------------------------------------------
# select_service_record
# ---------------------------------------------------------------------------


class TestSelectServiceRecord:
    def test_empty(self):
        assert select_service_record([]) is None

    def test_single(self):
        rec = ServiceRecord(target="a.example", port=443)
        assert select_service_record([rec]) is rec

    def test_lowest_priority_wins(self):
        low = ServiceRecord(target="primary.example", port=443, priority=0, weight=1)
        high = ServiceRecord(target="backup.example", port=443, priority=10, weight=100)
        for seed in range(20):
            assert select_service_record([high, low], rng=random.Random(seed)) is low

    def test_zero_weight_never_picked_against_positive(self):
        heavy = ServiceRecord(target="heavy.example", port=443, priority=0, weight=5)
        zero = ServiceRecord(target="zero.example", port=443, priority=0, weight=0)
        for seed in range(20):
            assert select_service_record([zero, heavy], rng=random.Random(seed)) is heavy

    def test_all_zero_weights_uniform(self):
        a = ServiceRecord(target="a.example", port=443)
        b = ServiceRecord(target="b.example", port=443)
        picked = {select_service_record([a, b], rng=random.Random(seed)).target for seed in range(50)}
        assert picked == {"a.example", "b.example"}


# ---------------------------------------------------------------------------
# query_avatar_service
# ---------------------------------------------------------------------------


class TestQueryAvatarService:
    async def test_success(self, mock_dns, srv_rdata, srv_answer):
        mock_dns.return_value = srv_answer(srv_rdata("avatars.example.com.", 443))

        record = await query_avatar_service("example.com", "https://dns.example/dns-query", timeout=2.0)

        assert record == ServiceRecord(target="avatars.example.com", port=443)
        args, kwargs = mock_dns.call_args
        assert args[0] == "_avatars-sec._tcp.example.com"
        assert kwargs["rdtype"] == dns.rdatatype.SRV
        assert kwargs["lifetime"] == 2.0

    async def test_uses_given_resolver(self, mock_dns, srv_rdata, srv_answer):
        mock_dns.return_value = srv_answer(srv_rdata("avatars.example.com."))
        from libravatar_client.sdk import discovery

        await query_avatar_service("example.com", "https://dns.example/dns-query")

        resolver_cls = discovery.dns.asyncresolver.Resolver
        resolver_cls.assert_called_once_with(configure=False)
        assert resolver_cls.return_value.nameservers == ["https://dns.example/dns-query"]

    async def test_single_query_within_lifetime(self, mock_dns, srv_rdata, srv_answer):
        mock_dns.return_value = srv_answer(srv_rdata("avatars.example.com."))
        from libravatar_client.sdk import discovery

        await query_avatar_service("example.com", "1.1.1.1", timeout=3.0)

        resolver = discovery.dns.asyncresolver.Resolver.return_value
        assert resolver.timeout == 3.0
        assert mock_dns.call_args.kwargs["lifetime"] == 3.0

    async def test_custom_port(self, mock_dns, srv_rdata, srv_answer):
        mock_dns.return_value = srv_answer(srv_rdata("avatars.example.com.", 8443))
        record = await query_avatar_service("example.com", "1.1.1.1")
        assert record.port == 8443

    async def test_picks_lowest_priority(self, mock_dns, srv_rdata, srv_answer):
        mock_dns.return_value = srv_answer(
            srv_rdata("backup.example.com.", priority=20, weight=50),
            srv_rdata("primary.example.com.", priority=10, weight=0),
        )
        record = await query_avatar_service("example.com", "1.1.1.1")
        assert record.target == "primary.example.com"

    async def test_unusable_records_dropped(self, mock_dns, srv_rdata, srv_answer):
        mock_dns.return_value = srv_answer(
            srv_rdata(".", 443),
            srv_rdata("avatars.example.com.", 0),
        )
        assert await query_avatar_service("example.com", "1.1.1.1") is None

    @pytest.mark.parametrize(
        "exc",
        [
            dns.resolver.NXDOMAIN(),
            dns.resolver.NoAnswer(),
            dns.resolver.NoNameservers(),
            dns.exception.Timeout(),
            httpx.ConnectError("refused"),
            OSError("network unreachable"),
            ValueError("bad nameserver"),
        ],
    )
    async def test_failures_return_none(self, mock_dns, exc):
        mock_dns.side_effect = exc
        assert await query_avatar_service("example.com", "https://dns.example/dns-query") is None

    async def test_empty_domain_skips_lookup(self, mock_dns):
        assert await query_avatar_service("", "1.1.1.1") is None
        mock_dns.assert_not_called()
