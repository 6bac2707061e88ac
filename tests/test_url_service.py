"""
Tests for the shortening flow and the DNS reachability check.

The shortening service must reject empty, malformed and unresolvable URLs
without touching the registry, and register everything else in normalized
form.
"""

import asyncio
import socket

import pytest

from shorturl.core.exceptions import InvalidURLError
from shorturl.services.reachability import ReachabilityChecker
from shorturl.services.url_service import URLShorteningService


@pytest.fixture
def url_service(registry, reachability):
    return URLShorteningService(registry, reachability)


class TestShorten:

    @pytest.mark.asyncio
    async def test_registers_valid_url(self, url_service, store):
        entry = await url_service.shorten("https://example.com")

        assert entry.original_url == "https://example.com"
        assert await store.list_entries() == [entry]

    @pytest.mark.asyncio
    async def test_bare_domain_is_normalized(self, url_service, reachability):
        entry = await url_service.shorten("freecodecamp.org")

        assert entry.original_url == "http://freecodecamp.org"
        assert reachability.resolved == ["freecodecamp.org"]

    @pytest.mark.asyncio
    async def test_dns_lookup_strips_www(self, url_service, reachability):
        await url_service.shorten("https://www.example.com/page")
        assert reachability.resolved == ["example.com"]

    @pytest.mark.asyncio
    async def test_same_url_twice_returns_same_code(self, url_service, store):
        first = await url_service.shorten("example.com")
        second = await url_service.shorten("http://example.com")

        assert first.short_code == second.short_code
        assert len(await store.list_entries()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_url", ["", "   ", "not a url", "http://", "ftp://example.com"])
    async def test_rejects_invalid_input(self, url_service, store, reachability, raw_url):
        with pytest.raises(InvalidURLError):
            await url_service.shorten(raw_url)

        assert reachability.resolved == []
        assert await store.list_entries() == []

    @pytest.mark.asyncio
    async def test_rejects_unresolvable_host(self, url_service, store):
        with pytest.raises(InvalidURLError) as exc_info:
            await url_service.shorten("https://does-not-exist.invalid/path")

        assert exc_info.value.reason == "Host does not resolve"
        assert await store.list_entries() == []


class TestReachabilityChecker:

    @pytest.mark.asyncio
    async def test_disabled_checker_accepts_everything(self):
        checker = ReachabilityChecker(enabled=False)
        assert await checker.check("http://does-not-exist.invalid")

    @pytest.mark.asyncio
    async def test_resolution_failure(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def failing_getaddrinfo(host, port, **kwargs):
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        monkeypatch.setattr(loop, "getaddrinfo", failing_getaddrinfo)
        assert not await ReachabilityChecker().check("http://example.com")

    @pytest.mark.asyncio
    async def test_resolution_timeout(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def slow_getaddrinfo(host, port, **kwargs):
            await asyncio.sleep(10)

        monkeypatch.setattr(loop, "getaddrinfo", slow_getaddrinfo)
        assert not await ReachabilityChecker(timeout=0.01).check("http://example.com")

    @pytest.mark.asyncio
    async def test_resolved_host_passes(self, monkeypatch):
        loop = asyncio.get_running_loop()
        looked_up = []

        async def fake_getaddrinfo(host, port, **kwargs):
            looked_up.append(host)
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))]

        monkeypatch.setattr(loop, "getaddrinfo", fake_getaddrinfo)
        assert await ReachabilityChecker().check("https://www.example.com")
        assert looked_up == ["example.com"]

    @pytest.mark.asyncio
    async def test_unparseable_url_fails(self):
        assert not await ReachabilityChecker().check("http://")
