"""
tests/conftest.py

Shared pytest fixtures used by both unit and integration test suites.
All HTTP fixtures use respx.mock — no real network calls are made in any test.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from publicip.echo import EchoSource, parse_json_key
from publicip.ipversion import IpVersion

# ---------------------------------------------------------------------------
# HTTP mock fixture — intercepts all httpx calls
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_http():
    """
    Yields a respx router that intercepts all httpx.AsyncClient calls.

    No real network traffic is allowed during tests. Use this fixture
    wherever a fetcher or provider would normally make an outbound request.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ---------------------------------------------------------------------------
# Shared httpx.AsyncClient fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
async def http_client():
    """
    Yields a real httpx.AsyncClient instance for use in tests.

    Pair with the mock_http fixture so all requests are intercepted by respx.
    The client is closed after each test.
    """
    async with httpx.AsyncClient() as client:
        yield client


# ---------------------------------------------------------------------------
# Echo sources with predictable URLs
# ---------------------------------------------------------------------------


def make_source(name: str, parser=None, versions=tuple(IpVersion)) -> EchoSource:
    """Builds a source serving https://<name>.test/<mode> for each given mode."""
    urls = {
        IpVersion.IP4_OR_6: f"https://{name}.test/any",
        IpVersion.IP4: f"https://{name}.test/v4",
        IpVersion.IP6: f"https://{name}.test/v6",
    }
    kwargs = {"parser": parser} if parser is not None else {}
    return EchoSource(name=name, urls={v: urls[v] for v in versions}, **kwargs)


@pytest.fixture()
def echo_sources():
    """Three test sources: two plain-text ones and one JSON one."""
    return [
        make_source("alpha"),
        make_source("beta"),
        make_source("gamma", parser=parse_json_key("ip")),
    ]


@pytest.fixture()
def source_factory():
    """Exposes make_source to tests that need custom family support."""
    return make_source
