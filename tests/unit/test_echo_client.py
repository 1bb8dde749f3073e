"""
tests/unit/test_echo_client.py

Unit tests for publicip/echo.py.
Verifies response parsing per source format and typed error raising on failure.
"""

from __future__ import annotations

import ipaddress

import httpx
import pytest

from exceptions import ConfigError, IpBadStatusError, IpNetworkError, IpParseError, IpTimeoutError
from publicip.echo import DEFAULT_SOURCES, EchoClient, parse_json_key, parse_key_value, parse_plain
from publicip.ipversion import IpVersion

# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def test_parse_plain_strips_whitespace():
    assert parse_plain("  1.2.3.4\n") == "1.2.3.4"


def test_parse_json_key_reads_field():
    assert parse_json_key("ip")('{"ip": "2001:db8::1", "city": "x"}') == "2001:db8::1"


@pytest.mark.parametrize("body", ["not json", "[]", '{"addr": "1.2.3.4"}', '{"ip": 5}'])
def test_parse_json_key_rejects_bad_bodies(body):
    with pytest.raises(ValueError):
        parse_json_key("ip")(body)


def test_parse_key_value_reads_trace_format():
    body = "fl=123\nh=cloudflare.com\nip=198.51.100.7\nts=1700000000\n"
    assert parse_key_value("ip")(body) == "198.51.100.7"


def test_parse_key_value_raises_when_key_missing():
    with pytest.raises(ValueError):
        parse_key_value("ip")("fl=123\nvisit_scheme=https\n")


def test_default_catalog_covers_every_family():
    """Every built-in source serves all three family modes."""
    for source in DEFAULT_SOURCES:
        assert all(source.supports(version) for version in IpVersion), source.name


# ---------------------------------------------------------------------------
# EchoClient.fetch — happy paths
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_fetch_returns_parsed_address(mock_http, http_client, echo_sources):
    """A plain-text body is parsed into an IPv4Address."""
    mock_http.get("https://alpha.test/v4").mock(return_value=httpx.Response(200, text="203.0.113.5\n"))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4)

    ip = await client.fetch()

    assert ip == ipaddress.IPv4Address("203.0.113.5")


@pytest.mark.asyncio
async def test_fetch_uses_source_parser(mock_http, http_client, echo_sources):
    """The JSON source's parser extracts the address from the object."""
    mock_http.get("https://gamma.test/v6").mock(
        return_value=httpx.Response(200, json={"ip": "2001:db8::7"})
    )
    client = EchoClient(echo_sources[2], http_client, IpVersion.IP6)

    ip = await client.fetch()

    assert ip == ipaddress.IPv6Address("2001:db8::7")


@pytest.mark.asyncio
async def test_fetch_any_family_accepts_both(mock_http, http_client, echo_sources):
    mock_http.get("https://alpha.test/any").mock(return_value=httpx.Response(200, text="2001:db8::1"))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4_OR_6)

    assert (await client.fetch()).version == 6


# ---------------------------------------------------------------------------
# EchoClient.fetch — failure paths
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_fetch_raises_on_network_error(mock_http, http_client, echo_sources):
    """An unreachable source raises IpNetworkError naming the source."""
    mock_http.get("https://alpha.test/v4").mock(side_effect=httpx.ConnectError("refused"))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4)

    with pytest.raises(IpNetworkError) as excinfo:
        await client.fetch()

    assert excinfo.value.source == "alpha"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_raises_timeout_error(mock_http, http_client, echo_sources):
    """A deadline overrun raises IpTimeoutError, still an IpNetworkError."""
    mock_http.get("https://alpha.test/v4").mock(side_effect=httpx.ReadTimeout("slow"))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4)

    with pytest.raises(IpTimeoutError):
        await client.fetch(timeout=0.5)


@pytest.mark.asyncio
async def test_fetch_raises_on_http_error(mock_http, http_client, echo_sources):
    """A non-2xx status raises IpBadStatusError with the status code."""
    mock_http.get("https://alpha.test/v4").mock(return_value=httpx.Response(503))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4)

    with pytest.raises(IpBadStatusError) as excinfo:
        await client.fetch()

    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "   \n", "not an ip", "<html>blocked</html>"])
async def test_fetch_raises_parse_error_on_bad_body(mock_http, http_client, echo_sources, body):
    """Empty or unparsable bodies raise IpParseError."""
    mock_http.get("https://alpha.test/v4").mock(return_value=httpx.Response(200, text=body))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4)

    with pytest.raises(IpParseError):
        await client.fetch()


@pytest.mark.asyncio
async def test_fetch_rejects_address_of_wrong_family(mock_http, http_client, echo_sources):
    """An IPv4-only client refuses an IPv6 answer."""
    mock_http.get("https://alpha.test/v4").mock(return_value=httpx.Response(200, text="2001:db8::1"))
    client = EchoClient(echo_sources[0], http_client, IpVersion.IP4)

    with pytest.raises(IpParseError):
        await client.fetch()


@pytest.mark.asyncio
async def test_client_requires_url_for_its_family(http_client, source_factory):
    """Binding a source to a mode it does not serve is a configuration error."""
    v4_only = source_factory("v4only", versions=(IpVersion.IP4,))
    with pytest.raises(ConfigError):
        EchoClient(v4_only, http_client, IpVersion.IP6)
