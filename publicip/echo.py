"""
publicip/echo.py

Responsibility: Describes external "what is my IP" echo sources and performs a
single fetch against one of them.
Does NOT: choose which source to query (see Ring/Fetcher) or retry.
"""

from __future__ import annotations

import ipaddress
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

import httpx

from exceptions import (
    ConfigError,
    IpBadStatusError,
    IpNetworkError,
    IpParseError,
    IpTimeoutError,
)
from publicip.ipversion import Address, IpVersion

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response parsers — each turns a response body into an address string
# ---------------------------------------------------------------------------


def parse_plain(text: str) -> str:
    """The body is the bare address, possibly surrounded by whitespace."""
    return text.strip()


def parse_json_key(key: str) -> Callable[[str], str]:
    """Returns a parser reading ``key`` from a JSON object body."""

    def _parse(text: str) -> str:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get(key), str):
            raise ValueError(f"no string field {key!r} in JSON body")
        return data[key].strip()

    return _parse


def parse_key_value(key: str, separator: str = "=") -> Callable[[str], str]:
    """Returns a parser for line-oriented ``key=value`` bodies (e.g. cdn-cgi/trace)."""

    def _parse(text: str) -> str:
        for line in text.splitlines():
            name, sep, value = line.partition(separator)
            if sep and name.strip() == key:
                return value.strip()
        raise ValueError(f"no {key!r} line in body")

    return _parse


# ---------------------------------------------------------------------------
# Source description
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EchoSource:
    """
    Query contract of one external IP-echo service.

    A source only joins the ring of a family mode when it publishes a URL for
    that mode.
    """

    # Short identifier used in settings and logs, e.g. "ipify"
    name: str

    # URL to query per family mode
    urls: Mapping[IpVersion, str] = field(default_factory=dict)

    # Turns the response body into an address string; raises ValueError
    parser: Callable[[str], str] = parse_plain

    def url_for(self, version: IpVersion) -> str | None:
        return self.urls.get(version)

    def supports(self, version: IpVersion) -> bool:
        return version in self.urls


DEFAULT_SOURCES: tuple[EchoSource, ...] = (
    EchoSource(
        name="ipify",
        urls={
            IpVersion.IP4_OR_6: "https://api64.ipify.org",
            IpVersion.IP4: "https://api.ipify.org",
            IpVersion.IP6: "https://api6.ipify.org",
        },
    ),
    EchoSource(
        name="icanhazip",
        urls={
            IpVersion.IP4_OR_6: "https://icanhazip.com",
            IpVersion.IP4: "https://ipv4.icanhazip.com",
            IpVersion.IP6: "https://ipv6.icanhazip.com",
        },
    ),
    EchoSource(
        name="ident",
        urls={
            IpVersion.IP4_OR_6: "https://ident.me",
            IpVersion.IP4: "https://v4.ident.me",
            IpVersion.IP6: "https://v6.ident.me",
        },
    ),
    EchoSource(
        name="seeip",
        urls={
            IpVersion.IP4_OR_6: "https://api.seeip.org",
            IpVersion.IP4: "https://ipv4.seeip.org",
            IpVersion.IP6: "https://ipv6.seeip.org",
        },
    ),
    EchoSource(
        name="ipinfo",
        urls={
            IpVersion.IP4_OR_6: "https://ipinfo.io/json",
            IpVersion.IP4: "https://ipinfo.io/json",
            IpVersion.IP6: "https://v6.ipinfo.io/json",
        },
        parser=parse_json_key("ip"),
    ),
    EchoSource(
        name="cloudflare",
        urls={
            IpVersion.IP4_OR_6: "https://cloudflare.com/cdn-cgi/trace",
            IpVersion.IP4: "https://1.1.1.1/cdn-cgi/trace",
            IpVersion.IP6: "https://[2606:4700:4700::1111]/cdn-cgi/trace",
        },
        parser=parse_key_value("ip"),
    ),
)


# ---------------------------------------------------------------------------
# Client — one source bound to one family mode and its transport
# ---------------------------------------------------------------------------


class EchoClient:
    """
    Queries one echo source over the HTTP client chosen for one family mode.

    Collaborators:
        - httpx.AsyncClient: injected; its transport decides whether the
          connection is forced onto IPv4, IPv6, or left to the system
    """

    def __init__(
        self,
        source: EchoSource,
        http_client: httpx.AsyncClient,
        version: IpVersion = IpVersion.IP4_OR_6,
    ) -> None:
        """
        Args:
            source: The echo source to query.
            http_client: Client whose transport matches ``version``.
            version: Family mode this client serves.

        Raises:
            ConfigError: If the source has no URL for ``version``.
        """
        url = source.url_for(version)
        if url is None:
            raise ConfigError(f"echo source {source.name} does not support {version}")
        self._source = source
        self._client = http_client
        self._version = version
        self._url = url

    @property
    def source(self) -> EchoSource:
        return self._source

    @property
    def version(self) -> IpVersion:
        return self._version

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self, timeout: float | None = None) -> Address:
        """
        Performs one GET against the source and parses the echoed address.

        Args:
            timeout: Deadline in seconds for this call; the client's default
                     timeout applies when None.

        Returns:
            The public address reported by the source.

        Raises:
            IpTimeoutError: If the deadline is exceeded.
            IpNetworkError: If the source is unreachable.
            IpBadStatusError: If the source answers with a non-2xx status.
            IpParseError: If the body holds no address of the expected family.
        """
        name = self._source.name
        request_timeout = httpx.USE_CLIENT_DEFAULT if timeout is None else timeout

        logger.debug("GET %s (%s, %s)", self._url, name, self._version)
        try:
            response = await self._client.get(self._url, timeout=request_timeout)
        except httpx.TimeoutException as exc:
            raise IpTimeoutError(f"{name}: timed out: {exc}", name) from exc
        except httpx.RequestError as exc:
            raise IpNetworkError(f"{name}: could not reach {self._url}: {exc}", name) from exc

        if not response.is_success:
            raise IpBadStatusError(
                f"{name}: bad HTTP status {response.status_code}",
                name,
                status_code=response.status_code,
            )

        try:
            raw = self._source.parser(response.text)
            ip = ipaddress.ip_address(raw)
        except ValueError as exc:
            raise IpParseError(f"{name}: cannot parse address from response: {exc}", name) from exc

        if not self._version.matches(ip):
            raise IpParseError(f"{name}: got {ip} which is not {self._version}", name)

        logger.debug("Public IP from %s: %s", name, ip)
        return ip

    def __repr__(self) -> str:
        return f"EchoClient({self._source.name!r}, {self._version.value!r})"
