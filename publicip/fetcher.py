"""
publicip/fetcher.py

Responsibility: Public entry point for public IP discovery. Owns one ring of
echo clients and one HTTP transport per address-family mode and answers
ip() / ip4() / ip6() by querying the next source of the matching ring.
Does NOT: compare addresses, remember previous results, or retry.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

import httpx

from config import DEFAULT_USER_AGENT, Settings
from exceptions import ConfigError, NoSourcesError
from publicip.echo import DEFAULT_SOURCES, EchoClient, EchoSource
from publicip.ipversion import Address, IpVersion
from publicip.ring import Ring

logger = logging.getLogger(__name__)

# Binding the local side of the socket to a family's wildcard address forces
# the connection onto that family.
_LOCAL_ADDRESSES: dict[IpVersion, str | None] = {
    IpVersion.IP4_OR_6: None,
    IpVersion.IP4: "0.0.0.0",
    IpVersion.IP6: "::",
}


def build_http_client(
    version: IpVersion,
    timeout: float = 10.0,
    user_agent: str = DEFAULT_USER_AGENT,
) -> httpx.AsyncClient:
    """
    Creates an httpx.AsyncClient whose connections use only the given family.

    Args:
        version: IP4_OR_6 leaves the family to the system; IP4 / IP6 force it.
        timeout: Default request timeout in seconds.
        user_agent: User-Agent header sent with every request.

    Returns:
        A new client; the caller is responsible for closing it.
    """
    transport = httpx.AsyncHTTPTransport(local_address=_LOCAL_ADDRESSES[version])
    return httpx.AsyncClient(
        transport=transport,
        timeout=timeout,
        headers={"User-Agent": user_agent},
    )


def select_sources(names: Iterable[str], catalog: Iterable[EchoSource] = DEFAULT_SOURCES) -> list[EchoSource]:
    """
    Picks sources from ``catalog`` by name, keeping the order of ``names``.

    Raises:
        ConfigError: If a name is not in the catalog.
    """
    by_name = {source.name: source for source in catalog}
    selected = []
    for name in names:
        source = by_name.get(name.strip().lower())
        if source is None:
            raise ConfigError(f"unknown public IP source {name!r}; known: {', '.join(by_name)}")
        selected.append(source)
    return selected


class Fetcher:
    """
    Finds the host's public IP address by rotating over IP-echo sources.

    Each family mode (either / IPv4 / IPv6) has its own ring of EchoClients,
    built from the sources that publish a URL for that mode, and its own HTTP
    client whose transport enforces the family. Concurrent callers share the
    rings; the ring counter is the only mutable state.

    Collaborators:
        - EchoClient: performs the actual HTTP call and parsing
        - Ring: distributes calls across sources round-robin
    """

    def __init__(
        self,
        sources: Iterable[EchoSource] | None = None,
        *,
        clients: Mapping[IpVersion, httpx.AsyncClient] | None = None,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """
        Builds the three rings.

        Args:
            sources: Echo sources in rotation order; the built-in catalog
                     when None.
            clients: Optional HTTP client per family mode. Modes missing from
                     the mapping get a client created (and later closed) by
                     this Fetcher.
            timeout: Default request timeout for clients created here.
            user_agent: User-Agent for clients created here.

        Raises:
            NoSourcesError: If no source supports one of the family modes.
        """
        source_list = list(DEFAULT_SOURCES if sources is None else sources)
        given = dict(clients or {})

        self._owned: list[httpx.AsyncClient] = []
        self._rings: dict[IpVersion, Ring[EchoClient]] = {}

        members = {
            version: [source for source in source_list if source.supports(version)]
            for version in IpVersion
        }
        # Checked before any client is created so a bad config leaks nothing
        for version, supported in members.items():
            if not supported:
                raise NoSourcesError(f"no public IP source supports {version}")

        for version in IpVersion:
            client = given.get(version)
            if client is None:
                client = build_http_client(version, timeout=timeout, user_agent=user_agent)
                self._owned.append(client)
            self._rings[version] = Ring(
                (EchoClient(source, client, version) for source in members[version]),
                name=f"{version} sources",
            )
            logger.debug(
                "%s ring: %s",
                version,
                ", ".join(member.source.name for member in self._rings[version]),
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> Fetcher:
        """
        Builds a Fetcher from process settings.

        Raises:
            ConfigError: If a configured source name is unknown.
        """
        sources = select_sources(settings.public_ip_sources) if settings.public_ip_sources else None
        return cls(sources, timeout=settings.http_timeout, user_agent=settings.user_agent)

    # ---------------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------------

    async def ip(self, timeout: float | None = None) -> Address:
        """Returns the public address reported by the next source, either family."""
        return await self._fetch(IpVersion.IP4_OR_6, timeout)

    async def ip4(self, timeout: float | None = None) -> Address:
        """Returns the public IPv4 address, queried over an IPv4-only transport."""
        return await self._fetch(IpVersion.IP4, timeout)

    async def ip6(self, timeout: float | None = None) -> Address:
        """Returns the public IPv6 address, queried over an IPv6-only transport."""
        return await self._fetch(IpVersion.IP6, timeout)

    async def ip_for(self, version: IpVersion | str, timeout: float | None = None) -> Address:
        """
        Returns the public address for a domain record's family policy.

        Args:
            version: The record's IpVersion (or its configuration string).
            timeout: Per-call deadline in seconds.

        Raises:
            IpFetchError: If the selected source fails; see EchoClient.fetch.
        """
        return await self._fetch(IpVersion.parse(version), timeout)

    def ring(self, version: IpVersion) -> Ring[EchoClient]:
        return self._rings[version]

    # ---------------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------------

    async def aclose(self) -> None:
        """Closes the HTTP clients created by this Fetcher; injected ones stay open."""
        for client in self._owned:
            await client.aclose()
        self._owned.clear()

    async def __aenter__(self) -> Fetcher:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ---------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------

    async def _fetch(self, version: IpVersion, timeout: float | None) -> Address:
        echo_client = self._rings[version].next()
        logger.debug("Fetching %s public IP from %s", version, echo_client.source.name)
        return await echo_client.fetch(timeout=timeout)
