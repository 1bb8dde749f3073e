"""
providers/dynu.py

Responsibility: Implements the Provider protocol for Dynu's DynDNS-compatible
update API (https://api.dynu.com/nic/update).
All Dynu HTTP calls are concentrated here.
Does NOT: discover the public IP, schedule updates, or retry.

Response table (first match wins, case-sensitive substring):

    badauth -> AuthError
    notfqdn -> UnknownHostError
    abuse   -> AbuseError
    good    -> success
    nochg   -> success (address unchanged)
"""

from __future__ import annotations

import logging

import httpx
from pydantic import field_validator

from config import DEFAULT_USER_AGENT
from exceptions import (
    AbuseError,
    AuthError,
    BadRequestError,
    BadStatusError,
    EmptyPasswordError,
    EmptyUsernameError,
    NetworkError,
    UnknownHostError,
    WildcardHostForbiddenError,
)
from providers.provider import ProviderSettings, RawConfig, decode_settings
from providers.rules import ResponseRule, interpret_response
from providers.utils import (
    ROOT_HOST,
    WILDCARD_HOST,
    build_domain_name,
    redact_url,
    to_single_line,
    to_string,
    user_agent_headers,
)
from publicip.ipversion import Address, IpVersion

logger = logging.getLogger(__name__)

_DYNU_UPDATE_URL = "https://api.dynu.com/nic/update"

DYNU_RULES: tuple[ResponseRule, ...] = (
    ResponseRule("badauth", AuthError, "authentication failed"),
    ResponseRule("notfqdn", UnknownHostError, "hostname does not exist"),
    ResponseRule("abuse", AbuseError, "account blocked for abuse"),
    ResponseRule("good"),
    ResponseRule("nochg"),
)


class DynuSettings(ProviderSettings):
    """Dynu-specific keys of a provider record."""

    username: str = ""
    password: str = ""

    # Dynu "location" group the host belongs to; optional
    group: str = ""

    # Let Dynu use the address the request comes from instead of sending one
    provider_ip: bool = False

    @field_validator("group")
    @classmethod
    def _strip_group(cls, value: str) -> str:
        return value.strip()


class DynuProvider:
    """
    Updates a Dynu hostname through the DynDNS-compatible GET API.

    Credentials travel as query parameters. IPv4 addresses are sent as
    ``myip`` and IPv6 addresses as ``myipv6``; neither is sent when
    ``provider_ip`` is enabled.

    Collaborators:
        - httpx.AsyncClient: passed to update(); must be kept alive externally
        - Provider: this class satisfies the protocol contract
    """

    name = "dynu"
    website = "https://dynu.com/"

    __slots__ = (
        "_domain",
        "_host",
        "_ip_version",
        "_group",
        "_username",
        "_password",
        "_use_provider_ip",
        "_user_agent",
    )

    def __init__(
        self,
        data: RawConfig,
        domain: str,
        host: str,
        ip_version: IpVersion | str = IpVersion.IP4_OR_6,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """
        Decodes and validates the adapter configuration. No network I/O.

        Args:
            data: Raw provider record (mapping or JSON document).
            domain: Registrable domain, e.g. "example.com".
            host: Subdomain label; "" or "@" for the root of the domain.
            ip_version: Family policy of the record.
            user_agent: User-Agent header sent with update requests.

        Raises:
            InvalidConfigError: If ``data`` has unknown keys or bad types.
            EmptyUsernameError: If no username is configured.
            EmptyPasswordError: If no password is configured.
            WildcardHostForbiddenError: If ``host`` is "*".
        """
        settings = decode_settings(DynuSettings, data)

        self._domain = domain
        self._host = host or ROOT_HOST
        self._ip_version = IpVersion.parse(ip_version)
        self._group = settings.group
        self._username = settings.username
        self._password = settings.password
        self._use_provider_ip = settings.provider_ip
        self._user_agent = user_agent

        self._validate()

    def _validate(self) -> None:
        if not self._username:
            raise EmptyUsernameError()
        if not self._password:
            raise EmptyPasswordError()
        if self._host == WILDCARD_HOST:
            raise WildcardHostForbiddenError(self.name)

    # ---------------------------------------------------------------------------
    # Metadata accessors
    # ---------------------------------------------------------------------------

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def host(self) -> str:
        return self._host

    @property
    def ip_version(self) -> IpVersion:
        return self._ip_version

    @property
    def proxied(self) -> bool:
        return False

    def build_domain_name(self) -> str:
        return build_domain_name(self._host, self._domain)

    def __str__(self) -> str:
        return to_string(self._domain, self._host, self.name, self._ip_version)

    def __repr__(self) -> str:
        return f"DynuProvider(domain={self._domain!r}, host={self._host!r}, ip_version={self._ip_version.value!r})"

    # ---------------------------------------------------------------------------
    # Provider implementation
    # ---------------------------------------------------------------------------

    async def update(
        self,
        client: httpx.AsyncClient,
        ip: Address,
        *,
        timeout: float | None = None,
    ) -> Address:
        """
        Sends one update request to Dynu and classifies the answer.

        Args:
            client: HTTP client used for the request.
            ip: Address to publish; ignored when provider_ip is enabled.
            timeout: Per-call deadline in seconds.

        Returns:
            ``ip`` once Dynu answers "good" or "nochg".

        Raises:
            BadRequestError: If the request cannot be built.
            NetworkError: On connection failures and timeouts.
            BadStatusError: If Dynu answers with a non-2xx status.
            AuthError: On "badauth".
            UnknownHostError: On "notfqdn".
            AbuseError: On "abuse".
            UnknownResponseError: On any other body.
        """
        hostname = self.build_domain_name()
        params = {
            "username": self._username,
            "password": self._password,
            "hostname": hostname,
        }
        if self._group:
            params["location"] = self._group
        if not self._use_provider_ip:
            if ip.version == 6:
                params["myipv6"] = str(ip)
            else:
                params["myip"] = str(ip)

        try:
            request = client.build_request(
                "GET",
                _DYNU_UPDATE_URL,
                params=params,
                headers=user_agent_headers(self._user_agent),
                timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise BadRequestError(f"cannot build Dynu request for {hostname}: {exc}") from exc

        logger.debug("GET %s hostname=%s ip=%s", redact_url(str(request.url)), hostname, ip)
        try:
            response = await client.send(request)
        except httpx.RequestError as exc:
            raise NetworkError(
                f"Dynu request for {hostname} failed: {type(exc).__name__}: {exc}",
                cause=exc,
            ) from exc

        body = response.text
        logger.debug("Dynu response (%d) for %s: %s", response.status_code, hostname, to_single_line(body))

        if not response.is_success:
            raise BadStatusError(response.status_code, to_single_line(body))

        published = interpret_response(body, DYNU_RULES, ip)
        logger.info("Dynu updated %s to %s", hostname, published)
        return published
