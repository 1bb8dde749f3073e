"""
providers/provider.py

Responsibility: Defines the Provider protocol every DDNS adapter satisfies and
the shared base model used to decode an adapter's raw configuration.
Does NOT: make HTTP calls or implement any vendor logic.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, Union, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from exceptions import InvalidConfigError
from publicip.ipversion import Address, IpVersion

RawConfig = Union[Mapping[str, Any], str, bytes, None]

SettingsT = TypeVar("SettingsT", bound="ProviderSettings")


# ---------------------------------------------------------------------------
# Configuration decoding
# ---------------------------------------------------------------------------


class ProviderSettings(BaseModel):
    """
    Base for per-adapter configuration models.

    Unknown keys and wrongly typed values are rejected. The keys below are
    present in every provider record; they are consumed by the caller (and
    passed to the adapter as arguments) so adapters accept and ignore them.
    String values are kept exactly as given; credentials may contain spaces.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    provider: str | None = None
    domain: str | None = None
    host: str | None = None
    ip_version: str | None = None
    ipv6_suffix: str | None = None


def decode_settings(model: type[SettingsT], data: RawConfig) -> SettingsT:
    """
    Decodes untyped configuration into ``model``.

    Args:
        model: The adapter's ProviderSettings subclass.
        data: A mapping, a JSON document as str/bytes, or None for "no
              settings".

    Returns:
        A validated, frozen settings instance.

    Raises:
        InvalidConfigError: If the JSON is malformed or validation fails.
    """
    try:
        if data is None:
            return model()
        if isinstance(data, (str, bytes)):
            return model.model_validate_json(data)
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidConfigError(_describe_validation_error(exc)) from exc
    except (TypeError, ValueError) as exc:
        raise InvalidConfigError(f"cannot decode provider settings: {exc}") from exc


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "settings"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "invalid provider settings: " + "; ".join(parts)


# ---------------------------------------------------------------------------
# Adapter contract
# ---------------------------------------------------------------------------


@runtime_checkable
class Provider(Protocol):
    """
    Contract shared by all DDNS service adapters.

    Adapters are built once from configuration, validated at construction
    (raising a ConfigError subclass, never touching the network) and
    read-only afterwards, so one instance can serve concurrent callers.
    """

    name: str
    website: str

    @property
    def domain(self) -> str: ...

    @property
    def host(self) -> str: ...

    @property
    def ip_version(self) -> IpVersion: ...

    @property
    def proxied(self) -> bool: ...

    def build_domain_name(self) -> str:
        """Returns the fully-qualified hostname this adapter updates."""
        ...

    async def update(
        self,
        client: httpx.AsyncClient,
        ip: Address,
        *,
        timeout: float | None = None,
    ) -> Address:
        """
        Publishes ``ip`` for the adapter's hostname with one HTTP request.

        Args:
            client: The HTTP client to send the request with.
            ip: The address to publish.
            timeout: Per-call deadline in seconds; the client's default
                     applies when None.

        Returns:
            The address the provider now serves (the requested one).

        Raises:
            UpdateError: A subclass identifying why the update failed.
        """
        ...
