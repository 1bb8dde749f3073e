"""
providers

DDNS provider adapters and the registry that maps a configured provider name
to its adapter class.
"""

from __future__ import annotations

import logging

from config import DEFAULT_USER_AGENT
from exceptions import UnknownProviderError
from providers.dynu import DynuProvider
from providers.provider import Provider, ProviderSettings, RawConfig
from publicip.ipversion import IpVersion

logger = logging.getLogger(__name__)

_PROVIDER_CLASSES: dict[str, type] = {
    DynuProvider.name: DynuProvider,
}


def get_provider_class(name: str) -> type:
    """
    Returns the adapter class registered under ``name`` (case-insensitive).

    Raises:
        UnknownProviderError: If no adapter has that name.
    """
    cls = _PROVIDER_CLASSES.get(name.strip().lower()) if name else None
    if cls is None:
        raise UnknownProviderError(
            f"provider {name!r} is not supported; supported: {', '.join(supported_providers())}"
        )
    return cls


def supported_providers() -> list[str]:
    return sorted(_PROVIDER_CLASSES)


def new_provider(
    name: str,
    data: RawConfig,
    domain: str,
    host: str,
    ip_version: IpVersion | str = IpVersion.IP4_OR_6,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Provider:
    """
    Builds and validates the adapter for one provider record.

    Args:
        name: Provider name from the record, e.g. "dynu".
        data: The record's raw settings.
        domain: Registrable domain.
        host: Subdomain label, "" / "@" for the root.
        ip_version: Family policy of the record.
        user_agent: User-Agent header for update requests.

    Returns:
        A ready-to-use adapter.

    Raises:
        ConfigError: If the provider is unknown or its settings are invalid.
    """
    cls = get_provider_class(name)
    provider = cls(data, domain, host, ip_version, user_agent=user_agent)
    logger.debug("Configured %s", provider)
    return provider


__all__ = [
    "DynuProvider",
    "Provider",
    "ProviderSettings",
    "get_provider_class",
    "new_provider",
    "supported_providers",
]
