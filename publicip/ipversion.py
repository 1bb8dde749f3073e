"""
publicip/ipversion.py

Responsibility: Defines the address-family policy used by domain records and
by the Fetcher to pick a ring.
Does NOT: perform network calls.
"""

from __future__ import annotations

import ipaddress
from enum import Enum
from typing import Union

from exceptions import InvalidConfigError

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class IpVersion(str, Enum):
    """
    Address-family policy: either family, IPv4 only, or IPv6 only.

    The values are the strings accepted in configuration files.
    """

    IP4_OR_6 = "ipv4 or ipv6"
    IP4 = "ipv4"
    IP6 = "ipv6"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | IpVersion | None) -> IpVersion:
        """
        Converts a configuration value into an IpVersion.

        Args:
            value: An IpVersion, one of its string values (case-insensitive),
                   or an empty value meaning "either family".

        Returns:
            The matching IpVersion.

        Raises:
            InvalidConfigError: If the string is not a known policy.
        """
        if isinstance(value, IpVersion):
            return value
        if not value:
            return cls.IP4_OR_6
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidConfigError(f"ip version {value!r} is not valid")

    def matches(self, ip: Address) -> bool:
        """Returns True when ``ip`` belongs to a family allowed by this policy."""
        if self is IpVersion.IP4:
            return ip.version == 4
        if self is IpVersion.IP6:
            return ip.version == 6
        return True
