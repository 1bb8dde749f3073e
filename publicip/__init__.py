"""
publicip

Public IP discovery: round-robin selection over interchangeable IP-echo
sources, partitioned by address family.
"""

from publicip.echo import DEFAULT_SOURCES, EchoClient, EchoSource
from publicip.fetcher import Fetcher
from publicip.ipversion import Address, IpVersion
from publicip.ring import Ring

__all__ = [
    "Address",
    "DEFAULT_SOURCES",
    "EchoClient",
    "EchoSource",
    "Fetcher",
    "IpVersion",
    "Ring",
]
