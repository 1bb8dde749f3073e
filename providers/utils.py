"""
providers/utils.py

Responsibility: Small helpers shared by every provider adapter: hostname
construction, diagnostic formatting and client identification.
Does NOT: make HTTP calls.
"""

from __future__ import annotations

from config import DEFAULT_USER_AGENT
from publicip.ipversion import IpVersion

ROOT_HOST = "@"
WILDCARD_HOST = "*"

# Longest response excerpt kept on errors and in logs
MAX_BODY_LENGTH = 200


def build_domain_name(host: str, domain: str) -> str:
    """
    Returns the fully-qualified name for ``host`` within ``domain``.

    The root marker ``@`` (or an empty host) yields the bare domain.
    """
    if host in ("", ROOT_HOST):
        return domain
    return f"{host}.{domain}"


def to_single_line(text: str, max_length: int = MAX_BODY_LENGTH) -> str:
    """Collapses whitespace runs (newlines included) and truncates for diagnostics."""
    line = " ".join(text.split())
    if len(line) > max_length:
        return line[:max_length] + "..."
    return line


def to_string(domain: str, host: str, provider: str, ip_version: IpVersion) -> str:
    return f"[domain: {domain} | host: {host} | provider: {provider} | ip: {ip_version}]"


def user_agent_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    return {"User-Agent": user_agent}


def redact_url(url: str) -> str:
    """Drops the query string, which carries credentials for most providers."""
    return url.split("?", 1)[0]
