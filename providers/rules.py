"""
providers/rules.py

Responsibility: Interprets a provider's free-text response body through an
ordered marker → outcome table.
Does NOT: send requests or look at HTTP status codes; transport-level
outcomes are handled by the adapter before the table is consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from exceptions import UnknownResponseError, UpdateError
from providers.utils import to_single_line
from publicip.ipversion import Address


@dataclass(frozen=True)
class ResponseRule:
    """
    One row of a provider's response table.

    ``error`` is None for rows meaning success.
    """

    # Substring searched for in the response body (case-sensitive)
    marker: str

    # Exception raised when the marker matches; None means success
    error: type[UpdateError] | None = None

    # Human-readable meaning, used in the raised exception's message
    description: str = ""

    @property
    def is_success(self) -> bool:
        return self.error is None


def match_rule(body: str, rules: Sequence[ResponseRule]) -> ResponseRule | None:
    """Returns the first rule whose marker occurs in ``body``, or None."""
    for rule in rules:
        if rule.marker in body:
            return rule
    return None


def interpret_response(body: str, rules: Sequence[ResponseRule], ip: Address) -> Address:
    """
    Applies a response table to a 2xx response body.

    Earlier rules win when the body contains several markers. On success the
    requested address is returned as-is: providers often omit it on "no
    change" answers, so the body is not re-parsed.

    Args:
        body: Raw response body.
        rules: The provider's ordered response table.
        ip: The address that was sent (or that the provider was asked to detect).

    Returns:
        ``ip`` when a success marker matches first.

    Raises:
        UpdateError: The matched rule's error, or UnknownResponseError when no
                     marker matches.
    """
    line = to_single_line(body)
    rule = match_rule(body, rules)
    if rule is None:
        raise UnknownResponseError(f"unknown response received: {line}", line)
    if rule.error is not None:
        raise rule.error(f"{rule.description or rule.marker}: {line}", line)
    return ip
