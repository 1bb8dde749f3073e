"""
exceptions.py

Responsibility: Defines the closed error taxonomy shared by every provider
adapter and by the public-IP discovery layer.
Does NOT: contain business logic, logging, or HTTP handling.

Every exception carries an ErrorKind so retry/alerting code can branch on
``exc.kind`` (or ``exc.retryable``) instead of parsing message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Programmatic identifier attached to every DdnsError subclass."""

    EMPTY_CREDENTIAL = "empty_credential"
    WILDCARD_HOST_FORBIDDEN = "wildcard_host_forbidden"
    INVALID_CONFIG = "invalid_config"
    BAD_REQUEST = "bad_request"
    NETWORK = "network"
    TIMEOUT = "timeout"
    BAD_STATUS = "bad_status"
    AUTH = "auth"
    UNKNOWN_HOST = "unknown_host"
    ABUSE = "abuse"
    UNKNOWN_RESPONSE = "unknown_response"
    PARSE = "parse"


# Kinds for which repeating the same call later can plausibly succeed.
_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.NETWORK,
        ErrorKind.TIMEOUT,
        ErrorKind.BAD_STATUS,
        ErrorKind.ABUSE,
        ErrorKind.UNKNOWN_RESPONSE,
        ErrorKind.PARSE,
    }
)


class DdnsError(Exception):
    """Base class for every error raised by this project."""

    kind: ErrorKind = ErrorKind.INVALID_CONFIG

    @property
    def retryable(self) -> bool:
        return self.kind in _RETRYABLE_KINDS


# ---------------------------------------------------------------------------
# Construction-time errors — raised before any network I/O is attempted
# ---------------------------------------------------------------------------


class ConfigError(DdnsError):
    """
    Raised when a provider or fetcher cannot be built from its configuration.
    """

    kind = ErrorKind.INVALID_CONFIG


class InvalidConfigError(ConfigError):
    """The raw configuration has an unknown key or a wrongly typed value."""


class EmptyCredentialError(ConfigError):
    """
    Raised when a required credential field is empty.

    Attributes:
        field: Name of the configuration key that was empty.
    """

    kind = ErrorKind.EMPTY_CREDENTIAL

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} cannot be empty")
        self.field = field


class EmptyUsernameError(EmptyCredentialError):
    def __init__(self) -> None:
        super().__init__("username")


class EmptyPasswordError(EmptyCredentialError):
    def __init__(self) -> None:
        super().__init__("password")


class WildcardHostForbiddenError(ConfigError):
    """The provider does not accept updates for the ``*`` host."""

    kind = ErrorKind.WILDCARD_HOST_FORBIDDEN

    def __init__(self, provider: str) -> None:
        super().__init__(f"host cannot be a wildcard for provider {provider}")
        self.provider = provider


class UnknownProviderError(ConfigError):
    """No adapter is registered under the requested provider name."""


class NoSourcesError(ConfigError):
    """A public IP ring would be empty for the requested address family."""


# ---------------------------------------------------------------------------
# Call-time errors — provider update path
# ---------------------------------------------------------------------------


class UpdateError(DdnsError):
    """
    Base class for failures of Provider.update().

    Attributes:
        body: Single-line, truncated response body when one was received.
    """

    kind = ErrorKind.UNKNOWN_RESPONSE

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class BadRequestError(UpdateError):
    """The outbound request could not be built (nothing was sent)."""

    kind = ErrorKind.BAD_REQUEST


class NetworkError(UpdateError):
    """
    The request could not be completed at the transport level.

    Attributes:
        cause: The underlying httpx exception.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class BadStatusError(UpdateError):
    """
    The provider answered with a non-2xx HTTP status.

    Attributes:
        status_code: The HTTP status code received.
    """

    kind = ErrorKind.BAD_STATUS

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"bad HTTP status: {status_code}: {body}", body)
        self.status_code = status_code


class AuthError(UpdateError):
    kind = ErrorKind.AUTH


class UnknownHostError(UpdateError):
    kind = ErrorKind.UNKNOWN_HOST


class AbuseError(UpdateError):
    kind = ErrorKind.ABUSE


class UnknownResponseError(UpdateError):
    kind = ErrorKind.UNKNOWN_RESPONSE


# ---------------------------------------------------------------------------
# Call-time errors — public IP discovery path
# ---------------------------------------------------------------------------


class IpFetchError(DdnsError):
    """
    Raised when the public IP address cannot be determined from an echo source.

    Attributes:
        source: Name of the echo source that was queried.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(message)
        self.source = source


class IpNetworkError(IpFetchError):
    kind = ErrorKind.NETWORK


class IpTimeoutError(IpNetworkError):
    """The echo source did not answer before the caller's deadline."""

    kind = ErrorKind.TIMEOUT


class IpBadStatusError(IpFetchError):
    kind = ErrorKind.BAD_STATUS

    def __init__(self, message: str, source: str = "", status_code: int = 0) -> None:
        super().__init__(message, source)
        self.status_code = status_code


class IpParseError(IpFetchError):
    """The echo source answered with an empty or unparsable body."""

    kind = ErrorKind.PARSE
