"""Error taxonomy for ga4lens.

deliberately flat - the upstream api can fail for a dozen reasons (auth, quota,
bad field names, network) but the dashboard only ever needs to know that it
failed and what google said about it.
"""

from typing import Any


class GatewayError(Exception):
    """Base class for everything ga4lens raises on purpose."""


class UpstreamFailure(GatewayError):
    """Any failure coming out of the reporting api.

    the original exception is kept as __cause__ so the traceback still shows
    the grpc/http details when we log it.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidQueryParameter(GatewayError, ValueError):
    """A query parameter we refuse to pass along."""

    def __init__(self, name: str, value: Any, reason: str | None = None) -> None:
        self.name = name
        self.value = value
        detail = f"Invalid value for '{name}': {value!r}"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(detail)


class ConfigurationError(GatewayError):
    """Startup misconfiguration. fatal - we never serve with a broken config."""
