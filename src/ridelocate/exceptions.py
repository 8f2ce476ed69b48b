"""Custom exception hierarchy for ridelocate."""

from __future__ import annotations

from enum import StrEnum


class RideLocateError(Exception):
    """Base exception for all ridelocate errors."""


class LocatorConfigError(RideLocateError):
    """Invalid or missing configuration."""


class ProviderErrorKind(StrEnum):
    TIMEOUT = "timeout"
    BAD_RESPONSE = "bad_response"
    UNREACHABLE = "unreachable"


class ProviderError(RideLocateError):
    """A geocoding provider call failed.

    Always carries a :class:`ProviderErrorKind`.  These errors are internal:
    the fallback resolver and the autocomplete service absorb them, so
    application code normally never sees one.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ProviderErrorKind,
        provider: str = "",
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)


class GpsErrorKind(StrEnum):
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"


class GpsError(RideLocateError):
    """The device could not report a position."""

    def __init__(self, message: str, *, kind: GpsErrorKind) -> None:
        self.kind = kind
        super().__init__(message)
