"""Resolved address models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import field_validator

from ridelocate._constants import format_coordinate_fallback
from ridelocate.models._base import LocateModel
from ridelocate.models.coordinate import Coordinate


class AddressSource(StrEnum):
    PROVIDER_PRIMARY = "provider_primary"
    PROVIDER_BACKUP = "provider_backup"
    COORDINATE_FALLBACK = "coordinate_fallback"


class ResolvedAddress(LocateModel):
    """Outcome of one reverse geocoding request.

    ``text`` is never empty.  When no provider produced an address it is the
    coordinate rendered by :func:`format_coordinate_fallback` and ``source``
    is :attr:`AddressSource.COORDINATE_FALLBACK`.
    """

    text: str
    source: AddressSource
    coordinate: Coordinate
    provider: str | None = None

    @field_validator("text")
    @classmethod
    def _require_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("text must be non-empty")
        return text

    @classmethod
    def fallback(cls, coordinate: Coordinate) -> ResolvedAddress:
        return cls(
            text=format_coordinate_fallback(coordinate.lat, coordinate.lng),
            source=AddressSource.COORDINATE_FALLBACK,
            coordinate=coordinate,
        )

    @property
    def is_degraded(self) -> bool:
        """Whether the text is a coordinate string rather than a street address."""
        return self.source == AddressSource.COORDINATE_FALLBACK


class CurrentLocation(LocateModel):
    """The user's last known position and its address."""

    coordinate: Coordinate
    address: str
