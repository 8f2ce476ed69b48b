"""Response item models for the third-party geocoders."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from ridelocate.models._base import ProviderPayload
from ridelocate.models.coordinate import Coordinate


class NominatimPlace(ProviderPayload):
    """A Nominatim ``/reverse`` response or one ``/search`` result item.

    Nominatim sends ``lat``/``lon`` as strings; pydantic coerces them.
    """

    display_name: str | None = None
    lat: float | None = None
    lon: float | None = None
    place_class: str | None = Field(default=None, validation_alias=AliasChoices("class", "category", "place_class"))
    place_type: str | None = Field(default=None, validation_alias=AliasChoices("type", "place_type"))
    error: str | None = None

    @property
    def coordinate(self) -> Coordinate | None:
        if self.lat is None or self.lon is None:
            return None
        return Coordinate(lat=self.lat, lng=self.lon)

    @property
    def category(self) -> str | None:
        parts = [part for part in (self.place_class, self.place_type) if part]
        return "/".join(parts) if parts else None


class BigDataCloudLocality(ProviderPayload):
    """A BigDataCloud ``reverse-geocode-client`` response."""

    locality: str | None = None
    city: str | None = None
    principal_subdivision: str | None = Field(
        default=None,
        validation_alias=AliasChoices("principalSubdivision", "principal_subdivision"),
    )
    country_name: str | None = Field(default=None, validation_alias=AliasChoices("countryName", "country_name"))

    def format_address(self) -> str | None:
        """``locality, subdivision, country`` or ``None`` when city/country are missing."""
        if not self.city or not self.country_name:
            return None
        parts = [self.locality or self.city, self.principal_subdivision, self.country_name]
        return ", ".join(part for part in parts if part)
