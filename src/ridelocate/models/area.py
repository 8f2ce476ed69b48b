"""Service area the booking form operates in."""

from __future__ import annotations

from pydantic import Field, model_validator

from ridelocate.models._base import LocateModel
from ridelocate.models.coordinate import Coordinate


class BoundingBox(LocateModel):
    south: float = Field(ge=-90.0, le=90.0)
    north: float = Field(ge=-90.0, le=90.0)
    west: float = Field(ge=-180.0, le=180.0)
    east: float = Field(ge=-180.0, le=180.0)

    @model_validator(mode="after")
    def _check_order(self) -> BoundingBox:
        if self.south > self.north:
            raise ValueError("south must not exceed north")
        if self.west > self.east:
            raise ValueError("west must not exceed east")
        return self

    def contains(self, coordinate: Coordinate) -> bool:
        return self.south <= coordinate.lat <= self.north and self.west <= coordinate.lng <= self.east


class ServiceArea(LocateModel):
    """A named city region used to bound street searches.

    Parameters
    ----------
    name : str
        Display name of the city (e.g. ``"Malmö"``).
    country_name : str
        Country appended to queries and formatted addresses.
    country_code : str
        ISO 3166-1 alpha-2 code passed as a provider country filter.
    aliases : tuple of str
        Lower-case spellings that count as a textual match.
    bounds : BoundingBox
        Geographic extent of the area.
    """

    name: str
    country_name: str
    country_code: str
    aliases: tuple[str, ...] = ()
    bounds: BoundingBox

    @property
    def viewbox(self) -> str:
        """Nominatim ``viewbox`` value (``west,north,east,south``)."""
        b = self.bounds
        return f"{b.west},{b.north},{b.east},{b.south}"

    def contains(self, coordinate: Coordinate) -> bool:
        return self.bounds.contains(coordinate)

    def mentions(self, text: str) -> bool:
        """Whether *text* names this area (case-insensitive)."""
        lowered = text.lower()
        names = {self.name.lower(), *(alias.lower() for alias in self.aliases)}
        return any(name in lowered for name in names)

    def format_address(self, address: str) -> str:
        """Append the city and country unless *address* already names the area."""
        if self.mentions(address):
            return address
        return f"{address}, {self.name}, {self.country_name}"
