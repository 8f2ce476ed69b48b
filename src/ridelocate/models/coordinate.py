"""Geographic coordinate model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from ridelocate.models._base import LocateModel


class Coordinate(LocateModel):
    """A WGS84 point produced by a map click, a GPS fix or a provider.

    Parameters
    ----------
    lat : float
        Latitude in degrees, within ``[-90, 90]``.
    lng : float
        Longitude in degrees, within ``[-180, 180]``.  Also accepted as
        ``lon`` or ``longitude`` when validating provider data.
    """

    lat: float = Field(ge=-90.0, le=90.0, validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(ge=-180.0, le=180.0, validation_alias=AliasChoices("lng", "lon", "longitude"))

    def format(self, precision: int = 4) -> str:
        """Return ``"lat, lng"`` with *precision* decimals."""
        return f"{self.lat:.{precision}f}, {self.lng:.{precision}f}"
