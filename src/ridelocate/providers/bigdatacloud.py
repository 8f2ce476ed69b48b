"""BigDataCloud client-side reverse geocoding adapter (backup provider).

Only reverse geocoding is offered by the free client endpoint.
"""

from __future__ import annotations

from ridelocate._transport import Transport
from ridelocate.config import LocatorConfig
from ridelocate.exceptions import ProviderError, ProviderErrorKind
from ridelocate.models.coordinate import Coordinate
from ridelocate.models.payloads import BigDataCloudLocality
from ridelocate.providers.base import format_degrees, parse_payload


class BigDataCloudProvider:
    name = "bigdatacloud"

    def __init__(self, transport: Transport, *, url: str, timeout: float, language: str = "en") -> None:
        self._transport = transport
        self._url = url
        self.timeout = timeout
        self._language = language

    @classmethod
    def from_config(cls, transport: Transport, config: LocatorConfig) -> BigDataCloudProvider:
        return cls(
            transport,
            url=config.bigdatacloud_url,
            timeout=config.backup_timeout,
            language=config.language,
        )

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        body = await self._transport.get_json(
            self._url,
            params={
                "latitude": format_degrees(coordinate.lat),
                "longitude": format_degrees(coordinate.lng),
                "localityLanguage": self._language,
            },
            timeout=self.timeout,
            provider=self.name,
        )
        locality = parse_payload(BigDataCloudLocality, body, provider=self.name)
        address = locality.format_address()
        if not address:
            raise ProviderError(
                f"{self.name} returned no city/country for {coordinate.format()}",
                kind=ProviderErrorKind.BAD_RESPONSE,
                provider=self.name,
            )
        return address
