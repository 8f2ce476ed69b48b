"""OpenStreetMap Nominatim adapter.

Endpoints:
  - /reverse (coordinate -> address, primary reverse geocoder)
  - /search  (street autocomplete)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ridelocate._transport import Transport
from ridelocate.config import LocatorConfig
from ridelocate.exceptions import ProviderError, ProviderErrorKind
from ridelocate.models.area import ServiceArea
from ridelocate.models.coordinate import Coordinate
from ridelocate.models.payloads import NominatimPlace
from ridelocate.models.suggestion import Suggestion
from ridelocate.providers.base import format_degrees, parse_payload, require_query

_logger = logging.getLogger(__name__)


def _short_label(display_name: str) -> str:
    """Street part of a Nominatim label (text before the first comma)."""
    return display_name.split(",", 1)[0].strip() or display_name


def _to_suggestion(place: NominatimPlace) -> Suggestion | None:
    coordinate = place.coordinate
    if not place.display_name or coordinate is None:
        return None
    return Suggestion(
        display_text=place.display_name,
        short_label=_short_label(place.display_name),
        coordinate=coordinate,
        category=place.category,
    )


class NominatimProvider:
    """Reverse and forward geocoding against a Nominatim instance."""

    name = "nominatim"

    def __init__(
        self,
        transport: Transport,
        *,
        base_url: str,
        timeout: float,
        search_timeout: float | None = None,
        search_limit: int = 8,
    ) -> None:
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.search_timeout = search_timeout if search_timeout is not None else timeout
        self._search_limit = search_limit

    @classmethod
    def from_config(cls, transport: Transport, config: LocatorConfig) -> NominatimProvider:
        return cls(
            transport,
            base_url=config.nominatim_url,
            timeout=config.primary_timeout,
            search_timeout=config.search_timeout,
            search_limit=config.search_limit,
        )

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        """Return Nominatim's ``display_name`` for *coordinate*.

        Raises
        ------
        ProviderError
            ``BAD_RESPONSE`` when the payload carries no ``display_name``
            (Nominatim answers ``{"error": "Unable to geocode"}`` over water),
            otherwise whatever the transport raised.
        """
        body = await self._transport.get_json(
            f"{self._base_url}/reverse",
            params={
                "format": "json",
                "lat": format_degrees(coordinate.lat),
                "lon": format_degrees(coordinate.lng),
                "zoom": "18",
                "addressdetails": "1",
            },
            timeout=self.timeout,
            provider=self.name,
        )
        place = parse_payload(NominatimPlace, body, provider=self.name)
        if not place.display_name:
            raise ProviderError(
                f"{self.name} has no address for {coordinate.format()}: {place.error or 'empty display_name'}",
                kind=ProviderErrorKind.BAD_RESPONSE,
                provider=self.name,
            )
        return place.display_name.strip()

    async def forward_search(self, query: str, area: ServiceArea | None = None) -> list[Suggestion]:
        """Search places matching *query*, bounded to *area* when given.

        Individual result items that cannot be parsed are skipped; a payload
        that is not a list fails with ``BAD_RESPONSE``.
        """
        trimmed = require_query(query)
        params: dict[str, str] = {
            "q": trimmed,
            "format": "json",
            "limit": str(self._search_limit),
            "addressdetails": "1",
        }
        if area is not None:
            params["q"] = area.format_address(trimmed)
            params["countrycodes"] = area.country_code
            params["viewbox"] = area.viewbox
            params["bounded"] = "1"

        body = await self._transport.get_json(
            f"{self._base_url}/search",
            params=params,
            timeout=self.search_timeout,
            provider=self.name,
        )
        if not isinstance(body, list):
            raise ProviderError(
                f"{self.name} search returned {type(body).__name__}, expected a list",
                kind=ProviderErrorKind.BAD_RESPONSE,
                provider=self.name,
            )

        suggestions: list[Suggestion] = []
        for item in body:
            suggestion = self._parse_item(item)
            if suggestion is not None:
                suggestions.append(suggestion)
        _logger.debug("%s search %r: %d/%d usable results", self.name, trimmed, len(suggestions), len(body))
        return suggestions

    def _parse_item(self, item: Any) -> Suggestion | None:
        if not isinstance(item, dict):
            return None
        try:
            return _to_suggestion(NominatimPlace.model_validate(item))
        except ValidationError:
            _logger.debug("Skipping malformed %s result: %r", self.name, item, exc_info=True)
            return None
