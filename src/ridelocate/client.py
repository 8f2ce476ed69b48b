"""High-level async entry point wiring providers, resolver and services."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from ridelocate._transport import HttpTransport, Transport
from ridelocate.autocomplete import AutocompleteService
from ridelocate.config import LocatorConfig
from ridelocate.exceptions import RideLocateError
from ridelocate.models.address import ResolvedAddress
from ridelocate.models.coordinate import Coordinate
from ridelocate.models.suggestion import Suggestion
from ridelocate.providers.bigdatacloud import BigDataCloudProvider
from ridelocate.providers.nominatim import NominatimProvider
from ridelocate.resolver import FallbackResolver
from ridelocate.selection import LocationSelector
from ridelocate.surfaces import FormSink, MapSurface

_logger = logging.getLogger(__name__)


class RideLocator:
    """Async facade over the location resolution engine.

    Usage::

        async with RideLocator(config) as locator:
            address = await locator.resolve(Coordinate(lat=55.605, lng=13.0038))
            selector = locator.new_selection(form, map_surface)
    """

    def __init__(
        self,
        config: LocatorConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or LocatorConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._resolver: FallbackResolver | None = None
        self._nominatim: NominatimProvider | None = None
        if transport is not None:
            self._build(transport)

    @property
    def config(self) -> LocatorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RideLocator:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._build(HttpTransport(self._http_session, user_agent=self._config.user_agent))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None
            self._resolver = None
            self._nominatim = None

    def _build(self, transport: Transport) -> None:
        self._transport = transport
        self._nominatim = NominatimProvider.from_config(transport, self._config)
        backup = BigDataCloudProvider.from_config(transport, self._config)
        self._resolver = FallbackResolver([self._nominatim, backup], searcher=self._nominatim)
        _logger.debug(
            "Locator ready: providers=%s worst-case latency=%.1fs",
            [p.name for p in self._resolver.providers],
            self._resolver.max_latency,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_resolver(self) -> FallbackResolver:
        if self._resolver is None:
            raise RideLocateError("Locator not initialized. Use 'async with RideLocator(...) as locator:'")
        return self._resolver

    def _require_searcher(self) -> NominatimProvider:
        if self._nominatim is None:
            raise RideLocateError("Locator not initialized. Use 'async with RideLocator(...) as locator:'")
        return self._nominatim

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def resolver(self) -> FallbackResolver:
        return self._require_resolver()

    async def resolve(self, coordinate: Coordinate) -> ResolvedAddress:
        """Reverse-geocode *coordinate*; never raises for provider failures."""
        return await self._require_resolver().resolve(coordinate)

    async def locate(self, query: str) -> Coordinate | None:
        """Forward-geocode free text inside the configured service area."""
        return await self._require_resolver().locate(query, area=self._config.service_area)

    def new_autocomplete(
        self,
        *,
        on_change: Callable[[list[Suggestion]], None] | None = None,
    ) -> AutocompleteService:
        """Create an autocomplete service for one address input."""
        return AutocompleteService.from_config(self._require_searcher(), self._config, on_change=on_change)

    def new_selection(self, form: FormSink, map_surface: MapSurface) -> LocationSelector:
        """Start a booking session bound to *form* and *map_surface*."""
        return LocationSelector.from_config(self._require_resolver(), form, map_surface, self._config)
