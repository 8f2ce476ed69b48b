"""Ordered reverse-geocoding fallback.

Providers are consulted in fixed priority order; the first success wins and
every :class:`ProviderError` is absorbed.  When nothing answers, the
coordinate itself becomes the address, so callers always get displayable
text and never an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ridelocate.exceptions import ProviderError
from ridelocate.models.address import AddressSource, ResolvedAddress
from ridelocate.models.area import ServiceArea
from ridelocate.models.coordinate import Coordinate
from ridelocate.providers.base import ForwardSearcher, ReverseGeocoder

_logger = logging.getLogger(__name__)


def _source_for_rank(rank: int) -> AddressSource:
    return AddressSource.PROVIDER_PRIMARY if rank == 0 else AddressSource.PROVIDER_BACKUP


class FallbackResolver:
    """Resolve coordinates to addresses across an ordered provider list.

    Usage::

        resolver = FallbackResolver([nominatim, bigdatacloud])
        address = await resolver.resolve(Coordinate(lat=55.605, lng=13.0038))
    """

    def __init__(
        self,
        providers: Sequence[ReverseGeocoder],
        *,
        searcher: ForwardSearcher | None = None,
    ) -> None:
        self._providers = tuple(providers)
        self._searcher = searcher

    @property
    def providers(self) -> tuple[ReverseGeocoder, ...]:
        return self._providers

    @property
    def max_latency(self) -> float:
        """Worst-case seconds a :meth:`resolve` call can take (sum of timeouts)."""
        return sum(provider.timeout for provider in self._providers)

    async def resolve(self, coordinate: Coordinate) -> ResolvedAddress:
        """Return the first provider's address, or the coordinate fallback."""
        for rank, provider in enumerate(self._providers):
            try:
                text = await provider.reverse_geocode(coordinate)
            except ProviderError as exc:
                _logger.warning(
                    "Reverse geocoding via %s failed (%s): %s",
                    provider.name,
                    exc.kind,
                    exc,
                )
                continue
            _logger.debug("Resolved %s via %s: %s", coordinate.format(), provider.name, text)
            return ResolvedAddress(
                text=text,
                source=_source_for_rank(rank),
                coordinate=coordinate,
                provider=provider.name,
            )

        fallback = ResolvedAddress.fallback(coordinate)
        _logger.info("All reverse geocoders failed; using %s", fallback.text)
        return fallback

    async def locate(self, query: str, *, area: ServiceArea | None = None) -> Coordinate | None:
        """Forward-geocode free text to the best matching coordinate.

        Returns ``None`` when no searcher is configured, the query is blank,
        nothing matched, or the provider failed.
        """
        if self._searcher is None or not query.strip():
            return None
        try:
            results = await self._searcher.forward_search(query, area)
        except ProviderError as exc:
            _logger.warning("Address lookup via %s failed (%s): %s", self._searcher.name, exc.kind, exc)
            return None
        return results[0].coordinate if results else None
