from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from ridelocate import (
    AddressSource,
    Coordinate,
    InMemoryForm,
    LocatorConfig,
    RecordingMap,
    RideLocateError,
    RideLocator,
    SelectionSlot,
)
from ridelocate.exceptions import ProviderError, ProviderErrorKind


@dataclass
class FakeProviderBackend:
    """Answers by provider name; providers listed in ``down`` fail as unreachable."""

    down: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    async def get_json(self, url: str, *, params: Mapping[str, str], timeout: float, provider: str) -> Any:
        self.calls.append(f"{provider}:{url.rsplit('/', 1)[-1]}")
        if provider in self.down:
            raise ProviderError("offline", kind=ProviderErrorKind.UNREACHABLE, provider=provider)
        if provider == "bigdatacloud":
            return {"city": "Malmö", "locality": "Gamla staden", "countryName": "Sweden"}
        if url.endswith("/search"):
            return [{"display_name": "Södergatan, Innerstaden, Malmö", "lat": "55.603", "lon": "13.001"}]
        return {"display_name": "Stortorget, Gamla staden, Malmö"}


STORTORGET = Coordinate(lat=55.6050, lng=13.0038)


@pytest.mark.asyncio
async def test_resolve_uses_nominatim_first() -> None:
    backend = FakeProviderBackend()
    async with RideLocator(LocatorConfig(), transport=backend) as locator:
        address = await locator.resolve(STORTORGET)

    assert address.source == AddressSource.PROVIDER_PRIMARY
    assert address.provider == "nominatim"
    assert backend.calls == ["nominatim:reverse"]


@pytest.mark.asyncio
async def test_resolve_falls_back_to_bigdatacloud_then_coordinates() -> None:
    backend = FakeProviderBackend(down={"nominatim"})
    locator = RideLocator(transport=backend)

    address = await locator.resolve(STORTORGET)
    assert address.source == AddressSource.PROVIDER_BACKUP
    assert address.text == "Gamla staden, Sweden"

    backend.down.add("bigdatacloud")
    degraded = await locator.resolve(STORTORGET)
    assert degraded.text == "📍 55.6050, 13.0038"
    assert locator.resolver.max_latency == 16.0


@pytest.mark.asyncio
async def test_locate_and_autocomplete_share_search_provider() -> None:
    locator = RideLocator(transport=FakeProviderBackend())

    assert await locator.locate("Södergatan") == Coordinate(lat=55.603, lng=13.001)

    service = locator.new_autocomplete()
    results = await service.search("Söder", debounce_ms=0)
    assert [s.short_label for s in results or []] == ["Södergatan"]


@pytest.mark.asyncio
async def test_new_selection_runs_a_booking_session() -> None:
    form = InMemoryForm()
    surface = RecordingMap()
    locator = RideLocator(transport=FakeProviderBackend())

    selector = locator.new_selection(form, surface)
    await selector.on_click(STORTORGET)

    assert form.get_field("pickupAddress") == "Stortorget, Gamla staden, Malmö"
    assert selector.armed_slot is SelectionSlot.DROPOFF


@pytest.mark.asyncio
async def test_uninitialized_locator_raises() -> None:
    locator = RideLocator()
    with pytest.raises(RideLocateError):
        await locator.resolve(STORTORGET)


@pytest.mark.asyncio
async def test_external_session_is_left_open() -> None:
    async with aiohttp.ClientSession() as http:
        async with RideLocator(session=http) as locator:
            assert locator.resolver.providers
        assert not http.closed
