from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from ridelocate.autocomplete import AutocompleteService, dedupe, rank
from ridelocate.config import LocatorConfig, default_service_area
from ridelocate.exceptions import ProviderError, ProviderErrorKind
from ridelocate.models import Coordinate, ServiceArea, Suggestion

IN_MALMO = Coordinate(lat=55.6030, lng=13.0010)
IN_STOCKHOLM = Coordinate(lat=59.3293, lng=18.0686)


def _suggestion(text: str, coordinate: Coordinate = IN_MALMO) -> Suggestion:
    return Suggestion(display_text=text, short_label=text.split(",")[0], coordinate=coordinate)


@dataclass
class FakeSearcher:
    name: str = "fake-search"
    results: dict[str, list[Suggestion]] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    started: dict[str, asyncio.Event] = field(default_factory=dict)
    fail: bool = False
    calls: list[str] = field(default_factory=list)

    def gate(self, query: str) -> asyncio.Event:
        self.started[query] = asyncio.Event()
        self.gates[query] = asyncio.Event()
        return self.gates[query]

    async def forward_search(self, query: str, area: ServiceArea | None = None) -> list[Suggestion]:
        self.calls.append(query)
        if query in self.started:
            self.started[query].set()
        if query in self.gates:
            await self.gates[query].wait()
        if self.fail:
            raise ProviderError("quota", kind=ProviderErrorKind.BAD_RESPONSE, provider=self.name)
        return self.results.get(query, [_suggestion(f"{query}vägen, Malmö")])


def _service(searcher: FakeSearcher, **kwargs: object) -> AutocompleteService:
    return AutocompleteService(searcher, area=default_service_area(), **kwargs)  # type: ignore[arg-type]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", " ", "M", " M "])
async def test_short_queries_never_reach_provider(query: str) -> None:
    searcher = FakeSearcher()
    service = _service(searcher)

    assert await service.search(query) == []
    assert searcher.calls == []


@pytest.mark.asyncio
async def test_queries_within_debounce_window_collapse_to_latest() -> None:
    searcher = FakeSearcher()
    service = _service(searcher, debounce_ms=50)

    first = asyncio.create_task(service.search("Ma"))
    await asyncio.sleep(0.01)
    second = asyncio.create_task(service.search("Mal"))

    assert await first is None
    result = await second
    assert searcher.calls == ["Mal"]
    assert result is not None
    assert service.suggestions == result


@pytest.mark.asyncio
async def test_stale_response_does_not_replace_newer_list() -> None:
    searcher = FakeSearcher(
        results={
            "Malmo": [_suggestion("Malmö C, Malmö")],
            "Malmogatan": [_suggestion("Malmögatan, Malmö")],
        }
    )
    slow_gate = searcher.gate("Malmo")
    fast_gate = searcher.gate("Malmogatan")
    service = _service(searcher, debounce_ms=0)

    slow = asyncio.create_task(service.search("Malmo"))
    await searcher.started["Malmo"].wait()
    fast = asyncio.create_task(service.search("Malmogatan"))
    await searcher.started["Malmogatan"].wait()

    fast_gate.set()
    assert [s.short_label for s in (await fast or [])] == ["Malmögatan"]

    slow_gate.set()
    assert await slow is None
    assert [s.short_label for s in service.suggestions] == ["Malmögatan"]


@pytest.mark.asyncio
async def test_provider_failure_degrades_to_empty_list() -> None:
    service = _service(FakeSearcher(fail=True), debounce_ms=0)
    assert await service.search("Södergatan") == []
    assert service.suggestions == []


@pytest.mark.asyncio
async def test_results_outside_area_are_excluded() -> None:
    searcher = FakeSearcher(
        results={
            "Drottninggatan": [
                _suggestion("Drottninggatan, Norrmalm, Stockholm", IN_STOCKHOLM),
                _suggestion("Drottninggatan, Malmö", IN_STOCKHOLM),
                _suggestion("Drottninggatan, Innerstaden"),
            ]
        }
    )
    service = _service(searcher, debounce_ms=0)

    results = await service.search("Drottninggatan")

    assert [s.display_text for s in results or []] == ["Drottninggatan, Innerstaden", "Drottninggatan, Malmö"]


@pytest.mark.asyncio
async def test_results_are_deduplicated_ranked_and_capped() -> None:
    noisy = [_suggestion(f"Hus {i}, Södergatan, Malmö") for i in range(4)]
    noisy += [_suggestion("Södergatan, Malmö"), _suggestion("Södergatan, Malmö")]
    noisy += [_suggestion(f"Södra Förstadsgatan {i}, Malmö") for i in range(3)]
    service = _service(FakeSearcher(results={"Söd": noisy}), debounce_ms=0, max_suggestions=4)

    results = await service.search("Söd") or []

    assert len(results) == 4
    assert results[0].display_text == "Södergatan, Malmö"
    assert all(s.short_label.startswith("Söd") for s in results)


@pytest.mark.asyncio
async def test_select_clears_list_and_invalidates_pending_query() -> None:
    searcher = FakeSearcher()
    gate = searcher.gate("Stortorget")
    changes: list[list[Suggestion]] = []
    service = _service(searcher, debounce_ms=0, on_change=changes.append)

    await service.search("Lilla torg")
    picked = service.suggestions[0]
    pending = asyncio.create_task(service.search("Stortorget"))
    await searcher.started["Stortorget"].wait()

    assert service.select(picked) is picked
    assert service.suggestions == []
    gate.set()
    assert await pending is None
    assert service.suggestions == []
    assert changes[-1] == []


@pytest.mark.asyncio
async def test_on_change_errors_do_not_break_search() -> None:
    def _boom(_items: list[Suggestion]) -> None:
        raise RuntimeError("ui went away")

    service = _service(FakeSearcher(), debounce_ms=0, on_change=_boom)
    assert await service.search("Lilla torg")


def test_from_config_uses_configured_limits() -> None:
    config = LocatorConfig(debounce_ms=120, max_suggestions=3)
    service = AutocompleteService.from_config(FakeSearcher(), config)
    assert service._debounce_ms == 120  # noqa: SLF001
    assert service._max_suggestions == 3  # noqa: SLF001


def test_rank_prefers_prefix_then_area() -> None:
    area = default_service_area()
    items = [
        _suggestion("Gamla Södergatan, Malmö"),
        _suggestion("Södergatan, Stockholm", IN_STOCKHOLM),
        _suggestion("Södergatan, Malmö"),
    ]
    assert [s.display_text for s in rank("söder", items, area)] == [
        "Södergatan, Malmö",
        "Södergatan, Stockholm",
        "Gamla Södergatan, Malmö",
    ]
    assert dedupe(items + items) == items
