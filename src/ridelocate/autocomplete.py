"""Debounced street-name autocomplete.

Each keystroke calls :meth:`AutocompleteService.search`.  Calls are tagged
with a monotonically increasing sequence token:

- after the debounce delay, a call that has been superseded returns
  ``None`` without reaching the provider;
- a provider response that arrives after a newer call was issued is
  discarded on arrival.

The visible suggestion list therefore always belongs to the latest query.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from ridelocate.config import LocatorConfig
from ridelocate.exceptions import ProviderError
from ridelocate.models.area import ServiceArea
from ridelocate.models.suggestion import Suggestion
from ridelocate.providers.base import ForwardSearcher

_logger = logging.getLogger(__name__)


def filter_to_area(suggestions: Iterable[Suggestion], area: ServiceArea) -> list[Suggestion]:
    """Keep results inside *area* geometrically or by name."""
    return [s for s in suggestions if area.contains(s.coordinate) or area.mentions(s.display_text)]


def dedupe(suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    """Drop repeated ``display_text`` values, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Suggestion] = []
    for suggestion in suggestions:
        if suggestion.display_text in seen:
            continue
        seen.add(suggestion.display_text)
        unique.append(suggestion)
    return unique


def rank(query: str, suggestions: list[Suggestion], area: ServiceArea | None = None) -> list[Suggestion]:
    """Order prefix matches first, then in-area results, otherwise keep provider order."""
    needle = query.strip().lower()

    def _key(item: tuple[int, Suggestion]) -> tuple[bool, bool, int]:
        index, suggestion = item
        prefix_miss = not suggestion.short_label.lower().startswith(needle)
        outside = area is not None and not area.contains(suggestion.coordinate)
        return prefix_miss, outside, index

    return [s for _, s in sorted(enumerate(suggestions), key=_key)]


class AutocompleteService:
    """Forward search with debounce, staleness filtering and silent failure."""

    def __init__(
        self,
        searcher: ForwardSearcher,
        *,
        area: ServiceArea | None = None,
        debounce_ms: int = 300,
        min_query_length: int = 2,
        max_suggestions: int = 6,
        on_change: Callable[[list[Suggestion]], None] | None = None,
    ) -> None:
        self._searcher = searcher
        self._area = area
        self._debounce_ms = debounce_ms
        self._min_query_length = min_query_length
        self._max_suggestions = max_suggestions
        self._on_change = on_change
        self._sequence = 0
        self._suggestions: list[Suggestion] = []

    @classmethod
    def from_config(
        cls,
        searcher: ForwardSearcher,
        config: LocatorConfig,
        *,
        on_change: Callable[[list[Suggestion]], None] | None = None,
    ) -> AutocompleteService:
        return cls(
            searcher,
            area=config.service_area,
            debounce_ms=config.debounce_ms,
            min_query_length=config.min_query_length,
            max_suggestions=config.max_suggestions,
            on_change=on_change,
        )

    @property
    def suggestions(self) -> list[Suggestion]:
        """The list currently shown to the user."""
        return list(self._suggestions)

    @property
    def sequence(self) -> int:
        """Token of the most recently issued query."""
        return self._sequence

    def _is_current(self, token: int) -> bool:
        return token == self._sequence

    def _apply(self, suggestions: list[Suggestion]) -> None:
        self._suggestions = list(suggestions)
        if self._on_change is not None:
            try:
                self._on_change(list(suggestions))
            except Exception:
                _logger.debug("on_change callback failed", exc_info=True)

    def _refine(self, query: str, raw: list[Suggestion]) -> list[Suggestion]:
        results = raw
        if self._area is not None:
            results = filter_to_area(results, self._area)
        results = rank(query, dedupe(results), self._area)
        return results[: self._max_suggestions]

    async def search(self, query: str, *, debounce_ms: int | None = None) -> list[Suggestion] | None:
        """Search suggestions for *query*.

        Returns the list that was applied to :attr:`suggestions`, or
        ``None`` when a newer call superseded this one.
        """
        self._sequence += 1
        token = self._sequence

        trimmed = query.strip()
        if len(trimmed) < self._min_query_length:
            self._apply([])
            return []

        delay_ms = self._debounce_ms if debounce_ms is None else debounce_ms
        if delay_ms < 0:
            raise ValueError("debounce_ms must not be negative")
        if delay_ms:
            await asyncio.sleep(delay_ms / 1000)
        if not self._is_current(token):
            _logger.debug("Query %r superseded during debounce", trimmed)
            return None

        try:
            raw = await self._searcher.forward_search(trimmed, self._area)
        except ProviderError as exc:
            _logger.warning("Street search via %s failed (%s): %s", self._searcher.name, exc.kind, exc)
            raw = []

        if not self._is_current(token):
            _logger.debug("Discarding stale results for %r (token %d < %d)", trimmed, token, self._sequence)
            return None

        results = self._refine(trimmed, raw)
        self._apply(results)
        return results

    def select(self, suggestion: Suggestion) -> Suggestion:
        """Finish the current query with *suggestion* and clear the list."""
        self.clear()
        return suggestion

    def clear(self) -> None:
        """Empty the list and invalidate every in-flight query."""
        self._sequence += 1
        self._apply([])
