"""Deterministic in-memory marker list.

This is the only component allowed to change which markers exist; the
selection state machine mirrors every change onto the map surface.
"""

from __future__ import annotations

from collections.abc import Iterable

from ridelocate.models.coordinate import Coordinate
from ridelocate.models.marker import Marker, MarkerSlot


class MarkerBoard:
    """At most one marker per :class:`MarkerSlot`, in insertion order.

    Upserting a slot replaces its previous marker and moves it to the end,
    matching how a freshly added map pin renders on top.
    """

    def __init__(self) -> None:
        self._markers: dict[MarkerSlot, Marker] = {}

    def upsert(self, slot: MarkerSlot, coordinate: Coordinate, label: str) -> Marker:
        marker = Marker(coordinate=coordinate, label=label, slot=slot)
        self._markers.pop(slot, None)
        self._markers[slot] = marker
        return marker

    def remove(self, slot: MarkerSlot) -> bool:
        """Drop the marker for *slot*; return whether one existed."""
        return self._markers.pop(slot, None) is not None

    def remove_many(self, slots: Iterable[MarkerSlot]) -> list[MarkerSlot]:
        return [slot for slot in slots if self.remove(slot)]

    def get(self, slot: MarkerSlot) -> Marker | None:
        return self._markers.get(slot)

    def __contains__(self, slot: object) -> bool:
        return slot in self._markers

    def __len__(self) -> int:
        return len(self._markers)

    def snapshot(self) -> list[Marker]:
        return list(self._markers.values())
