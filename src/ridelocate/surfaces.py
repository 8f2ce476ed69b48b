"""Interfaces of the collaborators the engine writes to.

The booking form and the map widget live outside this package.  The engine
only needs the narrow call shapes below; :class:`InMemoryForm` and
:class:`RecordingMap` are plain implementations for scripts and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from ridelocate.models.coordinate import Coordinate
from ridelocate.models.marker import MarkerSlot


class FormSink(Protocol):
    def set_field(self, name: str, value: str) -> None:
        ...

    def get_field(self, name: str) -> str:
        ...


class MapSurface(Protocol):
    def upsert_marker(self, slot: MarkerSlot, coordinate: Coordinate, label: str) -> None:
        ...

    def remove_marker(self, slot: MarkerSlot) -> None:
        ...

    def recenter(self, coordinate: Coordinate, zoom: int) -> None:
        ...


@dataclass
class InMemoryForm:
    """Dict-backed form; unknown fields read as empty strings."""

    fields: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def set_field(self, name: str, value: str) -> None:
        self.fields[name] = value
        self.writes.append((name, value))

    def get_field(self, name: str) -> str:
        return self.fields.get(name, "")


@dataclass
class RecordingMap:
    """Map surface that records every instruction it receives."""

    markers: dict[MarkerSlot, tuple[Coordinate, str]] = field(default_factory=dict)
    center: tuple[Coordinate, int] | None = None
    calls: list[tuple[str, Any]] = field(default_factory=list)

    def upsert_marker(self, slot: MarkerSlot, coordinate: Coordinate, label: str) -> None:
        self.markers.pop(slot, None)
        self.markers[slot] = (coordinate, label)
        self.calls.append(("upsert", slot))

    def remove_marker(self, slot: MarkerSlot) -> None:
        self.markers.pop(slot, None)
        self.calls.append(("remove", slot))

    def recenter(self, coordinate: Coordinate, zoom: int) -> None:
        self.center = (coordinate, zoom)
        self.calls.append(("recenter", zoom))
