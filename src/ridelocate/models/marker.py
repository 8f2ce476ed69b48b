"""Map marker and selection slot models."""

from __future__ import annotations

from enum import StrEnum

from ridelocate._constants import DROPOFF_FIELD, PICKUP_FIELD
from ridelocate.models._base import LocateModel
from ridelocate.models.coordinate import Coordinate


class MarkerSlot(StrEnum):
    CURRENT = "current"
    PICKUP = "pickup"
    DROPOFF = "dropoff"
    DEMO = "demo"


class SelectionSlot(StrEnum):
    """Form location the next map click populates."""

    PICKUP = "pickup"
    DROPOFF = "dropoff"

    @property
    def field_name(self) -> str:
        return PICKUP_FIELD if self is SelectionSlot.PICKUP else DROPOFF_FIELD

    @property
    def marker_slot(self) -> MarkerSlot:
        return MarkerSlot(self.value)

    @property
    def marker_label(self) -> str:
        return "Pickup Location" if self is SelectionSlot.PICKUP else "Dropoff Location"

    def next(self) -> SelectionSlot:
        return SelectionSlot.DROPOFF if self is SelectionSlot.PICKUP else SelectionSlot.PICKUP


class Marker(LocateModel):
    coordinate: Coordinate
    label: str
    slot: MarkerSlot
