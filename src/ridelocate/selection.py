"""Pickup/dropoff selection state machine.

The machine holds one armed slot (``PICKUP`` or ``DROPOFF``) that the next
map click populates; it never has an unarmed state.  Clicks cycle the armed
slot ``PICKUP -> DROPOFF -> PICKUP``.

Ordering rules:

* the target slot is captured and the armed slot advanced synchronously,
  before the address lookup suspends, so slow lookups never misattribute a
  click;
* each write to a slot takes a fresh sequence token, and a lookup whose
  token is no longer the slot's latest is discarded on arrival (last write
  wins).
"""

from __future__ import annotations

import itertools
import logging

from ridelocate._constants import (
    GPS_PERMISSION_DENIED_TEXT,
    GPS_TIMEOUT_TEXT,
    GPS_UNAVAILABLE_TEXT,
    PICKUP_FIELD,
    RESOLVING_TEXT,
)
from ridelocate.autocomplete import AutocompleteService
from ridelocate.config import LocatorConfig, RecenterPolicy
from ridelocate.exceptions import GpsError, GpsErrorKind
from ridelocate.markers import MarkerBoard
from ridelocate.models.address import CurrentLocation, ResolvedAddress
from ridelocate.models.coordinate import Coordinate
from ridelocate.models.marker import Marker, MarkerSlot, SelectionSlot
from ridelocate.models.suggestion import Suggestion
from ridelocate.resolver import FallbackResolver
from ridelocate.surfaces import FormSink, MapSurface

_logger = logging.getLogger(__name__)

CURRENT_LOCATION_LABEL = "Your Current Location"
DEMO_LOCATION = CurrentLocation(
    coordinate=Coordinate(lat=37.7749, lng=-122.4194),
    address="San Francisco, CA, USA (Demo Location)",
)
DEMO_LOCATION_LABEL = "Demo Location - San Francisco"

_GPS_GUIDANCE: dict[GpsErrorKind, str] = {
    GpsErrorKind.PERMISSION_DENIED: GPS_PERMISSION_DENIED_TEXT,
    GpsErrorKind.UNAVAILABLE: GPS_UNAVAILABLE_TEXT,
    GpsErrorKind.TIMEOUT: GPS_TIMEOUT_TEXT,
}


def gps_guidance(kind: GpsErrorKind | str) -> str:
    """User-facing advice for a failed GPS fix."""
    return _GPS_GUIDANCE[GpsErrorKind(kind)]


class LocationSelector:
    """Per-booking-session location selection.

    Owns the armed slot and the marker list; every marker change is
    mirrored onto *map_surface* and every address onto *form*.
    """

    def __init__(
        self,
        resolver: FallbackResolver,
        form: FormSink,
        map_surface: MapSurface,
        *,
        gps_zoom: int = 16,
        demo_zoom: int = 15,
        recenter_on_fix: RecenterPolicy = "when_idle",
    ) -> None:
        self._resolver = resolver
        self._form = form
        self._map = map_surface
        self._gps_zoom = gps_zoom
        self._demo_zoom = demo_zoom
        self._recenter_on_fix = recenter_on_fix
        self._armed = SelectionSlot.PICKUP
        self._board = MarkerBoard()
        self._tokens = itertools.count(1)
        self._latest: dict[MarkerSlot, int] = {}
        self._current_location: CurrentLocation | None = None
        self._location_error: str | None = None

    @classmethod
    def from_config(
        cls,
        resolver: FallbackResolver,
        form: FormSink,
        map_surface: MapSurface,
        config: LocatorConfig,
    ) -> LocationSelector:
        return cls(
            resolver,
            form,
            map_surface,
            gps_zoom=config.gps_zoom,
            demo_zoom=config.demo_zoom,
            recenter_on_fix=config.recenter_on_fix,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def armed_slot(self) -> SelectionSlot:
        return self._armed

    @property
    def markers(self) -> list[Marker]:
        return self._board.snapshot()

    @property
    def current_location(self) -> CurrentLocation | None:
        return self._current_location

    @property
    def location_error(self) -> str | None:
        return self._location_error

    def status_hint(self) -> str:
        if self._armed is SelectionSlot.PICKUP:
            return "Next: click the map to set the pickup location"
        return "Next: click the map to set the dropoff location"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _issue(self, slot: MarkerSlot) -> int:
        token = next(self._tokens)
        self._latest[slot] = token
        return token

    def _is_current(self, slot: MarkerSlot, token: int) -> bool:
        return self._latest.get(slot) == token

    def _place(self, slot: MarkerSlot, coordinate: Coordinate, label: str) -> None:
        self._board.upsert(slot, coordinate, label)
        self._map.upsert_marker(slot, coordinate, label)

    def _remove(self, *slots: MarkerSlot) -> None:
        for slot in self._board.remove_many(slots):
            self._map.remove_marker(slot)

    def _selection_in_progress(self) -> bool:
        return MarkerSlot.PICKUP in self._board or MarkerSlot.DROPOFF in self._board

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def on_click(self, coordinate: Coordinate) -> ResolvedAddress | None:
        """Resolve a map click into the armed slot.

        Returns the address written to the form, or ``None`` when a newer
        write to the same slot (or a reset) superseded this click.
        """
        slot = self._armed
        marker_slot = slot.marker_slot
        token = self._issue(marker_slot)
        self._form.set_field(slot.field_name, RESOLVING_TEXT)
        self._armed = slot.next()
        _logger.debug("Map click at %s -> %s (token %d)", coordinate.format(), slot, token)

        address = await self._resolver.resolve(coordinate)

        if not self._is_current(marker_slot, token):
            _logger.debug("Discarding superseded %s lookup (token %d)", slot, token)
            return None

        self._form.set_field(slot.field_name, address.text)
        self._place(marker_slot, coordinate, slot.marker_label)
        self._remove(MarkerSlot.DEMO)
        return address

    def reset(self) -> None:
        """Clear both locations and re-arm pickup; the GPS marker stays."""
        for slot in SelectionSlot:
            self._issue(slot.marker_slot)
            self._form.set_field(slot.field_name, "")
        self._remove(MarkerSlot.PICKUP, MarkerSlot.DROPOFF)
        self._armed = SelectionSlot.PICKUP

    async def on_fix_acquired(self, coordinate: Coordinate) -> ResolvedAddress | None:
        """Handle a GPS fix.

        Fills the pickup field only if it is empty and always replaces the
        ``CURRENT`` marker.  Leaves the armed slot alone.  Returns ``None``
        when a newer fix arrived while this one was being resolved.
        """
        token = self._issue(MarkerSlot.CURRENT)
        address = await self._resolver.resolve(coordinate)
        if not self._is_current(MarkerSlot.CURRENT, token):
            return None

        self._current_location = CurrentLocation(coordinate=coordinate, address=address.text)
        self._location_error = None
        if not self._form.get_field(PICKUP_FIELD).strip():
            self._form.set_field(PICKUP_FIELD, address.text)
        self._place(MarkerSlot.CURRENT, coordinate, CURRENT_LOCATION_LABEL)

        if self._recenter_on_fix == "always" or not self._selection_in_progress():
            self._map.recenter(coordinate, self._gps_zoom)
        return address

    def on_fix_failed(self, error: GpsError | GpsErrorKind | str) -> str:
        """Record and return guidance for a failed GPS fix."""
        kind = error.kind if isinstance(error, GpsError) else GpsErrorKind(error)
        message = gps_guidance(kind)
        self._location_error = message
        _logger.info("GPS fix failed: %s", kind)
        return message

    def use_current_location_for_pickup(self) -> bool:
        """Copy the last GPS address into the pickup field, if there is one."""
        if self._current_location is None:
            return False
        self._issue(MarkerSlot.PICKUP)
        self._form.set_field(PICKUP_FIELD, self._current_location.address)
        return True

    def set_demo_location(self) -> CurrentLocation:
        """Pretend the user stands at the demo location."""
        self._current_location = DEMO_LOCATION
        self._location_error = None
        self._place(MarkerSlot.DEMO, DEMO_LOCATION.coordinate, DEMO_LOCATION_LABEL)
        self._map.recenter(DEMO_LOCATION.coordinate, self._demo_zoom)
        return DEMO_LOCATION

    def select_suggestion(
        self,
        slot: SelectionSlot,
        suggestion: Suggestion,
        *,
        autocomplete: AutocompleteService | None = None,
    ) -> None:
        """Write an autocomplete pick straight into *slot*, skipping resolution."""
        if autocomplete is not None:
            autocomplete.select(suggestion)
        self._issue(slot.marker_slot)
        self._form.set_field(slot.field_name, suggestion.display_text)
        self._place(slot.marker_slot, suggestion.coordinate, slot.marker_label)
