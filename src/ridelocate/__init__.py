"""ridelocate - Async location resolution engine for ride-booking forms."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ridelocate")
except PackageNotFoundError:
    __version__ = "0+local"
from ridelocate.autocomplete import AutocompleteService
from ridelocate.client import RideLocator
from ridelocate.config import LocatorConfig
from ridelocate.exceptions import (
    GpsError,
    GpsErrorKind,
    LocatorConfigError,
    ProviderError,
    ProviderErrorKind,
    RideLocateError,
)
from ridelocate.markers import MarkerBoard
from ridelocate.models import (
    AddressSource,
    BoundingBox,
    Coordinate,
    CurrentLocation,
    Marker,
    MarkerSlot,
    ResolvedAddress,
    SelectionSlot,
    ServiceArea,
    Suggestion,
)
from ridelocate.resolver import FallbackResolver
from ridelocate.selection import LocationSelector
from ridelocate.surfaces import FormSink, InMemoryForm, MapSurface, RecordingMap

__all__ = [
    "__version__",
    "AddressSource",
    "AutocompleteService",
    "BoundingBox",
    "Coordinate",
    "CurrentLocation",
    "FallbackResolver",
    "FormSink",
    "GpsError",
    "GpsErrorKind",
    "InMemoryForm",
    "LocationSelector",
    "LocatorConfig",
    "LocatorConfigError",
    "MapSurface",
    "Marker",
    "MarkerBoard",
    "MarkerSlot",
    "ProviderError",
    "ProviderErrorKind",
    "RecordingMap",
    "ResolvedAddress",
    "RideLocateError",
    "RideLocator",
    "SelectionSlot",
    "ServiceArea",
    "Suggestion",
]
