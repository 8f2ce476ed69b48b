"""Data models for the location resolution engine."""

from ridelocate.models._base import LocateModel, ProviderPayload
from ridelocate.models.address import AddressSource, CurrentLocation, ResolvedAddress
from ridelocate.models.area import BoundingBox, ServiceArea
from ridelocate.models.coordinate import Coordinate
from ridelocate.models.marker import Marker, MarkerSlot, SelectionSlot
from ridelocate.models.payloads import BigDataCloudLocality, NominatimPlace
from ridelocate.models.suggestion import Suggestion

__all__ = [
    "AddressSource",
    "BigDataCloudLocality",
    "BoundingBox",
    "Coordinate",
    "CurrentLocation",
    "LocateModel",
    "Marker",
    "MarkerSlot",
    "NominatimPlace",
    "ProviderPayload",
    "ResolvedAddress",
    "SelectionSlot",
    "ServiceArea",
    "Suggestion",
]
