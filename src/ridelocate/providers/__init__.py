"""Geocoding provider adapters."""

from ridelocate.providers.base import ForwardSearcher, ReverseGeocoder
from ridelocate.providers.bigdatacloud import BigDataCloudProvider
from ridelocate.providers.nominatim import NominatimProvider

__all__ = [
    "BigDataCloudProvider",
    "ForwardSearcher",
    "NominatimProvider",
    "ReverseGeocoder",
]
