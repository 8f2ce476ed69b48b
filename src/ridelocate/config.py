"""Engine configuration for ridelocate."""

from __future__ import annotations

import dataclasses
import math
import os
from collections.abc import Mapping
from typing import Any, Literal

from ridelocate._constants import BIGDATACLOUD_URL, NOMINATIM_URL, USER_AGENT
from ridelocate.exceptions import LocatorConfigError
from ridelocate.models.area import BoundingBox, ServiceArea

RecenterPolicy = Literal["always", "when_idle"]


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise LocatorConfigError(f"{key} must be a number, got {value!r}") from exc
    if not math.isfinite(parsed):
        raise LocatorConfigError(f"{key} must be a finite number, got {value!r}")
    return parsed


def _env_int(env: Mapping[str, str], key: str) -> int | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise LocatorConfigError(f"{key} must be an integer, got {value!r}") from exc


def default_service_area() -> ServiceArea:
    """Malmö, Sweden."""
    return ServiceArea(
        name="Malmö",
        country_name="Sweden",
        country_code="se",
        aliases=("malmö", "malmo"),
        bounds=BoundingBox(south=55.55, north=55.65, west=12.9, east=13.1),
    )


@dataclasses.dataclass(frozen=True)
class LocatorConfig:
    """Engine configuration.

    Parameters
    ----------
    user_agent : str
        ``User-Agent`` header sent to every provider.  Nominatim's usage
        policy requires an identifying value with contact details.
    nominatim_url : str
        Base URL of the Nominatim instance (primary reverse geocoder and
        the forward search provider).
    bigdatacloud_url : str
        BigDataCloud client reverse-geocode endpoint (backup reverse geocoder).
    language : str
        Locality language requested from the backup provider.
    primary_timeout : float
        Seconds before a primary reverse lookup fails with ``TIMEOUT``.
    backup_timeout : float
        Seconds before a backup reverse lookup fails with ``TIMEOUT``.
    search_timeout : float
        Seconds before a forward search fails with ``TIMEOUT``.
    debounce_ms : int
        Autocomplete debounce window in milliseconds.
    min_query_length : int
        Shortest trimmed query that reaches the search provider.
    search_limit : int
        Number of raw results requested from the search provider.
    max_suggestions : int
        Number of suggestions surfaced after filtering.
    gps_zoom : int
        Zoom level used when recentering on a GPS fix.
    demo_zoom : int
        Zoom level used when recentering on the demo location.
    recenter_on_fix : {"always", "when_idle"}
        ``"when_idle"`` skips recentering on a GPS fix while a pickup or
        dropoff marker is placed.
    service_area : ServiceArea
        Region used to bound and filter autocomplete results.
    """

    user_agent: str = USER_AGENT
    nominatim_url: str = NOMINATIM_URL
    bigdatacloud_url: str = BIGDATACLOUD_URL
    language: str = "en"
    primary_timeout: float = 8.0
    backup_timeout: float = 8.0
    search_timeout: float = 10.0
    debounce_ms: int = 300
    min_query_length: int = 2
    search_limit: int = 8
    max_suggestions: int = 6
    gps_zoom: int = 16
    demo_zoom: int = 15
    recenter_on_fix: RecenterPolicy = "when_idle"
    service_area: ServiceArea = dataclasses.field(default_factory=default_service_area)

    def __post_init__(self) -> None:
        for name in ("primary_timeout", "backup_timeout", "search_timeout"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise LocatorConfigError(f"{name} must be a positive finite number of seconds")
        if self.debounce_ms < 0:
            raise LocatorConfigError("debounce_ms must not be negative")
        if self.min_query_length < 1:
            raise LocatorConfigError("min_query_length must be at least 1")
        if self.max_suggestions < 1 or self.search_limit < 1:
            raise LocatorConfigError("search_limit and max_suggestions must be at least 1")
        if self.recenter_on_fix not in ("always", "when_idle"):
            raise LocatorConfigError(f"unknown recenter_on_fix policy {self.recenter_on_fix!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> LocatorConfig:
        """Create configuration from environment variables.

        Reads optional ``RIDELOCATE_*`` variables.  Explicit keyword
        arguments override environment values.

        Raises
        ------
        LocatorConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "RIDELOCATE_USER_AGENT": "user_agent",
            "RIDELOCATE_NOMINATIM_URL": "nominatim_url",
            "RIDELOCATE_BIGDATACLOUD_URL": "bigdatacloud_url",
            "RIDELOCATE_LANGUAGE": "language",
            "RIDELOCATE_RECENTER_ON_FIX": "recenter_on_fix",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in (
            ("RIDELOCATE_PRIMARY_TIMEOUT", "primary_timeout"),
            ("RIDELOCATE_BACKUP_TIMEOUT", "backup_timeout"),
            ("RIDELOCATE_SEARCH_TIMEOUT", "search_timeout"),
        ):
            parsed = _env_float(env, env_key)
            if parsed is not None:
                config_kwargs[field_name] = parsed

        for env_key, field_name in (
            ("RIDELOCATE_DEBOUNCE_MS", "debounce_ms"),
            ("RIDELOCATE_MIN_QUERY_LENGTH", "min_query_length"),
            ("RIDELOCATE_SEARCH_LIMIT", "search_limit"),
            ("RIDELOCATE_MAX_SUGGESTIONS", "max_suggestions"),
        ):
            parsed_int = _env_int(env, env_key)
            if parsed_int is not None:
                config_kwargs[field_name] = parsed_int

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
