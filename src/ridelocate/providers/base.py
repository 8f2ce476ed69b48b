"""Provider contracts and shared helpers.

Adapters translate one third-party geocoder into the engine's call shape.
They never retry and never touch shared state; retry and fallback belong
to :class:`ridelocate.resolver.FallbackResolver`.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import ValidationError

from ridelocate.exceptions import ProviderError, ProviderErrorKind
from ridelocate.models._base import ProviderPayload
from ridelocate.models.area import ServiceArea
from ridelocate.models.coordinate import Coordinate
from ridelocate.models.suggestion import Suggestion

P = TypeVar("P", bound=ProviderPayload)


@runtime_checkable
class ReverseGeocoder(Protocol):
    """Turns a coordinate into address text."""

    name: str
    timeout: float

    async def reverse_geocode(self, coordinate: Coordinate) -> str:
        ...


@runtime_checkable
class ForwardSearcher(Protocol):
    """Turns a free-text query into candidate places."""

    name: str

    async def forward_search(self, query: str, area: ServiceArea | None = None) -> list[Suggestion]:
        ...


def require_query(query: str) -> str:
    """Return the trimmed *query*, rejecting blank input."""
    trimmed = query.strip()
    if not trimmed:
        raise ValueError("query must be non-empty")
    return trimmed


def format_degrees(value: float) -> str:
    """Render a latitude/longitude as a plain decimal query parameter."""
    return f"{value:.7f}"


def parse_payload(model: type[P], body: Any, *, provider: str) -> P:
    """Validate a JSON object into *model* or fail with ``BAD_RESPONSE``."""
    if not isinstance(body, dict):
        raise ProviderError(
            f"{provider} returned {type(body).__name__}, expected an object",
            kind=ProviderErrorKind.BAD_RESPONSE,
            provider=provider,
        )
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise ProviderError(
            f"{provider} payload did not validate: {exc.error_count()} error(s)",
            kind=ProviderErrorKind.BAD_RESPONSE,
            provider=provider,
        ) from exc
