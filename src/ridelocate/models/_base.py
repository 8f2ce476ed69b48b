"""Base models shared by the ridelocate data model.

Every engine value type inherits from :class:`LocateModel`: frozen, so a
coordinate or address produced once can be handed to the form and the map
without defensive copies.

Raw provider payloads inherit from :class:`ProviderPayload` which:

* strips blank placeholder values (``""``, whitespace, NaN) so the field
  default is used instead,
* stashes the original payload dict in ``raw``.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LocateModel(BaseModel):
    """Base for engine value types."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )


class ProviderPayload(BaseModel):
    """Base for third-party geocoder response items."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original provider response dict."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_payload_values(cls, values: Any) -> Any:
        """Strip placeholder values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = ProviderPayload._clean_dict(values)
        # Keep an explicitly passed raw= untouched.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
