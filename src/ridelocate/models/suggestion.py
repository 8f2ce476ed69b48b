"""Autocomplete suggestion model."""

from __future__ import annotations

from ridelocate.models._base import LocateModel
from ridelocate.models.coordinate import Coordinate


class Suggestion(LocateModel):
    """One forward search candidate.

    Parameters
    ----------
    display_text : str
        Full provider label, written into the form field on selection.
    short_label : str
        Street part of the label, shown in the suggestion dropdown.
    coordinate : Coordinate
        Position of the candidate.
    category : str or None
        Provider classification (e.g. ``"highway/residential"``).
    """

    display_text: str
    short_label: str
    coordinate: Coordinate
    category: str | None = None
