from __future__ import annotations

import string
from typing import Iterable, Protocol

from ..listings.models import Listing

_STRIP_CHARS = string.whitespace + string.punctuation


class FilterSet(Protocol):
    weight: int | None
    truck_type: str | None
    origin: str | None
    destination: str | None


def _normalize(value: str | None) -> str | None:
    """Trim surrounding whitespace/punctuation and lowercase; empty -> None."""
    if value is None:
        return None
    cleaned = str(value).strip(_STRIP_CHARS).lower()
    return cleaned or None


def filter_listings(listings: Iterable[Listing], filters: FilterSet | None) -> list[Listing]:
    """
    Return the listings that satisfy every supplied filter, in input order.

    - weight: listing capacity must be at least the requested load
    - truck_type: case-insensitive exact match
    - origin / destination: case-insensitive substring match
    Absent filters impose no constraint. The input is never modified.
    """
    rows = list(listings)
    if filters is None:
        return rows

    weight = filters.weight
    truck_type = _normalize(filters.truck_type)
    origin = _normalize(filters.origin)
    destination = _normalize(filters.destination)

    def matches(listing: Listing) -> bool:
        if weight is not None and listing.max_weight < weight:
            return False
        if truck_type is not None and listing.truck_type.value.lower() != truck_type:
            return False
        if origin is not None and origin not in listing.origin.lower():
            return False
        if destination is not None and destination not in listing.destination.lower():
            return False
        return True

    return [listing for listing in rows if matches(listing)]
