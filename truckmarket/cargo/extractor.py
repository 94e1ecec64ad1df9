from __future__ import annotations

import re

from .models import ExtractedFilters

# Each field is matched independently; the first match in the text wins.
_WEIGHT_RE = re.compile(r"\b(\d+)\s*(kilogram|kilo|kg|ton)\b", re.IGNORECASE)
_ORIGIN_RE = re.compile(r"\bdari\s+(.+?)(?=\s+(?:ke|menuju)\b|$)", re.IGNORECASE)
_DESTINATION_RE = re.compile(r"\bke\s+([^,]+)", re.IGNORECASE)
_TRUCK_TYPE_RE = re.compile(r"\btru(?:ck|k)\s+(\w+)", re.IGNORECASE)


def _group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_filters(query: str) -> ExtractedFilters:
    """
    Pull weight, route and truck type hints out of a free-text cargo request.

    ``"Kirim barang dari Jakarta ke Surabaya, 1000kg, truk box"`` yields
    weight 1000, origin Jakarta, destination Surabaya and truck type box.
    Anything that does not match is left as ``None``. A "ton" weight is kept
    as the literal number; ``weight_unit`` records which unit was written.
    """
    if not isinstance(query, str) or not query.strip():
        return ExtractedFilters()

    weight: int | None = None
    unit: str | None = None
    # A zero amount ("0 kg", the "000" of "1.000 kg") is skipped
    for match in _WEIGHT_RE.finditer(query):
        if int(match.group(1)) > 0:
            weight = int(match.group(1))
            unit = match.group(2).lower()
            break

    truck_type = _group(_TRUCK_TYPE_RE, query)

    return ExtractedFilters(
        weight=weight,
        weight_unit=unit,
        origin=_group(_ORIGIN_RE, query),
        destination=_group(_DESTINATION_RE, query),
        truck_type=truck_type.lower() if truck_type else None,
    )
