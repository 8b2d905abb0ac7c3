"""
Indices (derived lookup values)
===============================

Values derived from the loaded records that the UI needs up front, such as
the sorted list of countries for the selector.
"""

from __future__ import annotations
from typing import Iterable, List

from .models import DisasterRecord


def distinct_sorted_countries(records: Iterable[DisasterRecord]) -> List[str]:
    """Return each country once, sorted by code point (A..Z, then a..z)."""
    return sorted({r.country for r in records})


def countries_with_prefix(countries: List[str], prefix: str) -> List[str]:
    """Case-insensitive prefix search over a country list."""
    if not prefix:
        return list(countries)
    p = prefix.lower()
    return [c for c in countries if c.lower().startswith(p)]
