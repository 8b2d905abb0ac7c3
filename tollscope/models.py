"""
Data model (DisasterRecord)
===========================

Each valid CSV row is converted into a `DisasterRecord` object.
Records are immutable (`frozen=True`): they are built once by the loader and
filters only select them, so every view shares the same objects.

The raw text of the two numeric columns is kept next to the parsed numbers.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional

# Column names of the source CSV
COUNTRY = "Country"
START_YEAR = "Start.Year"
TOTAL_DEATHS = "Total.Deaths"
DISASTER_GROUP = "Disaster.Group"
DISASTER_SUBGROUP = "Disaster.Subgroup"
DISASTER_TYPE = "Disaster.Type"
DISASTER_SUBTYPE = "Disaster.Subtype"

# One row as read from the CSV: column name -> cell text
RawRow = Mapping[str, str]

ALL_COUNTRIES_LABEL = "All Countries"


@dataclass(frozen=True)
class DisasterRecord:
    """Immutable record for one valid CSV row."""
    country: str
    start_year_text: str
    total_deaths_text: str
    disaster_group: str
    disaster_subgroup: str
    disaster_type: str
    disaster_subtype: str
    # derived by the loader; always finite, total_deaths > 0
    start_year: float
    total_deaths: float

    def year_label(self) -> str:
        """Year as shown on axes and tooltips (no trailing .0)."""
        return _number_label(self.start_year, thousands=False)

    def deaths_label(self) -> str:
        """Death toll with thousands separators, e.g. 12,345."""
        return _number_label(self.total_deaths, thousands=True)


@dataclass
class FilterSelection:
    """The currently chosen country. Empty string means "no selection"."""
    country: str = ""

    def is_all(self) -> bool:
        return not self.country

    @property
    def label(self) -> str:
        return ALL_COUNTRIES_LABEL if self.is_all() else self.country


def _number_label(v: float, thousands: bool) -> str:
    if float(v).is_integer():
        return f"{int(v):,}" if thousands else str(int(v))
    return f"{v:,}" if thousands else str(v)


def cell(row: RawRow, column: str) -> Optional[str]:
    """Return a cell from a raw row, or None if the column is absent."""
    value = row.get(column)
    if value is None:
        return None
    return str(value)
