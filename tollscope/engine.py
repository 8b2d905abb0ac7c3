"""
Core engine (Explorer)
======================

The explorer works like a tiny chart controller:

1) Load dataset -> list of valid DisasterRecord objects (immutable)
2) Derive the sorted country list for the selector
3) Hold the *current selection* (FilterSelection, "" = all countries)
4) On every selection change: update the cell, build a ChartView, render it

Filtering never copies or edits records; a view is a new list that points at
the same objects as the full dataset.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .models import DisasterRecord, FilterSelection
from .indices import distinct_sorted_countries


def filter_by_country(records: Sequence[DisasterRecord], selection: Optional[str]) -> List[DisasterRecord]:
    """Return the records whose country equals `selection` exactly.

    An empty (or None) selection means "all countries": every record is
    returned in its original order.
    """
    if not selection:
        return list(records)
    return [r for r in records if r.country == selection]


@dataclass(frozen=True)
class AxisDomains:
    """Value ranges for the two axes: x = start year, y = death toll."""
    x: Tuple[float, float]
    y: Tuple[float, float]


def axis_domains(records: Sequence[DisasterRecord]) -> Optional[AxisDomains]:
    """x spans [min year, max year]; y spans [0, max deaths]. None when empty."""
    if not records:
        return None
    years = [r.start_year for r in records]
    deaths = [r.total_deaths for r in records]
    return AxisDomains(x=(min(years), max(years)), y=(0.0, max(deaths)))


@dataclass(frozen=True)
class ChartView:
    """Everything a renderer needs for one drawing of the chart."""
    title: str
    selection: str
    records: List[DisasterRecord]
    countries: List[str]

    @property
    def domains(self) -> Optional[AxisDomains]:
        return axis_domains(self.records)


Renderer = Callable[[ChartView], None]


@dataclass
class Explorer:
    """Selection context for the scatterplot.

    The explorer stores:
    - records: all valid records
    - countries: distinct sorted countries (selector options)
    - selection: the single FilterSelection cell
    - renderer: optional callback run after every selection change
    """
    records: List[DisasterRecord]
    renderer: Optional[Renderer] = None
    selection: FilterSelection = field(default_factory=FilterSelection)
    countries: List[str] = field(init=False)

    def __post_init__(self) -> None:
        self.countries = distinct_sorted_countries(self.records)

    def view(self) -> ChartView:
        """Build the chart view for the current selection (no rendering)."""
        return ChartView(
            title=self.selection.label,
            selection=self.selection.country,
            records=filter_by_country(self.records, self.selection.country),
            countries=self.countries,
        )

    def select(self, country: Optional[str]) -> ChartView:
        """Selection event: set the cell, then redraw from the new state.

        `country` of "" or None selects all countries.
        """
        self.selection.country = country or ""
        view = self.view()
        logger.debug("Showing {} data points for: {}", len(view.records), view.title)
        if self.renderer is not None:
            self.renderer(view)
        return view

    def reset(self) -> ChartView:
        """Back to all countries."""
        return self.select("")

    def is_known_country(self, country: str) -> bool:
        return country in self.countries

    def stats(self) -> Dict[str, object]:
        """Summary of the current view (sizes and axis ranges)."""
        view = self.view()
        dom = view.domains
        return {
            "selection": view.title,
            "points": len(view.records),
            "total_records": len(self.records),
            "countries": len(self.countries),
            "year_range": dom.x if dom else None,
            "max_deaths": dom.y[1] if dom else None,
        }
