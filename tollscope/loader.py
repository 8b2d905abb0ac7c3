"""
Dataset loader (CSV -> DisasterRecord list)
===========================================

This module reads the disaster CSV and turns each usable row into a
`DisasterRecord`.

Key ideas:
- Every cell is read as text; numbers are parsed explicitly by `parse_number`.
- A row is kept only if `Start.Year` and `Total.Deaths` both parse to finite
  numbers and the death toll is greater than zero.
- Rows that fail are dropped silently: an incomplete row is a data-quality
  issue, not an error. The CSV file itself is never modified.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import math

import pandas as pd
from loguru import logger

from .models import (
    COUNTRY, START_YEAR, TOTAL_DEATHS,
    DISASTER_GROUP, DISASTER_SUBGROUP, DISASTER_TYPE, DISASTER_SUBTYPE,
    DisasterRecord, RawRow, cell,
)


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse a cell to a finite float, returning None if missing/invalid."""
    if text is None:
        return None
    s = str(text).strip()
    # float() accepts "1_000"; the dataset never writes numbers that way
    if not s or "_" in s:
        return None
    try:
        v = float(s)
    except ValueError:
        return None
    if not math.isfinite(v):
        return None
    return v


def _to_str(x: Optional[str]) -> str:
    if x is None:
        return ""
    return x.strip()


def normalize(raw_rows: Iterable[RawRow]) -> List[DisasterRecord]:
    """Convert raw rows to records, dropping rows without a usable year/death toll.

    Order of the kept rows follows the input. The input rows are not modified.
    """
    out: List[DisasterRecord] = []
    for row in raw_rows:
        year_text = cell(row, START_YEAR)
        deaths_text = cell(row, TOTAL_DEATHS)
        year = parse_number(year_text)
        deaths = parse_number(deaths_text)
        if year is None or deaths is None or not deaths > 0:
            continue
        out.append(DisasterRecord(
            country=_to_str(cell(row, COUNTRY)),
            start_year_text=year_text or "",
            total_deaths_text=deaths_text or "",
            disaster_group=_to_str(cell(row, DISASTER_GROUP)),
            disaster_subgroup=_to_str(cell(row, DISASTER_SUBGROUP)),
            disaster_type=_to_str(cell(row, DISASTER_TYPE)),
            disaster_subtype=_to_str(cell(row, DISASTER_SUBTYPE)),
            start_year=year,
            total_deaths=deaths,
        ))
    return out


def read_csv_rows(path: str) -> List[Dict[str, str]]:
    """Read the CSV as a list of {column: text} rows.

    Blank cells stay as "" (pandas would otherwise turn them into NaN).
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Dataset not found: {p}")
    df = pd.read_csv(p, dtype=str, keep_default_na=False)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df.to_dict(orient="records")


def load_records(path: str) -> List[DisasterRecord]:
    """Read the CSV at `path` and return its valid records."""
    rows = read_csv_rows(path)
    logger.info("Data loaded from {}: {} rows", path, len(rows))
    records = normalize(rows)
    logger.info("Valid data rows: {}", len(records))
    return records
