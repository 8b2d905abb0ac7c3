"""Point colors by disaster group."""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

GROUP_COLORS: Dict[str, str] = {
    "Natural": "green",
    "Technological": "red",
}

# unknown / missing group
DEFAULT_COLOR = "gray"


def color_for_group(group: Optional[str]) -> str:
    """Return the fill color for a disaster group; never raises."""
    if not isinstance(group, str):
        return DEFAULT_COLOR
    return GROUP_COLORS.get(group, DEFAULT_COLOR)


def legend_entries() -> List[Tuple[str, str]]:
    """(label, color) pairs for the fixed groups plus the fallback."""
    return list(GROUP_COLORS.items()) + [("Other", DEFAULT_COLOR)]
