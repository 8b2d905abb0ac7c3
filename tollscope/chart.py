"""
Chart rendering
---------------
Draws a ChartView as:

- an interactive HTML page (Altair / Vega-Lite): country dropdown, title that
  follows the dropdown, hover tooltips and a larger point under the pointer;
- a static PNG (matplotlib) of the same view, for reports and quick checks.

Default size is 1000 x 600 px with margins for the rotated
year labels and the axis titles.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional
import math

import altair as alt
import pandas as pd
from loguru import logger

from .colors import color_for_group, legend_entries
from .engine import ChartView
from .models import ALL_COUNTRIES_LABEL, DisasterRecord

# Datasets are a few thousand rows at most; keep them inline in the HTML.
alt.data_transformers.disable_max_rows()

# Vega-Lite signal holding the dropdown value
COUNTRY_PARAM = "selected_country"

# matplotlib sizes are in points; 1 px = 0.75 pt at 96 dpi
PX_TO_PT = 0.75


@dataclass
class ChartConfig:
    """Layout knobs for both renderers (pixel units)."""
    width: int = 1000
    height: int = 600
    margin_top: int = 50
    margin_right: int = 30
    margin_bottom: int = 120
    margin_left: int = 100

    point_radius: float = 3
    hover_radius: float = 6
    stroke_color: str = "white"
    stroke_width: float = 0.5
    hover_stroke_width: float = 2

    title_font_size: int = 30
    title_color: str = "#2c3e50"
    label_font_size: int = 24
    tick_font_size: int = 12
    x_label_angle: int = -45

    @property
    def chart_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def chart_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


def _circle_area(radius: float) -> int:
    # Vega-Lite sizes circles by area in px^2
    return int(round(math.pi * radius * radius))


def tooltip_text(r: DisasterRecord) -> str:
    """Plain-text tooltip for one record."""
    return "\n".join([
        r.country,
        f"Year: {r.year_label()}",
        f"Total Deaths: {r.deaths_label()}",
        f"Type: {r.disaster_group}",
        f"Subgroup: {r.disaster_subgroup}",
        f"Disaster Type: {r.disaster_type}",
        f"Disaster Subtype: {r.disaster_subtype}",
    ])


def chart_frame(records: List[DisasterRecord]) -> pd.DataFrame:
    """One row per point, with plain column names (Vega-Lite chokes on dots)."""
    rows: List[Dict[str, object]] = [
        {
            "country": r.country,
            "start_year": r.start_year,
            "total_deaths": r.total_deaths,
            "disaster_group": r.disaster_group,
            "disaster_subgroup": r.disaster_subgroup,
            "disaster_type": r.disaster_type,
            "disaster_subtype": r.disaster_subtype,
            "color": color_for_group(r.disaster_group),
        }
        for r in records
    ]
    columns = ["country", "start_year", "total_deaths", "disaster_group",
               "disaster_subgroup", "disaster_type", "disaster_subtype", "color"]
    return pd.DataFrame(rows, columns=columns)


def build_chart(view: ChartView, config: Optional[ChartConfig] = None, all_records: Optional[List[DisasterRecord]] = None) -> alt.Chart:
    """Build the interactive scatterplot for a view.

    The dropdown filters in the browser, so the page is given every record
    (`all_records`, defaulting to the view's records) and starts on the view's
    selection.
    """
    config = config or ChartConfig()
    data = chart_frame(all_records if all_records is not None else view.records)

    options = [""] + list(view.countries)
    labels = ["All countries"] + list(view.countries)
    country = alt.param(
        name=COUNTRY_PARAM,
        value=view.selection,
        bind=alt.binding_select(options=options, labels=labels, name="Country "),
    )
    hover = alt.selection_point(name="hover", on="mouseover", clear="mouseout", empty=False)

    title_expr = f"{COUNTRY_PARAM} === '' ? '{ALL_COUNTRIES_LABEL}' : {COUNTRY_PARAM}"
    axis_style = dict(
        labelFontSize=config.tick_font_size,
        titleFontSize=config.label_font_size,
        titleFontWeight="bold",
        titleColor="black",
    )

    return alt.Chart(data).mark_circle(
        opacity=1,
        stroke=config.stroke_color,
    ).encode(
        x=alt.X(
            "start_year:Q",
            title="Year",
            scale=alt.Scale(zero=False, nice=False),
            axis=alt.Axis(format="d", labelAngle=config.x_label_angle, **axis_style),
        ),
        y=alt.Y(
            "total_deaths:Q",
            title="Total Deaths",
            scale=alt.Scale(zero=True, nice=False),
            axis=alt.Axis(**axis_style),
        ),
        color=alt.Color("color:N", scale=None),
        size=alt.condition(hover, alt.value(_circle_area(config.hover_radius)), alt.value(_circle_area(config.point_radius))),
        strokeWidth=alt.condition(hover, alt.value(config.hover_stroke_width), alt.value(config.stroke_width)),
        tooltip=[
            alt.Tooltip("country:N", title="Country"),
            alt.Tooltip("start_year:Q", title="Year", format="d"),
            alt.Tooltip("total_deaths:Q", title="Total Deaths", format=","),
            alt.Tooltip("disaster_group:N", title="Type"),
            alt.Tooltip("disaster_subgroup:N", title="Subgroup"),
            alt.Tooltip("disaster_type:N", title="Disaster Type"),
            alt.Tooltip("disaster_subtype:N", title="Disaster Subtype"),
        ],
    ).add_params(
        country, hover
    ).transform_filter(
        f"{COUNTRY_PARAM} === '' || datum.country === {COUNTRY_PARAM}"
    ).properties(
        width=config.chart_width,
        height=config.chart_height,
        title=alt.TitleParams(
            text={"expr": title_expr},
            fontSize=config.title_font_size,
            fontWeight="bold",
            color=config.title_color,
            anchor="middle",
        ),
    )


def save_html(view: ChartView, path: str, config: Optional[ChartConfig] = None, all_records: Optional[List[DisasterRecord]] = None) -> str:
    """Write the interactive chart to `path` and return the path."""
    chart = build_chart(view, config=config, all_records=all_records)
    chart.save(str(path), format="html")
    logger.info("Rendered {} points for {} -> {}", len(view.records), view.title, path)
    return str(path)


def save_png(view: ChartView, path: str, config: Optional[ChartConfig] = None) -> str:
    """Write a static PNG of the view and return the path."""
    config = config or ChartConfig()

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.lines import Line2D
        from matplotlib.ticker import FuncFormatter
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install it with: python -m pip install matplotlib"
        ) from e

    dpi = 100
    fig, ax = plt.subplots(figsize=(config.width / dpi, config.height / dpi), dpi=dpi)
    fig.subplots_adjust(
        left=config.margin_left / config.width,
        right=1 - config.margin_right / config.width,
        top=1 - config.margin_top / config.height,
        bottom=config.margin_bottom / config.height,
    )

    records = view.records
    if records:
        # marker size is the square of the diameter in points
        diameter = 2 * config.point_radius * PX_TO_PT
        ax.scatter(
            [r.start_year for r in records],
            [r.total_deaths for r in records],
            s=diameter ** 2,
            c=[color_for_group(r.disaster_group) for r in records],
            edgecolors=config.stroke_color,
            linewidths=config.stroke_width * PX_TO_PT,
        )

    dom = view.domains
    if dom is not None:
        x0, x1 = dom.x
        if x0 == x1:
            x0, x1 = x0 - 0.5, x1 + 0.5
        ax.set_xlim(x0, x1)
        y1 = dom.y[1]
        ax.set_ylim(0, y1 if y1 > 0 else 1)

    ax.xaxis.set_major_formatter(FuncFormatter(lambda v, _: f"{v:.0f}"))
    ax.tick_params(labelsize=config.tick_font_size * PX_TO_PT)
    plt.setp(ax.get_xticklabels(), rotation=-config.x_label_angle, ha="right")

    label_size = config.label_font_size * PX_TO_PT
    ax.set_xlabel("Year", fontsize=label_size, fontweight="bold")
    ax.set_ylabel("Total Deaths", fontsize=label_size, fontweight="bold")
    fig.suptitle(view.title, fontsize=config.title_font_size * PX_TO_PT,
                 fontweight="bold", color=config.title_color)

    handles = [
        Line2D([0], [0], marker="o", linestyle="", color=color, label=label)
        for label, color in legend_entries()
    ]
    ax.legend(handles=handles, loc="upper left", frameon=False)

    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    logger.info("Saved PNG for {} ({} points) -> {}", view.title, len(records), path)
    return str(path)
