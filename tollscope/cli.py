"""
tollscope Command Line Interface (CLI)
======================================

This file provides the terminal program you run like:

    python -m tollscope.cli --csv "data/df_subset.csv" --out scatter.html

It loads the dataset once, writes the chart for the starting selection and
then opens a small REPL. Every `select` command is a selection event: the
selection changes and the chart file(s) are written again.

Use `--once` to write the chart and exit without the REPL.
"""

from __future__ import annotations
import argparse, shlex, sys
from typing import List, Optional

from loguru import logger

from .chart import ChartConfig, save_html, save_png
from .engine import ChartView, Explorer
from .indices import countries_with_prefix
from .loader import load_records
from .models import DisasterRecord

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

HELP = """
Commands:
  help
  stats
  countries [prefix]               (example: countries ind)

  select "<Country>"               (example: select "India")
  select | reset                   (back to all countries)

  show [n]                         (first n points of the current view)
  render ["<path.html>"]           (default: the --out path)
  png "<path.png>"
  quit
"""


class ChartWriter:
    """Render callback: writes the HTML (and optional PNG) for each view."""

    def __init__(self, records: List[DisasterRecord], html_path: str,
                 png_path: Optional[str] = None, config: Optional[ChartConfig] = None) -> None:
        self.records = records
        self.html_path = html_path
        self.png_path = png_path
        self.config = config or ChartConfig()

    def __call__(self, view: ChartView) -> None:
        save_html(view, self.html_path, config=self.config, all_records=self.records)
        if self.png_path:
            save_png(view, self.png_path, config=self.config)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tollscope", description="Disaster death-toll scatterplot")
    ap.add_argument("--csv", required=True, help="Path to the disaster CSV")
    ap.add_argument("--out", default="scatter.html", help="HTML chart written on every selection change")
    ap.add_argument("--png", default=None, help="Optional PNG written alongside the HTML")
    ap.add_argument("--country", default="", help="Initial country (default: all countries)")
    ap.add_argument("--once", action="store_true", help="Render once and exit (no REPL)")
    ap.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS,
                    help="loguru level for diagnostics")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the tollscope CLI.

    1) Load dataset
    2) Render the starting selection
    3) Start an interactive REPL (unless --once)
    """
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        records = load_records(args.csv)
    except (OSError, ValueError) as e:
        logger.error("Error loading data: {}", e)
        return 1

    writer = ChartWriter(records, args.out, png_path=args.png)
    engine = Explorer(records=records, renderer=writer)
    if args.country and not engine.is_known_country(args.country):
        logger.warning("Country {!r} not in dataset; the chart will be empty", args.country)
    engine.select(args.country)

    if args.once:
        return 0

    print(f"Loaded {len(records)} valid events from {len(engine.countries)} countries. Type 'help' for commands.")
    while True:
        try:
            line = input("tollscope> ").strip()
        except EOFError:
            break
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break
        try:
            handle(engine, line)
        except Exception as e:
            print(f"Error: {e}")
    return 0


def handle(engine: Explorer, line: str) -> None:
    """Handle one REPL command line."""
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        s = engine.stats()
        print(f"Selection: {s['selection']} | Points: {s['points']} of {s['total_records']}")
        print(f"Countries: {s['countries']} | Years: {_fmt_range(s['year_range'])} | Max deaths: {_fmt_num(s['max_deaths'])}")
        return

    if cmd == "countries":
        prefix = parts[1] if len(parts) >= 2 else ""
        vals = countries_with_prefix(engine.countries, prefix)
        for v in vals[:50]:
            print(v)
        if len(vals) > 50:
            print(f"... ({len(vals)} total, showing 50)")
        return

    if cmd in ("select", "reset"):
        country = " ".join(parts[1:]) if cmd == "select" else ""
        if country and not engine.is_known_country(country):
            print(f"Warning: no events for {country!r}.")
        view = engine.select(country)
        print(f"Showing {len(view.records)} data points for: {view.title}")
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        _print_rows(engine.view().records[:n])
        return

    if cmd == "render":
        view = engine.view()
        if len(parts) >= 2:
            path = save_html(view, parts[1], config=_renderer_config(engine), all_records=engine.records)
        elif engine.renderer is not None:
            engine.renderer(view)
            path = getattr(engine.renderer, "html_path", "chart")
        else:
            raise ValueError('Usage: render "<path.html>"')
        print(f"Chart written to {path}")
        return

    if cmd == "png":
        if len(parts) < 2:
            raise ValueError('Usage: png "<path.png>"')
        path = save_png(engine.view(), parts[1], config=_renderer_config(engine))
        print(f"PNG written to {path}")
        return

    print("Unknown command. Type 'help'.")


def _renderer_config(engine: Explorer) -> Optional[ChartConfig]:
    # keep REPL output consistent with the files written on selection
    return getattr(engine.renderer, "config", None)


def _fmt_num(v: Optional[float]) -> str:
    if v is None:
        return "-"
    return f"{int(v):,}" if float(v).is_integer() else f"{v:,}"


def _fmt_range(r) -> str:
    if not r:
        return "-"
    return f"{_fmt_num(r[0]).replace(',', '')}-{_fmt_num(r[1]).replace(',', '')}"


def _print_rows(rows: List[DisasterRecord]) -> None:
    for r in rows:
        print(f"{r.country} | {r.year_label()} | deaths={r.deaths_label()} | "
              f"{r.disaster_group}/{r.disaster_subgroup} | {r.disaster_type}/{r.disaster_subtype}")


if __name__ == "__main__":
    sys.exit(main())
