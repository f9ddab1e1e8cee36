#!/usr/bin/env python3
"""
Write the snapshot history as CSV plus the net trend chart (SVG and PNG).

Usage:
    python scripts/export_history.py               # into ./exports
    python scripts/export_history.py --out /tmp/rh
"""
from datetime import datetime, timezone
from pathlib import Path
import os
import sys

CWD = Path.cwd()
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
os.chdir(ROOT)

from tracker.logging import setup_logging
from tracker.db import get_conn, migrate
from tracker.config import settings
from tracker.pipeline.snapshots import list_snapshots
from tracker.services.chart_geometry import SeriesPoint, build_chart_geometry, chart_subtitle
from tracker.services.charts import render_svg, render_png
from tracker.services.csv_export import export_csv_text, csv_filename


def main():
    import argparse
    p = argparse.ArgumentParser(description="Export snapshot history and trend chart.")
    p.add_argument("--out", default="./exports", help="Output directory")
    args = p.parse_args()

    setup_logging(json_logs=False)

    out = CWD / args.out
    out.mkdir(parents=True, exist_ok=True)
    conn = get_conn(settings.db_path)
    migrate(conn)
    snaps = list_snapshots(conn)

    csv_path = out / csv_filename()
    csv_path.write_text(export_csv_text(snaps), encoding="utf-8")
    print(f"  Saved {csv_path.name} ({len(snaps)} rows)")

    series = [SeriesPoint(s.date, s.time, s.net_cents) for s in snaps]
    geom = build_chart_geometry(series, settings.chart_width, settings.chart_height)
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S")
    svg_path = out / f"RH_Stocks_Tracker_Net_{stamp}.svg"
    svg_path.write_text(render_svg(geom, series), encoding="utf-8")
    png_path = out / f"RH_Stocks_Tracker_Net_{stamp}.png"
    png_path.write_bytes(render_png(geom, series))
    print(f"  Saved {svg_path.name} and {png_path.name} ({chart_subtitle(len(series))})")


if __name__ == "__main__":
    main()
