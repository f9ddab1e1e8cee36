#!/usr/bin/env python3
"""
Compute totals from a saved holdings page and optionally store a snapshot.

Usage:
    python scripts/scan_page.py page.html          # print totals only
    python scripts/scan_page.py page.html --save   # also append a snapshot
"""
from pathlib import Path
import json
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
from tracker.pipeline.tree import HtmlNode
from tracker.pipeline.totals import aggregate_totals
from tracker.pipeline.snapshots import save_snapshot
from tracker.services.summary import summary_view


def main():
    import argparse
    p = argparse.ArgumentParser(description="Extract profit/loss/equity totals from a holdings page HTML file.")
    p.add_argument("html_path", help="Path to the saved page HTML")
    p.add_argument("--save", action="store_true", help="Append the totals to the snapshot history")
    args = p.parse_args()

    setup_logging(json_logs=False)
    html = (CWD / args.html_path).read_text(encoding="utf-8", errors="replace")
    result = aggregate_totals(HtmlNode.from_html(html))
    print(json.dumps(summary_view(result), indent=2, ensure_ascii=False))

    if not args.save:
        return 0 if result.ok else 1
    conn = get_conn(settings.db_path)
    migrate(conn)
    ok, reason, snap = save_snapshot(conn, result)
    if not ok:
        print(f"Not saved: {reason}")
        return 1
    print(f"Saved snapshot {snap.epoch_ms} ({snap.date} {snap.time})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
