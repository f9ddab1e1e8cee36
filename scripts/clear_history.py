#!/usr/bin/env python3
"""
Delete saved snapshots.

Usage:
    python scripts/clear_history.py                      # dry run (print only)
    python scripts/clear_history.py --execute            # delete every snapshot
    python scripts/clear_history.py --epoch-ms 1700000000000 --execute
"""
from pathlib import Path
import os
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
os.chdir(ROOT)

from tracker.logging import setup_logging
from tracker.db import get_conn, migrate
from tracker.config import settings
from tracker.pipeline.snapshots import list_snapshots, delete_snapshot, clear_history


def main():
    import argparse
    p = argparse.ArgumentParser(description="Delete one snapshot or the whole history.")
    p.add_argument("--epoch-ms", type=int, default=None, help="Delete only the snapshot with this key")
    p.add_argument("--execute", action="store_true", help="Actually delete rows (default is dry run)")
    args = p.parse_args()

    setup_logging(json_logs=False)
    dry_run = not args.execute

    conn = get_conn(settings.db_path)
    migrate(conn)

    if dry_run:
        print("DRY RUN (use --execute to delete)\n")

    if args.epoch_ms is not None:
        exists = any(s.epoch_ms == args.epoch_ms for s in list_snapshots(conn))
        if not exists:
            print(f"  No snapshot with epoch_ms={args.epoch_ms}")
            return
        if dry_run:
            print(f"  Would delete snapshot {args.epoch_ms}")
        else:
            delete_snapshot(conn, args.epoch_ms)
            print(f"  Deleted snapshot {args.epoch_ms}")
        return

    n = len(list_snapshots(conn))
    if dry_run:
        print(f"  Would delete {n} snapshots")
        print("\nRun with --execute to apply.")
    else:
        print(f"  Deleted {clear_history(conn)} snapshots")


if __name__ == "__main__":
    main()
