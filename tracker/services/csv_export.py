from __future__ import annotations

from datetime import date

import pandas as pd

from ..pipeline.money import format_cents_fixed
from ..pipeline.snapshots import Snapshot

CSV_COLUMNS = ["Date", "Time", "Profit", "Loss", "Net", "Total Equity"]


def snapshots_frame(snapshots: list[Snapshot]) -> pd.DataFrame:
    """One row per snapshot, oldest first, money as fixed two-decimal text."""
    ordered = sorted(snapshots, key=lambda s: s.epoch_ms)
    rows = [
        [
            s.date,
            s.time,
            format_cents_fixed(s.profit_cents),
            format_cents_fixed(s.loss_cents),
            format_cents_fixed(s.net_cents),
            format_cents_fixed(s.equity_cents),
        ]
        for s in ordered
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)


def export_csv_text(snapshots: list[Snapshot]) -> str:
    text = snapshots_frame(snapshots).to_csv(index=False, lineterminator="\n")
    return text.rstrip("\n")


def csv_filename(today: date | None = None) -> str:
    return f"RH_Tracker_{(today or date.today()).isoformat()}.csv"
