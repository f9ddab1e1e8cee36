from __future__ import annotations

from datetime import datetime, timezone

from ..config import settings
from ..pipeline.locator import Failure
from ..pipeline.money import format_cents
from ..pipeline.snapshots import Snapshot
from ..pipeline.totals import Totals, is_retryable
from ..utils import last_updated_stamp

PLACEHOLDER = "—"


def summary_view(result: Totals | Failure | None, now: datetime | None = None, local_tz: str | None = None) -> dict:
    """Display model for the summary panel. Failures show placeholders plus the reason."""
    if result is None:
        return {
            "ok": False, "subtitle": "Loading…", "retryable": True,
            "profit": PLACEHOLDER, "loss": PLACEHOLDER, "net": PLACEHOLDER, "equity": PLACEHOLDER,
            "net_positive": None,
        }
    if isinstance(result, Failure):
        return {
            "ok": False,
            "subtitle": result.reason or "Unable to compute totals.",
            "kind": result.kind,
            "retryable": is_retryable(result),
            "profit": PLACEHOLDER,
            "loss": PLACEHOLDER,
            "net": PLACEHOLDER,
            "equity": PLACEHOLDER,
            "net_positive": None,
        }
    stamp = last_updated_stamp(now or datetime.now(timezone.utc), local_tz or settings.local_tz)
    return {
        "ok": True,
        "subtitle": f"Total stocks: {result.rows_parsed} • {stamp}",
        "profit": format_cents(result.profit_cents),
        "loss": format_cents(result.loss_cents),
        "net": format_cents(result.net_cents),
        "equity": format_cents(result.equity_cents),
        "net_positive": result.net_cents >= 0,
        "rows_parsed": result.rows_parsed,
        "rows_skipped": result.rows_skipped,
    }


def history_rows(snapshots: list[Snapshot]) -> list[dict]:
    """History table rows, newest first."""
    return [
        {
            "epoch_ms": s.epoch_ms,
            "date": s.date,
            "time": s.time,
            "profit": format_cents(s.profit_cents),
            "loss": format_cents(s.loss_cents),
            "net": format_cents(s.net_cents),
            "equity": format_cents(s.equity_cents),
            "net_positive": s.net_cents >= 0,
        }
        for s in sorted(snapshots, key=lambda s: s.epoch_ms, reverse=True)
    ]
