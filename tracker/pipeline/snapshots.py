from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from ..config import settings
from ..utils import now_utc_iso, snapshot_stamp_parts
from .locator import Failure
from .totals import Totals
from .validation import validate_totals

log = structlog.get_logger()

_COLUMNS = "epoch_ms, date, time, profit_cents, loss_cents, net_cents, equity_cents"


@dataclass(frozen=True)
class Snapshot:
    epoch_ms: int
    date: str
    time: str
    profit_cents: int
    loss_cents: int
    net_cents: int
    equity_cents: int

    def to_record(self) -> dict:
        return {
            "epochMs": self.epoch_ms,
            "date": self.date,
            "time": self.time,
            "profitCents": self.profit_cents,
            "lossCents": self.loss_cents,
            "netCents": self.net_cents,
            "equityCents": self.equity_cents,
        }


def _row_to_snapshot(row) -> Snapshot:
    return Snapshot(*row)


def save_snapshot(
    conn: sqlite3.Connection,
    computed: Totals | Failure,
    now: datetime | None = None,
    local_tz: str | None = None,
) -> tuple[bool, str | None, Snapshot | None]:
    if isinstance(computed, Failure):
        return False, computed.reason or "Unable to compute totals.", None
    ok, reasons = validate_totals(computed)
    if not ok:
        return False, reasons[0], None

    now = now or datetime.now(timezone.utc)
    date_s, time_s, epoch_ms = snapshot_stamp_parts(now, local_tz or settings.local_tz)
    snap = Snapshot(
        epoch_ms=epoch_ms,
        date=date_s,
        time=time_s,
        profit_cents=computed.profit_cents,
        loss_cents=computed.loss_cents,
        net_cents=computed.net_cents,
        equity_cents=computed.equity_cents,
    )
    try:
        conn.execute(
            f"INSERT INTO snapshots({_COLUMNS}, created_at_utc) VALUES(?,?,?,?,?,?,?,?)",
            (
                snap.epoch_ms, snap.date, snap.time, snap.profit_cents,
                snap.loss_cents, snap.net_cents, snap.equity_cents, now_utc_iso(),
            ),
        )
    except sqlite3.IntegrityError:
        log.warning("snapshot_duplicate_key", epoch_ms=epoch_ms)
        return False, f"Cannot save: a snapshot already exists at {epoch_ms}.", None
    log.info("snapshot_saved", epoch_ms=epoch_ms, net_cents=snap.net_cents)
    return True, None, snap


def list_snapshots(conn: sqlite3.Connection, newest_first: bool = False) -> list[Snapshot]:
    """All snapshots ordered by epoch key (ascending unless newest_first)."""
    order = "DESC" if newest_first else "ASC"
    rows = conn.execute(f"SELECT {_COLUMNS} FROM snapshots ORDER BY epoch_ms {order}").fetchall()
    return [_row_to_snapshot(r) for r in rows]


def delete_snapshot(conn: sqlite3.Connection, epoch_ms: int) -> bool:
    cur = conn.execute("DELETE FROM snapshots WHERE epoch_ms=?", (int(epoch_ms),))
    deleted = cur.rowcount > 0
    log.info("snapshot_deleted", epoch_ms=epoch_ms, deleted=deleted)
    return deleted


def clear_history(conn: sqlite3.Connection) -> int:
    cur = conn.execute("DELETE FROM snapshots")
    log.info("snapshot_history_cleared", deleted=cur.rowcount)
    return cur.rowcount
