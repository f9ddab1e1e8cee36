import sqlite3
from pathlib import Path

def get_conn(db_path: str) -> sqlite3.Connection:
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, isolation_level=None, check_same_thread=False)  # autocommit
    conn.execute("PRAGMA journal_mode=WAL;")
    return conn

DDL = [
    # Saved totals, one row per user-requested snapshot (append-only)
    """
CREATE TABLE IF NOT EXISTS snapshots (
  epoch_ms INTEGER PRIMARY KEY,
  date TEXT NOT NULL,           -- MM/DD/YYYY, local
  time TEXT NOT NULL,           -- hh:MM AM|PM, local
  profit_cents INTEGER NOT NULL,
  loss_cents INTEGER NOT NULL,
  net_cents INTEGER NOT NULL,
  equity_cents INTEGER NOT NULL,
  created_at_utc TEXT NOT NULL
);
""",

    # Metadata
    """
CREATE TABLE IF NOT EXISTS metadata (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
""",
]

SCHEMA_VERSION = "1"

def migrate(conn: sqlite3.Connection):
    cur = conn.cursor()
    for stmt in DDL:
        cur.execute(stmt)
    cur.execute(
        "INSERT INTO metadata(key, value) VALUES('schema_version', ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
        (SCHEMA_VERSION,),
    )
    conn.commit()
