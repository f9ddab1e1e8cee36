import re
from datetime import datetime, timedelta, timezone
from dateutil import tz

_WS_RE = re.compile(r"\s+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

def norm(text) -> str:
    """Collapse runs of whitespace and trim, the way rendered text reads."""
    return _WS_RE.sub(" ", "" if text is None else str(text)).strip()

def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def to_local(dt_utc: datetime, local_tz: str) -> datetime:
    return dt_utc.astimezone(tz.gettz(local_tz))

def snapshot_stamp_parts(dt_utc: datetime, local_tz: str) -> tuple[str, str, int]:
    """Return (date, time, epoch_ms) for a snapshot taken at dt_utc.

    Time is kept to the minute; the epoch key keeps the full precision.
    """
    loc = to_local(dt_utc, local_tz)
    epoch_ms = (dt_utc - _EPOCH) // timedelta(milliseconds=1)
    return loc.strftime("%m/%d/%Y"), loc.strftime("%I:%M %p"), epoch_ms

def last_updated_stamp(dt_utc: datetime, local_tz: str) -> str:
    loc = to_local(dt_utc, local_tz)
    return "Updated at " + loc.strftime("%m/%d/%y %I:%M:%S %p")
