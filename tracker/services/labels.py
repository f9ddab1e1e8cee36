"""X-axis label planning: which points get a label, how it is rotated, and how
much of the "MM/DD/YYYY hh:MM AM" stamp it shows."""
from __future__ import annotations

import re

PX_PER_LABEL = 170
MIN_TICKS = 3
MAX_TICKS = 6

_DATE_TIME_RE = re.compile(r"^(\d{1,2}/\d{1,2}(?:/\d{2,4})?)\s+(.*)$")


def split_date_time(label: str) -> tuple[str, str]:
    s = str(label or "").strip()
    m = _DATE_TIME_RE.match(s)
    if m:
        return m.group(1), m.group(2)
    return "", s


def is_same_day_all(labels: list[str]) -> bool:
    if not labels:
        return True
    first = split_date_time(labels[0])[0]
    if not first:
        return False
    return all(split_date_time(label)[0] == first for label in labels)


def shorten_label(label: str, same_day_all: bool) -> str:
    date_part, time_part = split_date_time(label)
    if same_day_all:
        return time_part or label
    mmdd = "/".join(date_part.split("/")[:2]) if date_part else ""
    return mmdd or label


def tick_budget(plot_width: float) -> int:
    return max(MIN_TICKS, min(MAX_TICKS, int(plot_width // PX_PER_LABEL)))


def pick_x_ticks(count: int, plot_width: float) -> list[int]:
    """Evenly spaced point indices to label, always including both ends."""
    if count <= 0:
        return []
    if count == 1:
        return [0]
    k = tick_budget(plot_width)
    out: list[int] = []
    for i in range(k):
        # round-half-up of i*(count-1)/(k-1), in integers
        idx = (2 * i * (count - 1) + (k - 1)) // (2 * (k - 1))
        if not out or out[-1] != idx:
            out.append(idx)
    return out


def label_rotation(tick_count: int) -> int:
    if tick_count >= 5:
        return -45
    if tick_count >= 4:
        return -30
    return 0
