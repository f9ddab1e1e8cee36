"""Currency text <-> integer cents.

Amounts are kept as int cents end to end. Fractions beyond two digits are
truncated ("$1.239" -> 123), never rounded, and no float ever touches a value.
"""
from __future__ import annotations

import re

_AMOUNT_RE = re.compile(r"\$[0-9,]+(?:\.[0-9]+)?")
# A cell's amount, either bare or wrapped in parentheses for a negative value.
_CELL_AMOUNT_RE = re.compile(r"\$[0-9,]+(?:\.[0-9]+)?|\(\$[0-9,]+(?:\.[0-9]+)?\)")
_PARENS_RE = re.compile(r"^\(.*\)$", re.DOTALL)


def parse_money_to_cents(text: str | None) -> int | None:
    """Parse "$1,234.56" or "($1,234.56)" into cents; None when there is no amount."""
    if not text:
        return None
    t = str(text).strip()
    negative = bool(_PARENS_RE.match(t))

    m = _AMOUNT_RE.search(t)
    if not m:
        return None

    raw = m.group(0).replace("$", "").replace(",", "")
    whole, _, frac = raw.partition(".")
    dollars = int(whole) if whole else 0
    cents = int((frac + "00")[:2])

    total = dollars * 100 + cents
    return -total if negative else total


def find_amount_text(text: str | None) -> str:
    m = _CELL_AMOUNT_RE.search(text or "")
    return m.group(0) if m else ""


def format_cents(cents: int) -> str:
    sign = "-" if cents < 0 else ""
    dollars, rem = divmod(abs(cents), 100)
    return f"{sign}${dollars:,}.{rem:02d}"


def format_cents_fixed(cents: int) -> str:
    """Plain "1234.56" for machine-readable output (no grouping, no symbol)."""
    sign = "-" if cents < 0 else ""
    dollars, rem = divmod(abs(cents), 100)
    return f"{sign}{dollars}.{rem:02d}"
