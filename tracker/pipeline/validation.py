from typing import Tuple, List

MONEY_FIELDS = [
    "profit_cents",
    "loss_cents",
    "net_cents",
    "equity_cents",
]

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

def validate_totals(totals, fields: List[str] | None = None) -> Tuple[bool, List[str]]:
    """Check a Totals record before it is written; reasons read like user-facing text."""
    reasons = []
    for name in fields or MONEY_FIELDS:
        if not _is_int(getattr(totals, name, None)):
            reasons.append(f"Cannot save: {name} is not a number.")
    if not reasons:
        if totals.net_cents != totals.profit_cents + totals.loss_cents:
            reasons.append("Cannot save: net_cents does not equal profit_cents + loss_cents.")
        if totals.profit_cents < 0 or totals.loss_cents > 0:
            reasons.append("Cannot save: profit/loss signs are inconsistent.")
    return (len(reasons) == 0), reasons
