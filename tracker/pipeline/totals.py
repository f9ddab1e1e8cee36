from __future__ import annotations

from dataclasses import dataclass

import structlog

from ..config import settings
from .locator import Failure, find_row_grid, locate_table
from .money import find_amount_text, parse_money_to_cents
from .signs import SignStrategy, resolve_sign
from .tree import TreeNode

log = structlog.get_logger()

NO_HOLDING_ROWS = "no_holding_rows"
EQUITY_NOT_YET_PARSED = "equity_not_yet_parsed"

# Failures that usually mean the page is still rendering.
RETRYABLE_KINDS = frozenset({NO_HOLDING_ROWS, EQUITY_NOT_YET_PARSED})

NO_HOLDING_ROWS_REASON = "No holding rows found."
EQUITY_NOT_YET_PARSED_REASON = "Equity not parsed yet (page still rendering). Scroll slightly and wait."


@dataclass(frozen=True)
class Totals:
    profit_cents: int
    loss_cents: int
    net_cents: int
    equity_cents: int
    rows_parsed: int
    rows_skipped: int = 0

    @property
    def ok(self) -> bool:
        return True


def is_retryable(result: Totals | Failure) -> bool:
    return isinstance(result, Failure) and result.kind in RETRYABLE_KINDS


def _row_anchors(container: TreeNode, href_prefix: str) -> list[TreeNode]:
    return [
        node for node in container.descendants()
        if node.tag == "a" and (node.attr("href") or "").startswith(href_prefix)
    ]


def aggregate_totals(
    root: TreeNode,
    strategies: list[SignStrategy] | None = None,
    href_prefix: str | None = None,
) -> Totals | Failure:
    """Sum per-holding total return into profit/loss and add up equity.

    Rows that cannot be read are skipped and counted; the pass only fails when
    the table is missing or no row yielded an equity value.
    """
    layout = locate_table(root)
    if isinstance(layout, Failure):
        log.debug("totals_structure_not_found", reason=layout.reason)
        return layout

    rows = _row_anchors(layout.rows_container, href_prefix or settings.row_href_prefix)
    if not rows:
        return Failure(NO_HOLDING_ROWS, NO_HOLDING_ROWS_REASON)

    profit_cents = 0
    loss_cents = 0
    equity_cents = 0
    parsed = 0
    equity_parsed = 0
    skipped = 0

    for row in rows:
        grid = find_row_grid(row, layout.column_count)
        if grid is None:
            skipped += 1
            log.debug("totals_row_skipped", reason="no_grid", href=row.attr("href"))
            continue

        cells = grid.children()
        if layout.total_return_index >= len(cells) or layout.equity_index >= len(cells):
            skipped += 1
            log.debug("totals_row_skipped", reason="missing_cell", href=row.attr("href"))
            continue
        tr_cell = cells[layout.total_return_index]
        eq_cell = cells[layout.equity_index]

        tr_cents = parse_money_to_cents(find_amount_text(tr_cell.text()))
        if tr_cents is None:
            skipped += 1
            log.debug("totals_row_skipped", reason="invalid_money_text", href=row.attr("href"))
            continue
        tr_abs = abs(tr_cents)

        signed = -tr_abs if resolve_sign(tr_cell, strategies) < 0 else tr_abs
        if signed >= 0:
            profit_cents += signed
        else:
            loss_cents += signed

        eq_cents = parse_money_to_cents(find_amount_text(eq_cell.text()))
        if eq_cents is not None:
            equity_cents += eq_cents
            equity_parsed += 1

        parsed += 1

    if equity_parsed == 0:
        return Failure(EQUITY_NOT_YET_PARSED, EQUITY_NOT_YET_PARSED_REASON)

    return Totals(
        profit_cents=profit_cents,
        loss_cents=loss_cents,
        net_cents=profit_cents + loss_cents,
        equity_cents=equity_cents,
        rows_parsed=parsed,
        rows_skipped=skipped,
    )
