"""Find the holdings table inside an unlabelled div soup.

The page exposes no stable ids or classes, so the table is recognized by its
header text and rows by shape: a grid is a node whose child count matches the
header's column count and whose cells are mostly filled in. Nothing here is
cached; every pass re-reads the tree.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import settings
from ..utils import norm
from .tree import TreeNode

STRUCTURE_NOT_FOUND = "structure_not_found"

HEADER_TAGS = ("header",)
COLUMN_TAG = "div"


@dataclass(frozen=True)
class TableLayout:
    rows_container: TreeNode
    column_count: int
    total_return_index: int
    equity_index: int


@dataclass(frozen=True)
class Failure:
    kind: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


def _walk(root: TreeNode):
    yield root
    yield from root.descendants()


def structure_not_found_reason(total_return_label: str, equity_label: str) -> str:
    return f'Could not locate header labels "{total_return_label}" and "{equity_label}".'


def locate_table(
    root: TreeNode,
    total_return_label: str | None = None,
    equity_label: str | None = None,
) -> TableLayout | Failure:
    tr_label = total_return_label or settings.total_return_label
    eq_label = equity_label or settings.equity_label
    failure = Failure(STRUCTURE_NOT_FOUND, structure_not_found_reason(tr_label, eq_label))

    header = None
    for node in _walk(root):
        if node.tag not in HEADER_TAGS:
            continue
        txt = norm(node.text())
        if tr_label in txt and eq_label in txt:
            header = node
            break
    if header is None:
        return failure

    cols = [c for c in header.children() if c.tag == COLUMN_TAG]
    tr_idx = next((i for i, c in enumerate(cols) if tr_label in norm(c.text())), -1)
    eq_idx = next((i for i, c in enumerate(cols) if eq_label in norm(c.text())), -1)
    if tr_idx < 0 or eq_idx < 0:
        return failure

    rows_container = header.next_sibling() or header.parent() or header
    return TableLayout(
        rows_container=rows_container,
        column_count=len(cols),
        total_return_index=tr_idx,
        equity_index=eq_idx,
    )


def find_row_grid(row: TreeNode, column_count: int) -> Optional[TreeNode]:
    """Pick the most fully rendered descendant of ``row`` shaped like a table row."""
    need = min(3, column_count)
    best = None
    best_size = -1
    for node in row.descendants():
        kids = node.children()
        if len(kids) != column_count:
            continue
        filled = sum(1 for k in kids if norm(k.text()))
        if filled < need:
            continue
        size = sum(1 for _ in node.descendants())
        # strict ">" keeps the earliest candidate on ties
        if size > best_size:
            best, best_size = node, size
    return best
