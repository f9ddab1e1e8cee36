"""Sign inference for total-return cells.

The printed amount is usually unsigned; direction comes from the arrow icon or
the text color. Strategies are tried in order and the first non-None answer
wins. A cell nothing can classify counts as positive.
"""
from __future__ import annotations

import re
from typing import Callable, Optional, Sequence

from ..config import settings
from .tree import TreeNode

SignStrategy = Callable[[TreeNode], Optional[int]]

_RGB_RE = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)", re.IGNORECASE)
_NEGATIVE_TEXT_RE = re.compile(r"\(\s*\$|-\s*\$")


def sign_from_glyph(cell: TreeNode, down_pattern: str | None = None, up_pattern: str | None = None) -> Optional[int]:
    d = cell.glyph_path() or ""
    if re.search(down_pattern or settings.glyph_down_pattern, d):
        return -1
    if re.search(up_pattern or settings.glyph_up_pattern, d):
        return +1
    return None


def _money_span(cell: TreeNode) -> TreeNode:
    for node in cell.descendants():
        if node.tag == "span" and "$" in node.text():
            return node
    return cell


def sign_from_color(cell: TreeNode, margin: int | None = None) -> Optional[int]:
    margin = settings.color_margin if margin is None else margin
    m = _RGB_RE.search(_money_span(cell).computed_color() or "")
    if not m:
        return None
    r, g, b = (int(v) for v in m.groups())
    if g > r + margin and g > b + margin:
        return +1
    if r > g + margin and r > b + margin:
        return -1
    return None


def sign_from_text(cell: TreeNode) -> Optional[int]:
    """-1 for "($12.00)" or "-$12.00"; otherwise no opinion."""
    if _NEGATIVE_TEXT_RE.search(cell.text() or ""):
        return -1
    return None


DEFAULT_STRATEGIES: tuple[SignStrategy, ...] = (sign_from_glyph, sign_from_color, sign_from_text)


def resolve_sign(cell: TreeNode, strategies: Sequence[SignStrategy] | None = None, default: int = +1) -> int:
    for strategy in strategies if strategies is not None else DEFAULT_STRATEGIES:
        sign = strategy(cell)
        if sign is not None:
            return sign
    return default
