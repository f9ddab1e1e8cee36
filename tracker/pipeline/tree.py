"""Read-only query surface over a rendered document tree.

Locating and sign inference only go through ``TreeNode``, so they run the same
against a live page dump or a hand-built fixture. ``HtmlNode`` is the
BeautifulSoup-backed implementation.
"""
from __future__ import annotations

import re
from typing import Iterator, Optional, Protocol

from bs4 import BeautifulSoup, Tag

_STYLE_COLOR_RE = re.compile(r"(?:^|;)\s*color\s*:\s*([^;]+)", re.IGNORECASE)
_RGB_RE = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", re.IGNORECASE)
_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)


class TreeNode(Protocol):
    @property
    def tag(self) -> str: ...

    def text(self) -> str: ...

    def children(self) -> list["TreeNode"]: ...

    def parent(self) -> Optional["TreeNode"]: ...

    def next_sibling(self) -> Optional["TreeNode"]: ...

    def descendants(self) -> Iterator["TreeNode"]: ...

    def attr(self, name: str) -> Optional[str]: ...

    def computed_color(self) -> Optional[str]: ...

    def glyph_path(self) -> Optional[str]: ...


def _normalize_color(value: str) -> Optional[str]:
    value = value.strip()
    m = _RGB_RE.search(value)
    if m:
        return f"rgb({m.group(1)}, {m.group(2)}, {m.group(3)})"
    m = _HEX_RE.match(value)
    if m:
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        return f"rgb({r}, {g}, {b})"
    return None


class HtmlNode:
    """TreeNode over a bs4 Tag. Equality follows the wrapped element."""

    __slots__ = ("_el",)

    def __init__(self, el: Tag):
        self._el = el

    @classmethod
    def from_html(cls, html: str) -> "HtmlNode":
        return cls(BeautifulSoup(html, "html.parser"))

    def __eq__(self, other) -> bool:
        return isinstance(other, HtmlNode) and other._el is self._el

    def __hash__(self) -> int:
        return id(self._el)

    def __repr__(self) -> str:
        return f"HtmlNode(<{self.tag}>)"

    @property
    def tag(self) -> str:
        return (self._el.name or "").lower()

    def text(self) -> str:
        return self._el.get_text()

    def children(self) -> list["HtmlNode"]:
        return [HtmlNode(c) for c in self._el.children if isinstance(c, Tag)]

    def parent(self) -> Optional["HtmlNode"]:
        p = self._el.parent
        if p is None or isinstance(p, BeautifulSoup):
            return None
        return HtmlNode(p)

    def next_sibling(self) -> Optional["HtmlNode"]:
        sib = self._el.find_next_sibling()
        return HtmlNode(sib) if sib is not None else None

    def descendants(self) -> Iterator["HtmlNode"]:
        for d in self._el.descendants:
            if isinstance(d, Tag):
                yield HtmlNode(d)

    def attr(self, name: str) -> Optional[str]:
        val = self._el.get(name)
        if isinstance(val, list):
            return " ".join(val)
        return val

    def computed_color(self) -> Optional[str]:
        # Nearest inline color declaration wins, like inherited CSS color.
        el = self._el
        while el is not None and not isinstance(el, BeautifulSoup):
            style = el.get("style") if isinstance(el, Tag) else None
            if style:
                matches = _STYLE_COLOR_RE.findall(style)
                if matches:
                    color = _normalize_color(matches[-1])
                    if color:
                        return color
            el = el.parent
        return None

    def glyph_path(self) -> Optional[str]:
        svg = self._el.find("svg")
        if svg is None:
            return None
        path = svg.find("path")
        if path is None:
            return None
        return path.get("d") or None
