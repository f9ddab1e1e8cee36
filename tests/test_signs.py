import unittest

from pages import DOWN_ARROW, UP_ARROW
from tracker.pipeline.signs import (
    resolve_sign,
    sign_from_color,
    sign_from_glyph,
    sign_from_text,
)
from tracker.pipeline.tree import HtmlNode


def cell(html: str) -> HtmlNode:
    return HtmlNode.from_html(html).children()[0]


class GlyphTests(unittest.TestCase):
    def test_down_and_up_arrows(self):
        self.assertEqual(sign_from_glyph(cell(f"<div>{DOWN_ARROW}<span>$1.00</span></div>")), -1)
        self.assertEqual(sign_from_glyph(cell(f"<div>{UP_ARROW}<span>$1.00</span></div>")), 1)

    def test_no_icon_has_no_opinion(self):
        self.assertIsNone(sign_from_glyph(cell("<div><span>$1.00</span></div>")))

    def test_unknown_icon_has_no_opinion(self):
        other = '<svg><path d="M0 0 L3 3"></path></svg>'
        self.assertIsNone(sign_from_glyph(cell(f"<div>{other}<span>$1.00</span></div>")))

    def test_patterns_are_configurable(self):
        c = cell('<div><svg><path d="M1 1 L2 7"></path></svg></div>')
        self.assertEqual(sign_from_glyph(c, down_pattern=r"L2 7", up_pattern=r"nomatch"), -1)


class ColorTests(unittest.TestCase):
    def test_green_and_red(self):
        self.assertEqual(sign_from_color(cell('<div><span style="color: rgb(0, 200, 5)">$4.00</span></div>')), 1)
        self.assertEqual(sign_from_color(cell('<div><span style="color: rgb(255, 80, 0)">$4.00</span></div>')), -1)

    def test_hex_colors_are_read(self):
        self.assertEqual(sign_from_color(cell('<div><span style="color:#ff5000">$4.00</span></div>')), -1)
        self.assertEqual(sign_from_color(cell('<div><span style="color:#0c5">$4.00</span></div>')), 1)

    def test_inherited_from_cell(self):
        html = '<div style="color: rgb(0, 200, 5)"><span>$4.00</span></div>'
        self.assertEqual(sign_from_color(cell(html)), 1)

    def test_neutral_within_margin(self):
        self.assertIsNone(sign_from_color(cell('<div><span style="color: rgb(120, 130, 125)">$4.00</span></div>')))
        self.assertIsNone(sign_from_color(cell("<div><span>$4.00</span></div>")))

    def test_margin_is_strict(self):
        html = '<div><span style="color: rgb(0, 25, 0)">$4.00</span></div>'
        self.assertIsNone(sign_from_color(cell(html)))
        self.assertEqual(sign_from_color(cell(html), margin=24), 1)


class TextTests(unittest.TestCase):
    def test_negative_forms(self):
        self.assertEqual(sign_from_text(cell("<div>($30.25)</div>")), -1)
        self.assertEqual(sign_from_text(cell("<div>-$30.25</div>")), -1)

    def test_plain_amount_has_no_opinion(self):
        self.assertIsNone(sign_from_text(cell("<div>$30.25 (4.2%)</div>")))


class ResolveTests(unittest.TestCase):
    def test_glyph_wins_over_color(self):
        html = f'<div>{DOWN_ARROW}<span style="color: rgb(0, 200, 5)">$9.00</span></div>'
        self.assertEqual(resolve_sign(cell(html)), -1)

    def test_color_used_without_glyph(self):
        html = '<div><span style="color: rgb(255, 80, 0)">$9.00</span></div>'
        self.assertEqual(resolve_sign(cell(html)), -1)

    def test_parenthesized_without_glyph_or_color(self):
        self.assertEqual(resolve_sign(cell("<div><span>($30.25)</span></div>")), -1)

    def test_default_is_positive(self):
        self.assertEqual(resolve_sign(cell("<div><span>$30.25</span></div>")), 1)

    def test_custom_strategy_list(self):
        always_down = lambda _cell: -1  # noqa: E731
        self.assertEqual(resolve_sign(cell(f"<div>{UP_ARROW}$1</div>"), [always_down]), -1)
        self.assertEqual(resolve_sign(cell(f"<div>{DOWN_ARROW}$1</div>"), []), 1)


if __name__ == "__main__":
    unittest.main()
