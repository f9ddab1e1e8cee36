import unittest

from tracker.services.chart_geometry import SeriesPoint, build_chart_geometry
from tracker.services.charts import EMPTY_MESSAGE, render_png, render_svg


def series(values):
    return [SeriesPoint("10/19/2026", f"0{i + 1}:00 PM", v) for i, v in enumerate(values)]


class SvgTests(unittest.TestCase):
    def test_empty_message(self):
        svg = render_svg(build_chart_geometry([]), [])
        self.assertTrue(svg.startswith('<svg id="rhtr-chart-svg"'))
        self.assertIn("No snapshots yet.", svg)
        self.assertNotIn("data-rhtr-point", svg)

    def test_single_point_has_no_line(self):
        s = series([500])
        svg = render_svg(build_chart_geometry(s), s)
        self.assertEqual(svg.count("data-rhtr-point="), 1)
        self.assertIn('data-rhtr-point="10/19/2026|01:00 PM|$5.00"', svg)
        self.assertNotIn('stroke-width="3.5"', svg)
        self.assertNotIn("<path", svg)

    def test_line_with_areas(self):
        s = series([100, -100, 300])
        svg = render_svg(build_chart_geometry(s), s)
        self.assertEqual(svg.count("data-rhtr-point="), 3)
        self.assertEqual(svg.count('stroke-width="3.5"'), 1)
        self.assertIn("rgba(34,197,94,0.18)", svg)
        self.assertIn("rgba(239,68,68,0.18)", svg)
        self.assertIn("Start $1.00 → Latest $3.00", svg)

    def test_payload_is_escaped(self):
        s = [SeriesPoint('10/19/2026', '<b>"x"</b>', 1), SeriesPoint('10/19/2026', 'y', 2)]
        svg = render_svg(build_chart_geometry(s), s)
        self.assertNotIn('<b>"x"', svg)
        self.assertIn("&lt;b&gt;&quot;x&quot;", svg)


class PngTests(unittest.TestCase):
    def test_png_for_each_kind(self):
        for values in ([], [500], [100, -50, 200, 400, -10, 20, 30]):
            s = series(values)
            png = render_png(build_chart_geometry(s), s)
            self.assertTrue(png.startswith(b"\x89PNG"))
            self.assertGreater(len(png), 1000)

    def test_empty_message_constant(self):
        self.assertIn("Save snapshot", EMPTY_MESSAGE)


if __name__ == "__main__":
    unittest.main()
