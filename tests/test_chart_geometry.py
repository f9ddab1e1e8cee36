import random
import unittest
from datetime import datetime, timedelta

from tracker.services.chart_geometry import (
    EMPTY,
    LINE,
    PAD_L,
    PAD_T,
    SINGLE,
    SeriesPoint,
    build_chart_geometry,
    chart_subtitle,
    padded_domain,
    summary_line,
)


def series(values, date="10/19/2026"):
    start = datetime(2026, 10, 19, 9, 0)
    return [
        SeriesPoint(date, (start + timedelta(minutes=45 * i)).strftime("%I:%M %p"), v)
        for i, v in enumerate(values)
    ]


class PaddedDomainTests(unittest.TestCase):
    def test_includes_zero_with_five_percent_pad(self):
        self.assertEqual(padded_domain([1000, 3000]), (-150, 3150))
        self.assertEqual(padded_domain([-2000, 500]), (-2125, 625))

    def test_pad_is_at_least_one_cent(self):
        self.assertEqual(padded_domain([0]), (-1, 1))
        self.assertEqual(padded_domain([10]), (-1, 11))
        self.assertEqual(padded_domain([30]), (-2, 32))


class BuildGeometryTests(unittest.TestCase):
    def test_empty(self):
        g = build_chart_geometry([])
        self.assertEqual(g.kind, EMPTY)
        self.assertEqual(g.points, [])
        self.assertEqual((g.plot_width, g.plot_height), (765, 258))

    def test_single_snapshot(self):
        g = build_chart_geometry([SeriesPoint("10/19/2026", "09:30 AM", 500)])
        self.assertEqual(g.kind, SINGLE)
        self.assertEqual(len(g.points), 1)
        self.assertEqual(g.line, [])
        self.assertEqual(g.areas_above, [])
        self.assertEqual(g.areas_below, [])
        self.assertEqual([t.label for t in g.y_ticks], ["0.00"])
        self.assertEqual(g.x_ticks[0].label, "10/19/2026 09:30 AM")
        self.assertLess(g.points[0].y, g.baseline_y)
        self.assertEqual(g.points[0].payload, "10/19/2026|09:30 AM|$5.00")

    def test_points_span_plot(self):
        g = build_chart_geometry(series([100, 200, 300]))
        self.assertEqual(g.kind, LINE)
        self.assertEqual(g.points[0].x, PAD_L)
        self.assertEqual(g.points[-1].x, g.plot_right)
        self.assertEqual(len(g.line), 3)
        for p in g.points:
            self.assertGreaterEqual(p.y, PAD_T)
            self.assertLessEqual(p.y, g.plot_bottom)

    def test_y_ticks_even_steps(self):
        g = build_chart_geometry(series([1000, 3000]))
        self.assertEqual([t.value_cents for t in g.y_ticks], [-150, 675, 1500, 2325, 3150])
        self.assertEqual([t.label for t in g.y_ticks], ["-1.50", "6.75", "15.00", "23.25", "31.50"])
        self.assertAlmostEqual(g.y_ticks[0].y, g.plot_bottom)
        self.assertAlmostEqual(g.y_ticks[-1].y, g.plot_top)

    def test_all_positive_fills_above_only(self):
        g = build_chart_geometry(series([100, 200, 300]))
        self.assertEqual(len(g.areas_above), 1)
        self.assertEqual(g.areas_below, [])
        poly = g.areas_above[0]
        self.assertEqual(poly[0], (g.points[0].x, g.baseline_y))
        self.assertEqual(poly[-1], (g.points[-1].x, g.baseline_y))

    def test_all_negative_fills_below_only(self):
        g = build_chart_geometry(series([-100, -50]))
        self.assertEqual(g.areas_above, [])
        self.assertEqual(len(g.areas_below), 1)

    def test_crossing_is_shared(self):
        g = build_chart_geometry(series([100, -100]))
        self.assertEqual(len(g.areas_above), 1)
        self.assertEqual(len(g.areas_below), 1)
        cross_above = g.areas_above[0][-2]
        cross_below = g.areas_below[0][1]
        self.assertEqual(cross_above, cross_below)
        self.assertAlmostEqual(cross_above[0], (g.points[0].x + g.points[1].x) / 2)
        self.assertAlmostEqual(cross_above[1], g.baseline_y)

    def test_multiple_crossings(self):
        g = build_chart_geometry(series([100, -100, 100, -100]))
        self.assertEqual(len(g.areas_above), 2)
        self.assertEqual(len(g.areas_below), 2)
        for poly in g.areas_above + g.areas_below:
            self.assertEqual(poly[0][1], g.baseline_y)
            self.assertEqual(poly[-1][1], g.baseline_y)

    def test_fills_stay_on_their_side(self):
        g = build_chart_geometry(series([300, -200, 50, 400, -10]))
        for poly in g.areas_above:
            self.assertTrue(all(py <= g.baseline_y + 1e-9 for _, py in poly))
        for poly in g.areas_below:
            self.assertTrue(all(py >= g.baseline_y - 1e-9 for _, py in poly))

    def assert_fills_cover_plot(self, values):
        g = build_chart_geometry(series(values))
        spans = sorted(
            (min(px for px, _ in poly), max(px for px, _ in poly))
            for poly in g.areas_above + g.areas_below
        )
        self.assertTrue(spans, values)
        self.assertAlmostEqual(spans[0][0], g.plot_left, msg=values)
        reach = spans[0][1]
        for lo, hi in spans[1:]:
            self.assertLessEqual(lo, reach + 1e-9, values)
            reach = max(reach, hi)
        self.assertAlmostEqual(reach, g.plot_right, msg=values)

    def test_fills_cover_plot_width(self):
        for values in ([0, -5, 0], [0, 0], [5, 0, -5], [-3, 0, 0, 4], [100, -100, 100, -100], [-1, -2, -3]):
            self.assert_fills_cover_plot(values)

    def test_fills_cover_plot_width_random(self):
        rng = random.Random(20261019)
        for _ in range(300):
            n = rng.randint(2, 12)
            self.assert_fills_cover_plot([rng.choice([0, rng.randint(-5000, 5000)]) for _ in range(n)])

    def test_same_day_labels_are_times(self):
        g = build_chart_geometry(series([1, 2, 3, 4, 5, 6, 7, 8, 9, 10]))
        self.assertEqual([t.index for t in g.x_ticks], [0, 3, 6, 9])
        self.assertEqual([t.label for t in g.x_ticks], ["09:00 AM", "11:15 AM", "01:30 PM", "03:45 PM"])
        self.assertEqual(g.label_rotation, -30)

    def test_multi_day_labels_are_month_day(self):
        pts = series([5, 6]) + series([7], date="10/20/2026")
        g = build_chart_geometry(pts)
        self.assertEqual([t.label for t in g.x_ticks], ["10/19", "10/19", "10/20"])
        self.assertEqual(g.label_rotation, 0)

    def test_positive_flag_on_points(self):
        g = build_chart_geometry(series([0, -1]))
        self.assertTrue(g.points[0].positive)
        self.assertFalse(g.points[1].positive)


class TextTests(unittest.TestCase):
    def test_summary_line(self):
        self.assertEqual(summary_line(series([1000, -250])), "Start $10.00 → Latest -$2.50 • Change -$12.50")
        self.assertEqual(summary_line([]), "")

    def test_subtitle(self):
        self.assertEqual(chart_subtitle(0), "No snapshots saved yet.")
        self.assertIn("Save one more", chart_subtitle(1))
        self.assertEqual(chart_subtitle(7), "Snapshots: 7")


if __name__ == "__main__":
    unittest.main()
