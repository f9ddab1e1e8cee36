"""Geometry for the net trend chart.

Coordinates are in canvas pixels with y growing downward, so "above zero"
means a smaller y than the baseline. The output is plain data; the SVG and PNG
renderers in ``charts.py`` only draw what is computed here.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..pipeline.money import format_cents, format_cents_fixed
from . import labels as label_planner

PAD_L = 100
PAD_R = 55
PAD_T = 92
PAD_B = 170
Y_TICKS = 4

EMPTY = "empty"
SINGLE = "single"
LINE = "line"

Vertex = tuple[float, float]


@dataclass(frozen=True)
class SeriesPoint:
    date: str
    time: str
    value_cents: int

    @property
    def label(self) -> str:
        return f"{self.date} {self.time}"

    @property
    def payload(self) -> str:
        return f"{self.date}|{self.time}|{format_cents(self.value_cents)}"


@dataclass(frozen=True)
class PlotPoint:
    x: float
    y: float
    value_cents: int
    payload: str

    @property
    def positive(self) -> bool:
        return self.value_cents >= 0


@dataclass(frozen=True)
class YTick:
    y: float
    value_cents: int
    label: str


@dataclass(frozen=True)
class XTick:
    index: int
    x: float
    label: str


@dataclass(frozen=True)
class ChartGeometry:
    kind: str
    width: int
    height: int
    plot_left: float
    plot_top: float
    plot_right: float
    plot_bottom: float
    min_v: int = 0
    max_v: int = 0
    baseline_y: float | None = None
    points: list[PlotPoint] = field(default_factory=list)
    line: list[Vertex] = field(default_factory=list)
    areas_above: list[list[Vertex]] = field(default_factory=list)
    areas_below: list[list[Vertex]] = field(default_factory=list)
    y_ticks: list[YTick] = field(default_factory=list)
    x_ticks: list[XTick] = field(default_factory=list)
    label_rotation: int = 0

    @property
    def plot_width(self) -> float:
        return self.plot_right - self.plot_left

    @property
    def plot_height(self) -> float:
        return self.plot_bottom - self.plot_top


def padded_domain(values: list[int]) -> tuple[int, int]:
    """Value range always containing zero, widened 5% each side (at least 1 cent)."""
    min_v = min(min(values), 0)
    max_v = max(max(values), 0)
    base_range = max(1, max_v - min_v)
    pad = max(1, (base_range * 5 + 50) // 100)
    return min_v - pad, max_v + pad


def split_areas(pts: list[PlotPoint], baseline_y: float, above: bool) -> list[list[Vertex]]:
    """Closed fill polygons for the part of the line on one side of zero.

    Where consecutive points straddle zero, the crossing is interpolated on value
    and shared by the region that ends and the region that starts there, so the
    above and below fills meet on the baseline with no gap and no overlap.
    """
    def belongs(p: PlotPoint) -> bool:
        return p.positive if above else not p.positive

    segs: list[list[Vertex]] = []
    current: list[Vertex] = []
    for i, p in enumerate(pts):
        if belongs(p):
            current.append((p.x, p.y))
        if i == len(pts) - 1:
            break
        q = pts[i + 1]
        if p.positive == q.positive:
            continue
        t = (0 - p.value_cents) / (q.value_cents - p.value_cents)
        crossing = (p.x + t * (q.x - p.x), baseline_y)
        if belongs(p):
            current.append(crossing)
            segs.append(current)
            current = []
        else:
            current = [crossing]
    if current:
        segs.append(current)

    return [
        [(seg[0][0], baseline_y), *seg, (seg[-1][0], baseline_y)]
        for seg in segs
        if len(seg) >= 2
    ]


def build_chart_geometry(series: list[SeriesPoint], width: int = 920, height: int = 520) -> ChartGeometry:
    n = len(series)
    plot_w = width - PAD_L - PAD_R
    plot_h = height - PAD_T - PAD_B
    frame = dict(
        width=width,
        height=height,
        plot_left=PAD_L,
        plot_top=PAD_T,
        plot_right=width - PAD_R,
        plot_bottom=PAD_T + plot_h,
    )
    if n == 0:
        return ChartGeometry(kind=EMPTY, **frame)

    values = [p.value_cents for p in series]
    min_v, max_v = padded_domain(values)
    value_range = (max_v - min_v) or 1

    def x(i: int) -> float:
        return PAD_L + (i * plot_w) / max(1, n - 1)

    def y(v: float) -> float:
        return PAD_T + (plot_h * (max_v - v)) / value_range

    y0 = y(0)
    pts = [PlotPoint(x(i), y(p.value_cents), p.value_cents, p.payload) for i, p in enumerate(series)]

    if n == 1:
        return ChartGeometry(
            kind=SINGLE,
            min_v=min_v,
            max_v=max_v,
            baseline_y=y0,
            points=pts,
            y_ticks=[YTick(y0, 0, format_cents_fixed(0))],
            x_ticks=[XTick(0, pts[0].x, series[0].label)],
            **frame,
        )

    tick_values = [min_v + (2 * value_range * i + Y_TICKS) // (2 * Y_TICKS) for i in range(Y_TICKS + 1)]
    y_ticks = [YTick(y(v), v, format_cents_fixed(v)) for v in tick_values]

    full_labels = [p.label for p in series]
    same_day = label_planner.is_same_day_all(full_labels)
    tick_idx = label_planner.pick_x_ticks(n, plot_w)
    x_ticks = [XTick(i, x(i), label_planner.shorten_label(full_labels[i], same_day)) for i in tick_idx]

    return ChartGeometry(
        kind=LINE,
        min_v=min_v,
        max_v=max_v,
        baseline_y=y0,
        points=pts,
        line=[(p.x, p.y) for p in pts],
        areas_above=split_areas(pts, y0, above=True),
        areas_below=split_areas(pts, y0, above=False),
        y_ticks=y_ticks,
        x_ticks=x_ticks,
        label_rotation=label_planner.label_rotation(len(tick_idx)),
        **frame,
    )


def summary_line(series: list[SeriesPoint]) -> str:
    if not series:
        return ""
    first = series[0].value_cents
    last = series[-1].value_cents
    return (
        f"Start {format_cents(first)} → Latest {format_cents(last)} • "
        f"Change {format_cents(last - first)}"
    )


def chart_subtitle(count: int) -> str:
    if count == 0:
        return "No snapshots saved yet."
    if count == 1:
        return "1 snapshot saved. Save one more to see a trend."
    return f"Snapshots: {count}"
