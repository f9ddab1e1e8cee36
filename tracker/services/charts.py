from __future__ import annotations

import io
from html import escape

import matplotlib
matplotlib.use("Agg")  # non-interactive backend
import matplotlib.pyplot as plt

import structlog

from .chart_geometry import EMPTY, SINGLE, ChartGeometry, SeriesPoint, summary_line

log = structlog.get_logger()

BACKGROUND = "#111827"
TEXT = "#f9fafb"
POS = "#22c55e"
NEG = "#ef4444"
POS_STROKE = "rgba(34,197,94,0.65)"
NEG_STROKE = "rgba(239,68,68,0.65)"
TITLE = "Net (USD) — based on saved snapshots"
EMPTY_MESSAGE = "No snapshots yet. Click “Save snapshot” to start tracking."


def _x(v: str) -> str:
    return escape(str(v), quote=True)


def _fmt(v: float) -> str:
    return f"{v:.2f}"


def render_svg(geom: ChartGeometry, series: list[SeriesPoint], title: str = TITLE) -> str:
    """Serialize chart geometry to SVG; each point carries its hover payload in data-rhtr-point."""
    w, h = geom.width, geom.height
    out = [
        f'<svg id="rhtr-chart-svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}" xmlns="http://www.w3.org/2000/svg">',
        f'<rect x="0" y="0" width="{w}" height="{h}" rx="18" fill="rgba(255,255,255,0.06)" stroke="rgba(255,255,255,0.14)"/>',
        f'<text x="22" y="28" font-size="14" font-weight="900" fill="rgba(249,250,251,0.92)">{_x(title)}</text>',
    ]
    if geom.kind == EMPTY:
        out.append(
            f'<text x="{_fmt(w / 2)}" y="{_fmt(h / 2)}" text-anchor="middle" font-size="14" '
            f'fill="rgba(249,250,251,0.75)">{_x(EMPTY_MESSAGE)}</text>'
        )
        out.append("</svg>")
        return "".join(out)

    y0 = geom.baseline_y
    left, right = geom.plot_left, geom.plot_right

    if geom.kind == SINGLE:
        p = geom.points[0]
        out += [
            f'<line x1="{_fmt(left)}" y1="{_fmt(y0)}" x2="{_fmt(right)}" y2="{_fmt(y0)}" stroke="rgba(255,255,255,0.18)"/>',
            f'<text x="{_fmt(left - 12)}" y="{_fmt(y0 + 4)}" font-size="11" text-anchor="end" '
            f'fill="rgba(249,250,251,0.70)">{_x(geom.y_ticks[0].label)}</text>',
            f'<g data-rhtr-point="{_x(p.payload)}" style="cursor:default">',
            f'<circle cx="{_fmt(p.x)}" cy="{_fmt(p.y)}" r="7" fill="{POS if p.positive else NEG}" '
            f'stroke="{POS_STROKE if p.positive else NEG_STROKE}" stroke-width="3"/>',
            f'<circle cx="{_fmt(p.x)}" cy="{_fmt(p.y)}" r="12" fill="transparent"/>',
            "</g>",
            f'<text x="{_fmt(left)}" y="{h - 20}" font-size="11" fill="rgba(249,250,251,0.70)">'
            f"{_x(geom.x_ticks[0].label)}</text>",
            "</svg>",
        ]
        return "".join(out)

    out.append(
        f'<text x="22" y="48" font-size="12" fill="rgba(249,250,251,0.72)">{_x(summary_line(series))}</text>'
    )
    for t in geom.y_ticks:
        out.append(
            f'<line x1="{_fmt(left)}" y1="{_fmt(t.y)}" x2="{_fmt(right)}" y2="{_fmt(t.y)}" stroke="rgba(255,255,255,0.08)"/>'
            f'<text x="{_fmt(left - 12)}" y="{_fmt(t.y + 4)}" font-size="11" text-anchor="end" '
            f'fill="rgba(249,250,251,0.70)">{_x(t.label)}</text>'
        )
    out.append(f'<line x1="{_fmt(left)}" y1="{_fmt(y0)}" x2="{_fmt(right)}" y2="{_fmt(y0)}" stroke="rgba(255,255,255,0.18)"/>')
    bottom = geom.plot_bottom
    out.append(
        f'<line x1="{_fmt(left)}" y1="{_fmt(bottom)}" x2="{_fmt(right)}" y2="{_fmt(bottom)}" stroke="rgba(255,255,255,0.10)"/>'
    )

    for poly, fill in [(a, "rgba(34,197,94,0.18)") for a in geom.areas_above] + [
        (a, "rgba(239,68,68,0.18)") for a in geom.areas_below
    ]:
        d = "M " + " L ".join(f"{_fmt(px)} {_fmt(py)}" for px, py in poly) + " Z"
        out.append(f'<path d="{d}" fill="{fill}" stroke="none"/>')

    line_d = " ".join(f"{'M' if i == 0 else 'L'} {_fmt(px)} {_fmt(py)}" for i, (px, py) in enumerate(geom.line))
    out.append(
        f'<path d="{line_d}" fill="none" stroke="rgba(249,250,251,0.85)" stroke-width="3.5" '
        'stroke-linecap="round" stroke-linejoin="round"/>'
    )

    for p in geom.points:
        out.append(
            f'<g data-rhtr-point="{_x(p.payload)}" style="cursor:default">'
            f'<circle cx="{_fmt(p.x)}" cy="{_fmt(p.y)}" r="5.5" fill="{POS if p.positive else NEG}" '
            f'stroke="{POS_STROKE if p.positive else NEG_STROKE}" stroke-width="3"/>'
            f'<circle cx="{_fmt(p.x)}" cy="{_fmt(p.y)}" r="14" fill="transparent"/>'
            "</g>"
        )

    rot = geom.label_rotation
    text_y = bottom + (60 if rot else 32)
    for t in geom.x_ticks:
        transform = f' transform="rotate({rot} {_fmt(t.x)} {_fmt(text_y)})"' if rot else ""
        anchor = "end" if rot else "middle"
        out.append(
            f'<line x1="{_fmt(t.x)}" y1="{_fmt(bottom)}" x2="{_fmt(t.x)}" y2="{_fmt(bottom + 7)}" stroke="rgba(255,255,255,0.14)"/>'
            f'<text x="{_fmt(t.x)}" y="{_fmt(text_y)}" font-size="11" text-anchor="{anchor}" '
            f'fill="rgba(249,250,251,0.70)"{transform}>{_x(t.label)}</text>'
        )
    out.append("</svg>")
    return "".join(out)


def _fig_to_bytes(fig) -> bytes:
    buf = io.BytesIO()
    # Opaque background; a transparent PNG is unreadable on light viewers.
    fig.savefig(buf, format="png", dpi=100, facecolor=BACKGROUND)
    buf.seek(0)
    plt.close(fig)
    return buf.read()


def render_png(geom: ChartGeometry, series: list[SeriesPoint], title: str = TITLE) -> bytes:
    """Rasterize the same geometry as render_svg onto a dark canvas."""
    w, h = geom.width, geom.height
    fig = plt.figure(figsize=(w / 100, h / 100), dpi=100)
    fig.patch.set_facecolor(BACKGROUND)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)  # canvas y grows downward
    ax.axis("off")
    ax.set_facecolor(BACKGROUND)

    ax.text(22, 28, title, color=TEXT, fontsize=11, fontweight="bold", va="baseline")
    if geom.kind == EMPTY:
        ax.text(w / 2, h / 2, EMPTY_MESSAGE, color=TEXT, alpha=0.75, fontsize=11, ha="center")
        log.debug("chart_png_rendered", kind=geom.kind)
        return _fig_to_bytes(fig)

    left, right, y0 = geom.plot_left, geom.plot_right, geom.baseline_y
    if geom.kind != SINGLE:
        ax.text(22, 48, summary_line(series), color=TEXT, alpha=0.72, fontsize=9, va="baseline")
        for t in geom.y_ticks:
            ax.plot([left, right], [t.y, t.y], color="white", alpha=0.08, linewidth=1)
    for t in geom.y_ticks:
        ax.text(left - 12, t.y + 4, t.label, color=TEXT, alpha=0.70, fontsize=8, ha="right")
    ax.plot([left, right], [y0, y0], color="white", alpha=0.18, linewidth=1)

    for poly in geom.areas_above:
        xs, ys = zip(*poly)
        ax.fill(xs, ys, color=POS, alpha=0.18, linewidth=0)
    for poly in geom.areas_below:
        xs, ys = zip(*poly)
        ax.fill(xs, ys, color=NEG, alpha=0.18, linewidth=0)
    if geom.line:
        xs, ys = zip(*geom.line)
        ax.plot(xs, ys, color=TEXT, alpha=0.85, linewidth=2.6, solid_capstyle="round", solid_joinstyle="round")

    size = 50 if geom.kind == SINGLE else 30
    ax.scatter(
        [p.x for p in geom.points],
        [p.y for p in geom.points],
        c=[POS if p.positive else NEG for p in geom.points],
        s=size,
        zorder=5,
    )

    rot = geom.label_rotation
    bottom = geom.plot_bottom
    if geom.kind == SINGLE:
        ax.text(left, h - 20, geom.x_ticks[0].label, color=TEXT, alpha=0.70, fontsize=8)
    else:
        text_y = bottom + (60 if rot else 32)
        for t in geom.x_ticks:
            ax.plot([t.x, t.x], [bottom, bottom + 7], color="white", alpha=0.14, linewidth=1)
            ax.text(
                t.x, text_y, t.label, color=TEXT, alpha=0.70, fontsize=8,
                ha="right" if rot else "center", rotation=-rot, rotation_mode="anchor",
            )

    log.debug("chart_png_rendered", kind=geom.kind, points=len(geom.points))
    return _fig_to_bytes(fig)
