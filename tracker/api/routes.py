from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
import structlog
from .schemas import DocumentRequest, SaveResponse, SnapshotRecord, HistoryRow
from ..pipeline.tree import HtmlNode
from ..pipeline.totals import aggregate_totals
from ..pipeline.snapshots import save_snapshot, list_snapshots, delete_snapshot, clear_history
from ..services.chart_geometry import SeriesPoint, build_chart_geometry, chart_subtitle
from ..services.charts import render_svg, render_png
from ..services.csv_export import export_csv_text, csv_filename
from ..services.summary import summary_view, history_rows
from ..config import settings
from ..db import get_conn, migrate

log = structlog.get_logger()

router = APIRouter()

def _conn():
    conn = get_conn(settings.db_path)
    migrate(conn)
    return conn

def _series(conn):
    return [SeriesPoint(s.date, s.time, s.net_cents) for s in list_snapshots(conn)]

@router.get(
    '/health',
    summary="Health check",
    description="Returns service and DB connectivity plus the snapshot count.",
    tags=["Health"],
)
def health():
    try:
        conn = _conn()
        count = conn.execute("SELECT COUNT(*) FROM snapshots").fetchone()[0]
        return {'ok': True, 'db': 'ok', 'snapshots': count}
    except Exception as e:
        raise HTTPException(503, f'db_error: {e}')

@router.post(
    '/totals',
    summary="Compute totals",
    description="Extracts profit, loss, net and equity from a holdings page HTML dump.",
    tags=["Totals"],
)
def totals(req: DocumentRequest):
    result = aggregate_totals(HtmlNode.from_html(req.html))
    return summary_view(result)

@router.post(
    '/snapshots',
    response_model=SaveResponse,
    summary="Save snapshot",
    description="Computes totals from the posted HTML and appends them to the history.",
    tags=["Snapshots"],
)
def snapshots_save(req: DocumentRequest):
    result = aggregate_totals(HtmlNode.from_html(req.html))
    ok, reason, snap = save_snapshot(_conn(), result)
    if not ok:
        raise HTTPException(422, reason)
    return SaveResponse(ok=True, snapshot=SnapshotRecord(**snap.to_record()))

@router.get(
    '/snapshots',
    response_model=list[HistoryRow],
    summary="List snapshots",
    description="Saved snapshots, newest first, formatted for display.",
    tags=["Snapshots"],
)
def snapshots_list():
    return history_rows(list_snapshots(_conn(), newest_first=True))

@router.delete(
    '/snapshots/{epoch_ms}',
    summary="Delete snapshot",
    tags=["Snapshots"],
)
def snapshots_delete(epoch_ms: int):
    if not delete_snapshot(_conn(), epoch_ms):
        raise HTTPException(404, 'snapshot not found')
    return {'ok': True, 'deleted': epoch_ms}

@router.delete(
    '/snapshots',
    summary="Clear history",
    tags=["Snapshots"],
)
def snapshots_clear():
    return {'ok': True, 'deleted': clear_history(_conn())}

@router.get(
    '/export/csv',
    summary="Export CSV",
    description="Snapshot history as CSV, oldest first.",
    tags=["Export"],
)
def export_csv():
    text = export_csv_text(list_snapshots(_conn()))
    return Response(
        content=text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename()}"'},
    )

@router.get(
    '/chart.svg',
    summary="Trend chart (SVG)",
    description="Net trend over saved snapshots. Points carry a date|time|amount hover payload.",
    tags=["Chart"],
)
def chart_svg():
    series = _series(_conn())
    geom = build_chart_geometry(series, settings.chart_width, settings.chart_height)
    return Response(
        content=render_svg(geom, series),
        media_type="image/svg+xml",
        headers={"X-Chart-Subtitle": chart_subtitle(len(series))},
    )

@router.get(
    '/chart.png',
    summary="Trend chart (PNG)",
    tags=["Chart"],
)
def chart_png():
    series = _series(_conn())
    geom = build_chart_geometry(series, settings.chart_width, settings.chart_height)
    try:
        png = render_png(geom, series)
    except Exception as e:
        log.error("chart_export_failed", err=str(e))
        raise HTTPException(500, 'Failed to export chart.')
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S")
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="RH_Stocks_Tracker_Net_{stamp}.png"'},
    )
