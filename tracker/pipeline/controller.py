from __future__ import annotations

import re
from typing import Callable, Optional
from urllib.parse import urlsplit

import structlog
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..config import settings
from .locator import Failure
from .totals import Totals, aggregate_totals
from .tree import TreeNode

log = structlog.get_logger()

POLL_JOB_ID = "totals_poll"

DocumentSource = Callable[[], Optional[TreeNode]]


def is_investing_page(url: str, origin: str | None = None, path_pattern: str | None = None) -> bool:
    parts = urlsplit(url or "")
    if f"{parts.scheme}://{parts.netloc}" != (origin or settings.page_origin):
        return False
    return re.match(path_pattern or settings.page_path_pattern, parts.path or "") is not None


class TrackerController:
    """Owns the tracker lifecycle: active flag, poll job and the latest totals.

    ``recompute`` is the only entry point for both the timer and change
    notifications. Each call recomputes from scratch; the newest result replaces
    whatever was there before.
    """

    def __init__(
        self,
        source: DocumentSource,
        scheduler: BackgroundScheduler | None = None,
        interval_seconds: float | None = None,
        on_result: Callable[[Totals | Failure], None] | None = None,
    ):
        self.source = source
        self.interval_seconds = interval_seconds or settings.poll_interval_seconds
        self.on_result = on_result
        self._scheduler = scheduler
        self._owns_scheduler = scheduler is None
        self.active = False
        self.latest: Totals | Failure | None = None

    def start(self):
        if self.active:
            return
        self.active = True
        if self._scheduler is None:
            self._scheduler = BackgroundScheduler()
        self._scheduler.add_job(
            self.recompute,
            IntervalTrigger(seconds=self.interval_seconds),
            id=POLL_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        log.info("tracker_started", interval_seconds=self.interval_seconds)
        self.recompute()

    def stop(self):
        if not self.active:
            return
        self.active = False
        if self._scheduler is not None:
            if self._scheduler.get_job(POLL_JOB_ID) is not None:
                self._scheduler.remove_job(POLL_JOB_ID)
            if self._owns_scheduler and self._scheduler.running:
                self._scheduler.shutdown(wait=False)
                self._scheduler = None
        log.info("tracker_stopped")

    def recompute(self) -> Totals | Failure | None:
        if not self.active:
            return self.latest
        root = self.source()
        if root is None:
            return self.latest
        result = aggregate_totals(root)
        self.latest = result
        if isinstance(result, Failure):
            log.debug("tracker_recompute_failed", kind=result.kind, reason=result.reason)
        else:
            log.debug("tracker_recomputed", rows_parsed=result.rows_parsed, net_cents=result.net_cents)
        if self.on_result is not None:
            self.on_result(result)
        return result

    # Structural-change callbacks land on the same path as the timer.
    notify_change = recompute

    def tick(self, url: str):
        if is_investing_page(url):
            self.start()
        else:
            self.stop()
