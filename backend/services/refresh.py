"""
Background refresh: fetch every configured team, rebuild charts into a local snapshot,
publish it in one step, then sleep until the next cycle.
A failing team is skipped for the cycle; its previous chart is not carried over.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Sequence

from core.errors import SourceUnavailable
from schemas.charts import ChartEntry, Snapshot
from schemas.metrics import TeamSeries
from services.chart import assemble_chart
from services.render import render_svg
from services.series import build_series
from services.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


def build_entry(team: TeamSeries) -> ChartEntry:
    chart = assemble_chart(team.name, build_series(team))
    return ChartEntry(title=team.name, chart=chart, svg=render_svg(chart))


class RefreshLoop:
    def __init__(
        self,
        store: SnapshotStore,
        fetch: Callable[[str], TeamSeries],
        teams: Sequence[str],
        interval: float = 3600.0,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.fetch = fetch
        self.teams = list(teams)
        self.interval = interval
        self._clock = clock
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _next_update_time(self) -> datetime:
        """Wall clock, clamped so a clock stepping backwards never makes a snapshot stale."""
        now = self._clock()
        previous = self.store.current().last_update
        if previous is not None and now < previous:
            logger.warning(
                "Clock is behind last update (%s < %s); reusing last update time", now, previous
            )
            return previous
        return now

    def refresh_once(self) -> Snapshot:
        logger.info("Updating chart data ...")
        entries: list[ChartEntry] = []
        for team in self.teams:
            try:
                entries.append(build_entry(self.fetch(team)))
            except SourceUnavailable as exc:
                logger.error("Error getting data for team %r: %s", team, exc)
            except Exception:
                logger.exception("Error getting data for team %r", team)

        snapshot = Snapshot(charts=tuple(entries), last_update=self._next_update_time())
        if not self.store.publish(snapshot):
            logger.warning(
                "Chart data not published; keeping snapshot from %s",
                self.store.current().last_update,
            )
            return self.store.current()
        logger.info(
            "Chart data updated (%d of %d teams)", len(entries), len(self.teams)
        )
        return snapshot

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.refresh_once()
            except Exception:
                logger.exception("Refresh cycle failed; retrying next cycle")
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="refresh-loop", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
