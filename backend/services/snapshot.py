import logging
import threading

from schemas.charts import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Single publish point for rendered charts.
    Snapshots are immutable; publish swaps the reference, current returns it.
    Both hold the lock only for the swap/read instant.
    """

    def __init__(self, initial: Snapshot | None = None):
        self._lock = threading.Lock()
        self._snapshot = initial if initial is not None else Snapshot()

    def publish(self, snapshot: Snapshot) -> bool:
        """Replace the current snapshot. Returns False (and keeps the old one) if snapshot is older."""
        with self._lock:
            current = self._snapshot
            if (
                current.last_update is not None
                and (snapshot.last_update is None or snapshot.last_update < current.last_update)
            ):
                logger.warning(
                    "Ignoring stale snapshot (%s older than %s)",
                    snapshot.last_update,
                    current.last_update,
                )
                return False
            self._snapshot = snapshot
        return True

    def current(self) -> Snapshot:
        with self._lock:
            return self._snapshot
