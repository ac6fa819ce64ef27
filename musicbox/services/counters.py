"""In-process event counters exposed by GET /metrics. Reset on restart."""

import threading
import time

COUNTER_NAMES = ("requests", "plays", "skips", "uploads")

# Prometheus metric name for each counter, in exposition order.
METRIC_NAMES = {
    "requests": "app_requests_total",
    "plays": "app_track_plays_total",
    "skips": "app_track_skips_total",
    "uploads": "app_track_uploads_total",
}


class EventCounters:
    """
    Thread-safe counter set owned by the application instance.

    Sync route handlers run on a thread pool, so increments take a lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values = dict.fromkeys(COUNTER_NAMES, 0)
        self._started = time.monotonic()

    def increment(self, name: str, amount: int = 1) -> int:
        """Add amount to a counter and return the new value. Unknown names raise KeyError."""
        with self._lock:
            if name not in self._values:
                raise KeyError(f"Unknown counter: {name}")
            self._values[name] += amount
            return self._values[name]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._values)

    def uptime_seconds(self) -> int:
        return int(time.monotonic() - self._started)

    def render_prometheus(self) -> str:
        """Plain-text exposition, one 'name value' line per metric."""
        values = self.snapshot()
        lines = [f"{METRIC_NAMES[name]} {values[name]}" for name in COUNTER_NAMES]
        lines.append(f"app_uptime_seconds {self.uptime_seconds()}")
        return "\n".join(lines)
