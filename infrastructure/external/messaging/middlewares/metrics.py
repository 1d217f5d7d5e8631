from __future__ import annotations

import time
from typing import Optional
import contextvars

from prometheus_client import Counter, Histogram

from ..base import Envelope, PublishMiddleware, PublishResult


# Registered once per process; a second registration of the same name raises
PUBLISH_TOTAL = Counter(
    "messaging_publish_total", "Publish attempts", ["queue", "result"]
)
PUBLISH_LATENCY = Histogram(
    "messaging_publish_latency_ms", "Publish latency ms", ["queue"],
    buckets=(1, 5, 10, 50, 100, 500, 1000, 5000),
)


class MetricsMiddleware(PublishMiddleware):
    def __init__(self) -> None:
        self.pub_counter = PUBLISH_TOTAL
        self.pub_latency = PUBLISH_LATENCY
        # Use context-local storage to avoid cross-request interference
        self._pub_start: contextvars.ContextVar[Optional[float]] = contextvars.ContextVar(
            "messaging_pub_start_ts", default=None
        )

    def before_publish(self, queue: str, env: Envelope) -> Envelope:  # type: ignore[override]
        self._pub_start.set(time.perf_counter())
        return env

    def _observe(self, queue: str) -> None:
        ts = self._pub_start.get()
        if ts is not None:
            self.pub_latency.labels(queue=queue).observe((time.perf_counter() - ts) * 1000)
            self._pub_start.set(None)

    def after_publish(self, queue: str, env: Envelope, result: PublishResult) -> None:  # type: ignore[override]
        self.pub_counter.labels(queue=queue, result="ok").inc()
        self._observe(queue)

    def on_publish_error(self, queue: str, env: Envelope, exc: BaseException) -> None:  # type: ignore[override]
        self.pub_counter.labels(queue=queue, result="error").inc()
        self._observe(queue)
