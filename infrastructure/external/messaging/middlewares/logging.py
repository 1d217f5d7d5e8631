from __future__ import annotations

from typing import Optional

import structlog

from ..base import Envelope, PublishMiddleware, PublishResult


class LoggingMiddleware(PublishMiddleware):
    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None) -> None:
        self.log = logger or structlog.get_logger("messaging")

    def before_publish(self, queue: str, env: Envelope) -> Envelope:  # type: ignore[override]
        self.log.debug(
            "publishing",
            queue=queue,
            message_id=env.message_id,
            persistent=env.persistent,
            headers=list(env.headers.keys()),
        )
        return env

    def after_publish(self, queue: str, env: Envelope, result: PublishResult) -> None:  # type: ignore[override]
        self.log.info(
            "published",
            queue=queue,
            message_id=result.message_id,
            body_size=result.body_size,
        )

    def on_publish_error(self, queue: str, env: Envelope, exc: BaseException) -> None:  # type: ignore[override]
        self.log.error(
            "publish_failed",
            queue=queue,
            message_id=env.message_id,
            error=str(exc),
            error_type=type(exc).__name__,
        )
