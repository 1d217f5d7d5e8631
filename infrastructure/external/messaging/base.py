from __future__ import annotations

import abc
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol


Headers = Dict[str, str]


@dataclass(slots=True)
class Envelope:
    """Outbound message: payload plus delivery metadata, alive only for one publish call."""

    payload: Any
    headers: Headers = field(default_factory=dict)
    message_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    persistent: bool = True
    content_type: str = "application/json"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "v1"


@dataclass(slots=True)
class PublishResult:
    queue: str
    message_id: str
    body_size: int
    timestamp: Optional[datetime] = None


class Serializer(Protocol):
    def dumps(self, obj: Any) -> bytes: ...

    def loads(self, data: bytes) -> Any: ...


class PublishMiddleware(Protocol):
    def before_publish(self, queue: str, env: Envelope) -> Envelope: ...

    def after_publish(self, queue: str, env: Envelope, result: PublishResult) -> None: ...

    def on_publish_error(self, queue: str, env: Envelope, exc: BaseException) -> None: ...


class Publisher(abc.ABC):
    @abc.abstractmethod
    async def publish(self, queue: str, env: Envelope) -> PublishResult: ...

    async def close(self) -> None:
        """Release long-lived resources; per-call publishers hold none."""
        return None
