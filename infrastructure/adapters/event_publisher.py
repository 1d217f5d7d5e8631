"""Infrastructure adapter that implements the application EventPublisher
port by delegating to a messaging Publisher and translating its errors.
"""
from __future__ import annotations

from typing import Any, Optional

from application.ports.event_publisher import EventPublisher
from domain.common.exceptions import BrokerUnavailableException, EventSerializationException
from domain.payment.events import PAYMENT_REQUESTED
from infrastructure.external.messaging import (
    Envelope,
    MessagingError,
    Publisher,
    SerializationError,
    create_publisher,
)
from infrastructure.external.messaging.config_builder import (
    RabbitMQSettingsLike,
    messaging_config_from_settings,
)
from infrastructure.external.messaging.middlewares import LoggingMiddleware, MetricsMiddleware
from infrastructure.external.messaging.serializers.json import JsonSerializer


class BrokerEventPublisher(EventPublisher):
    def __init__(self, publisher: Publisher, destination: str, *, event_type: Optional[str] = None):
        self.publisher = publisher
        self.destination = destination
        self.event_type = event_type

    async def publish(self, payload: dict[str, Any]) -> None:
        env = Envelope(payload=payload, persistent=True)
        if self.event_type:
            env.headers["x-event-type"] = self.event_type
        try:
            await self.publisher.publish(self.destination, env)
        except SerializationError as exc:
            raise EventSerializationException(self.event_type or "unknown", reason=str(exc)) from exc
        except MessagingError as exc:
            raise BrokerUnavailableException(self.destination, reason=type(exc).__name__) from exc

    async def aclose(self) -> None:
        await self.publisher.close()


def build_broker_event_publisher(rabbitmq_settings: RabbitMQSettingsLike) -> BrokerEventPublisher:
    """Wire the RabbitMQ publisher for PaymentRequested notifications."""
    cfg = messaging_config_from_settings(rabbitmq_settings)
    publisher = create_publisher(
        cfg,
        JsonSerializer(),
        middlewares=[LoggingMiddleware(), MetricsMiddleware()],
    )
    return BrokerEventPublisher(publisher, cfg.rabbitmq.queue.name, event_type=PAYMENT_REQUESTED)
