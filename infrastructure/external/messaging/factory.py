from __future__ import annotations

from typing import List, Optional

from .base import PublishMiddleware, Publisher, Serializer
from .config import MessagingConfig
from .providers.rabbitmq.publisher import RabbitMQPublisher


def create_publisher(
    cfg: MessagingConfig,
    serializer: Serializer,
    middlewares: Optional[List[PublishMiddleware]] = None,
) -> Publisher:
    if cfg.provider == "rabbitmq":
        return RabbitMQPublisher(cfg.rabbitmq, serializer, middlewares)
    raise ValueError(f"Unsupported provider: {cfg.provider}")
