from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(slots=True)
class QueueConfig:
    name: str = "payments.requested"
    durable: bool = True
    exclusive: bool = False
    auto_delete: bool = False


@dataclass(slots=True)
class RabbitMQConfig:
    host: str = "rabbitmq"
    port: int = 5672
    login: str = "guest"
    password: str = "guest"
    virtualhost: str = "/"
    connect_timeout: float = 5.0
    queue: QueueConfig = field(default_factory=QueueConfig)


@dataclass(slots=True)
class MessagingConfig:
    provider: Literal["rabbitmq"] = "rabbitmq"
    rabbitmq: RabbitMQConfig = field(default_factory=RabbitMQConfig)
