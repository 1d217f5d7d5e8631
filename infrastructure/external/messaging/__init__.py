from .base import (
    Envelope,
    PublishResult,
    Publisher,
    PublishMiddleware,
    Serializer,
)
from .config import (
    MessagingConfig,
    RabbitMQConfig,
    QueueConfig,
)
from .exceptions import (
    MessagingError,
    SerializationError,
    PublishError,
    BrokerConnectionError,
    QueueDeclarationError,
)
from .factory import create_publisher

__all__ = [
    "Envelope",
    "PublishResult",
    "Publisher",
    "PublishMiddleware",
    "Serializer",
    "MessagingConfig",
    "RabbitMQConfig",
    "QueueConfig",
    "MessagingError",
    "SerializationError",
    "PublishError",
    "BrokerConnectionError",
    "QueueDeclarationError",
    "create_publisher",
]
