"""Messaging config builder (composition root for messaging layer).

This module maps application settings (RabbitMQ settings group) to the
MessagingConfig dataclasses used by the messaging infrastructure.
"""

from __future__ import annotations

from typing import Protocol

from .config import MessagingConfig, QueueConfig, RabbitMQConfig


class RabbitMQSettingsLike(Protocol):
    host: str
    port: int
    user: str
    password: str
    virtual_host: str
    queue: str
    connect_timeout: float


def messaging_config_from_settings(rs: RabbitMQSettingsLike) -> MessagingConfig:
    """Build MessagingConfig from a RabbitMQSettings-like object.

    The queue is always declared durable, non-exclusive and not auto-deleted;
    only its name is configurable.
    """
    rabbitmq = RabbitMQConfig(
        host=rs.host,
        port=rs.port,
        login=rs.user,
        password=rs.password,
        virtualhost=rs.virtual_host,
        connect_timeout=rs.connect_timeout,
        queue=QueueConfig(name=rs.queue),
    )
    return MessagingConfig(provider="rabbitmq", rabbitmq=rabbitmq)


__all__ = ["messaging_config_from_settings", "RabbitMQSettingsLike"]
