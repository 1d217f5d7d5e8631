from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

import aio_pika
from aio_pika.exceptions import AMQPConnectionError, AMQPError, ChannelPreconditionFailed

from ...base import Envelope, PublishMiddleware, PublishResult, Publisher, Serializer
from ...config import RabbitMQConfig
from ...exceptions import BrokerConnectionError, PublishError, QueueDeclarationError


class RabbitMQPublisher(Publisher):
    """Publishes to a durable queue through the default exchange.

    A connection and a channel are opened for every publish call and released
    on every exit path; nothing is pooled between calls.
    """

    def __init__(
        self,
        cfg: RabbitMQConfig,
        serializer: Serializer,
        middlewares: Optional[List[PublishMiddleware]] = None,
    ) -> None:
        self.cfg = cfg
        self.serializer = serializer
        self.middlewares = middlewares or []

    async def _connect(self) -> aio_pika.abc.AbstractConnection:
        try:
            return await aio_pika.connect(
                host=self.cfg.host,
                port=self.cfg.port,
                login=self.cfg.login,
                password=self.cfg.password,
                virtualhost=self.cfg.virtualhost,
                timeout=self.cfg.connect_timeout,
            )
        except (AMQPConnectionError, OSError, asyncio.TimeoutError) as e:
            raise BrokerConnectionError(
                f"Cannot connect to RabbitMQ at {self.cfg.host}:{self.cfg.port}: {e}"
            ) from e

    def _to_message(self, env: Envelope, body: bytes) -> aio_pika.Message:
        return aio_pika.Message(
            body=body,
            headers=dict(env.headers),
            content_type=env.content_type,
            content_encoding="utf-8",
            message_id=env.message_id,
            timestamp=env.timestamp,
            delivery_mode=(
                aio_pika.DeliveryMode.PERSISTENT if env.persistent else aio_pika.DeliveryMode.NOT_PERSISTENT
            ),
        )

    async def publish(self, queue: str, env: Envelope) -> PublishResult:
        for m in self.middlewares:
            env = m.before_publish(queue, env)

        try:
            # serialize before touching the broker
            body = env.payload if isinstance(env.payload, (bytes, bytearray)) else self.serializer.dumps(env.payload)
            result = await self._deliver(queue, env, bytes(body))
        except Exception as exc:
            for m in self.middlewares:
                m.on_publish_error(queue, env, exc)
            raise

        for m in self.middlewares:
            m.after_publish(queue, env, result)
        return result

    async def _deliver(self, queue: str, env: Envelope, body: bytes) -> PublishResult:
        qcfg = self.cfg.queue
        connection = await self._connect()
        async with connection:
            try:
                channel = await connection.channel()
                async with channel:
                    try:
                        await channel.declare_queue(
                            queue,
                            durable=qcfg.durable,
                            exclusive=qcfg.exclusive,
                            auto_delete=qcfg.auto_delete,
                        )
                    except ChannelPreconditionFailed as e:
                        raise QueueDeclarationError(f"Queue '{queue}' declaration rejected: {e}") from e
                    await channel.default_exchange.publish(
                        self._to_message(env, body),
                        routing_key=queue,
                    )
            except (AMQPConnectionError, OSError, asyncio.TimeoutError) as e:
                raise BrokerConnectionError(f"Connection to RabbitMQ lost while publishing: {e}") from e
            except AMQPError as e:
                raise PublishError(str(e)) from e

        return PublishResult(
            queue=queue,
            message_id=env.message_id,
            body_size=len(body),
            timestamp=datetime.now(timezone.utc),
        )
