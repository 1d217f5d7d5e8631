import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.config import RabbitMQSettings
from infrastructure.external.messaging import MessagingConfig, SerializationError, create_publisher
from infrastructure.external.messaging.config_builder import messaging_config_from_settings
from infrastructure.external.messaging.providers.rabbitmq.publisher import RabbitMQPublisher
from infrastructure.external.messaging.serializers.json import JsonSerializer


def test_json_serializer_handles_uuid_datetime_decimal():
    pid = uuid.uuid4()
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    s = JsonSerializer()

    data = s.loads(s.dumps({"id": pid, "at": ts, "amount": Decimal("1.50"), "name": "café"}))

    assert data == {"id": str(pid), "at": ts.isoformat(), "amount": "1.50", "name": "café"}


def test_json_serializer_is_compact():
    assert JsonSerializer().dumps({"a": [1, 2]}) == b'{"a":[1,2]}'


def test_json_serializer_rejects_unknown_types():
    with pytest.raises(SerializationError):
        JsonSerializer().dumps({"x": object()})


def test_json_serializer_rejects_invalid_bytes():
    with pytest.raises(SerializationError):
        JsonSerializer().loads(b"{not json")


def test_config_builder_maps_settings_group():
    cfg = messaging_config_from_settings(
        RabbitMQSettings(host="mq", port=5673, user="svc", password="pw", virtual_host="/pay", queue="q1")
    )

    assert cfg.provider == "rabbitmq"
    assert (cfg.rabbitmq.host, cfg.rabbitmq.port) == ("mq", 5673)
    assert (cfg.rabbitmq.login, cfg.rabbitmq.password) == ("svc", "pw")
    assert cfg.rabbitmq.virtualhost == "/pay"
    assert cfg.rabbitmq.queue.name == "q1"
    assert cfg.rabbitmq.queue.durable is True
    assert cfg.rabbitmq.queue.exclusive is False
    assert cfg.rabbitmq.queue.auto_delete is False


def test_factory_builds_rabbitmq_publisher():
    publisher = create_publisher(MessagingConfig(), JsonSerializer())
    assert isinstance(publisher, RabbitMQPublisher)


def test_factory_rejects_unknown_provider():
    cfg = MessagingConfig()
    cfg.provider = "kafka"  # type: ignore[assignment]
    with pytest.raises(ValueError):
        create_publisher(cfg, JsonSerializer())
