from core.config import Settings


def test_defaults(monkeypatch):
    for key in ("DATABASE__URL", "DATABASE__AUTO_CREATE_TABLES", "RABBITMQ__HOST"):
        monkeypatch.delenv(key, raising=False)

    s = Settings(_env_file=None)

    assert s.database.url.startswith("postgresql+asyncpg://")
    assert s.database.auto_create_tables is True
    assert s.rabbitmq.host == "rabbitmq"
    assert s.rabbitmq.port == 5672
    assert (s.rabbitmq.user, s.rabbitmq.password) == ("guest", "guest")
    assert s.rabbitmq.virtual_host == "/"
    assert s.rabbitmq.queue == "payments.requested"
    assert s.METRICS_ENABLED is True
    assert s.API_PREFIX == ""


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("RABBITMQ__HOST", "broker.internal")
    monkeypatch.setenv("RABBITMQ__PORT", "5673")
    monkeypatch.setenv("RABBITMQ__QUEUE", "payments.alt")
    monkeypatch.setenv("DATABASE__URL", "postgresql+asyncpg://u:p@db:5432/pay")

    s = Settings(_env_file=None)

    assert s.rabbitmq.host == "broker.internal"
    assert s.rabbitmq.port == 5673
    assert s.rabbitmq.queue == "payments.alt"
    assert s.database.url == "postgresql+asyncpg://u:p@db:5432/pay"


def test_api_prefix_is_normalized(monkeypatch):
    monkeypatch.setenv("API_PREFIX", "api/v1/")
    assert Settings(_env_file=None).API_PREFIX == "/api/v1"


def test_cors_origins_accepts_comma_separated(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings(_env_file=None).CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_cors_origins_accepts_json_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["http://a.test", "http://b.test"]')
    assert Settings(_env_file=None).CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_cors_origins_accepts_single_origin(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test")
    assert Settings(_env_file=None).CORS_ORIGINS == ["http://a.test"]
