"""
数据库配置和连接管理
"""
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.engine import make_url

from core.config import settings
from infrastructure.models import Base, PaymentModel, EventModel


# 服务自身拥有的表；users 表由外部系统维护，不在此创建
OWNED_TABLES = (PaymentModel.__table__, EventModel.__table__)


def _build_async_url(database_url: str) -> str:
    """确保数据库URL使用异步驱动"""
    url = make_url(database_url)
    drivername = url.drivername

    if "+" in drivername:
        return database_url

    driver_map = {
        "postgresql": "postgresql+asyncpg",
        "postgres": "postgresql+asyncpg",
        "sqlite": "sqlite+aiosqlite",
    }

    if drivername not in driver_map:
        raise ValueError(f"Unsupported database driver: {drivername}. Use an async driver in DATABASE__URL")

    async_driver = driver_map[drivername]
    return url.set(drivername=async_driver).render_as_string(hide_password=False)


engine: AsyncEngine = create_async_engine(
    _build_async_url(settings.database.url),
    echo=settings.database.echo,
    pool_pre_ping=True,
)

# 创建异步会话工厂
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
)


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """
    幂等建表（CREATE TABLE IF NOT EXISTS）

    仅创建 payments 与 events 两张表
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all, tables=list(OWNED_TABLES), checkfirst=True)


async def drop_tables(bind: AsyncEngine | None = None) -> None:
    """
    删除本服务拥有的表

    警告：仅用于测试环境，会删除所有数据！
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all, tables=list(OWNED_TABLES))


async def dispose_engine() -> None:
    await engine.dispose()
