"""SQLAlchemy Unit of Work 实现"""
from __future__ import annotations

from typing import Optional, Callable
import inspect

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging_config import get_logger
from domain.common.exceptions import StoreUnavailableException
from domain.common.unit_of_work import AbstractUnitOfWork
from infrastructure.database import AsyncSessionLocal
from infrastructure.repositories.payment_repository import SQLAlchemyPaymentRepository
from infrastructure.repositories.event_repository import SQLAlchemyEventRepository


logger = get_logger(__name__)

# 驱动层错误（如 asyncpg 连接被拒绝）可能以 OSError 形式直接抛出
_STORE_ERRORS = (SQLAlchemyError, OSError)


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """基于SQLAlchemy的Unit of Work

    存储层的任何失败都会以 StoreUnavailableException 抛出，原始异常保留在 __cause__ 中。
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        session: Optional[AsyncSession] = None,
        *,
        readonly: bool = False,
        operation: str = "unit_of_work",
    ) -> None:
        super().__init__(readonly=readonly, operation=operation)
        self._session_factory = session_factory
        self._external_session = session
        self.session: Optional[AsyncSession] = session

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self.session is None:
            self.session = self._session_factory()
        self.payment_repository = SQLAlchemyPaymentRepository(self.session)
        self.event_repository = SQLAlchemyEventRepository(self.session)
        # 仅在非只读模式下显式开启事务
        if not self._readonly:
            try:
                self._transaction = await self.session.begin()
            except _STORE_ERRORS as exc:
                await self._close_session()
                raise self._store_error(exc) from exc
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        except _STORE_ERRORS as commit_exc:
            raise self._store_error(commit_exc) from commit_exc
        finally:
            # 事务在 commit/rollback 后通常会结束，这里仅在仍然活动时做安全关闭
            tx = getattr(self, "_transaction", None)
            if tx is not None and getattr(tx, "is_active", False):
                close = getattr(tx, "close", None)
                if callable(close):
                    res = close()
                    if inspect.isawaitable(res):
                        await res
            await self._close_session()
            self.payment_repository = None  # type: ignore[assignment]
            self.event_repository = None  # type: ignore[assignment]

        # 语句执行期间的存储错误统一转换
        if isinstance(exc, _STORE_ERRORS):
            raise self._store_error(exc) from exc

    async def commit(self) -> None:
        if self._readonly:
            # 只读情况下不提交
            self._committed = True
            return
        if self.session and self.session.in_transaction():
            await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        if self.session and self.session.in_transaction():
            await self.session.rollback()
        self._committed = False

    async def _close_session(self) -> None:
        if self._external_session is None and self.session is not None:
            await self.session.close()
            self.session = None

    def _store_error(self, exc: BaseException) -> StoreUnavailableException:
        logger.error(
            "store_operation_failed",
            operation=self.operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return StoreUnavailableException(self.operation, reason=type(exc).__name__)
