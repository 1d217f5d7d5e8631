"""Unit of Work 抽象定义"""
from __future__ import annotations

from abc import ABC, abstractmethod

from domain.payment.repository import EventRepository, PaymentRepository


class AbstractUnitOfWork(ABC):
    """应用层事务边界控制抽象

    一个 Unit of Work 对应一个独立事务。支付写入与事件写入各自使用
    自己的 Unit of Work，两者之间不存在共享事务。
    """

    payment_repository: PaymentRepository
    event_repository: EventRepository

    def __init__(self, *, readonly: bool = False, operation: str = "unit_of_work") -> None:
        self._committed = False
        self._readonly = readonly
        # 用于日志与错误详情的操作名
        self.operation = operation
        self.payment_repository = None  # type: ignore[assignment]
        self.event_repository = None  # type: ignore[assignment]

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()
        else:
            # 只在非只读且未显式提交时自动提交
            if not self._readonly and not self._committed:
                await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        """提交事务"""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """回滚事务"""
