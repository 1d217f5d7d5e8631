"""
支付仓储接口 - 定义支付与事件日志数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID

from .entity import DomainEvent, Payment, PaymentStatus, PaymentWithUser


class PaymentRepository(ABC):
    """支付仓储抽象接口 - 只定义能做什么，不管怎么做"""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """创建支付记录"""
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        """根据ID获取支付"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Payment]:
        """获取全部支付（按创建时间倒序，无分页）"""
        pass

    @abstractmethod
    async def update_status(self, payment_id: UUID, status: PaymentStatus) -> bool:
        """覆盖支付状态，返回是否命中记录"""
        pass

    @abstractmethod
    async def delete(self, payment_id: UUID) -> bool:
        """硬删除支付记录"""
        pass

    @abstractmethod
    async def list_with_users(self) -> List[PaymentWithUser]:
        """支付左关联用户资料（按创建时间倒序）"""
        pass


class EventRepository(ABC):
    """事件日志仓储抽象接口（只追加）"""

    @abstractmethod
    async def append(self, event: DomainEvent) -> DomainEvent:
        """追加事件"""
        pass

    @abstractmethod
    async def list_by_payment(self, payment_id: UUID) -> List[DomainEvent]:
        """获取引用该支付的全部事件（按创建时间倒序）"""
        pass
