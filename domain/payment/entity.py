"""
支付领域实体 - 支付聚合根与领域事件记录
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID


class PaymentStatus(str, Enum):
    """支付状态枚举"""
    PENDING = "pending"       # 初始状态
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELED = "canceled"


# 可通过 transition 接口写入的目标状态（pending 只能由创建产生）
TRANSITION_TARGETS = frozenset(
    {PaymentStatus.APPROVED, PaymentStatus.REJECTED, PaymentStatus.CANCELED}
)


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """确保时间为 UTC 时区"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class Payment:
    """
    支付聚合根

    业务规则：
    1. id / user_id / created_at 创建后不可变
    2. 新建支付的状态总是 pending
    3. 状态转换不受状态机约束：任意状态都可以被覆盖为任意目标状态
       （包括从终态 canceled 转为 approved）
    """

    id: UUID
    user_id: UUID
    status: PaymentStatus
    created_at: datetime

    def __post_init__(self):
        self.status = PaymentStatus(self.status)
        self.created_at = _ensure_utc(self.created_at)

    @classmethod
    def request(cls, payment_id: UUID, user_id: UUID, now: datetime) -> "Payment":
        """创建待处理的支付"""
        return cls(id=payment_id, user_id=user_id, status=PaymentStatus.PENDING, created_at=now)


@dataclass
class PaymentWithUser:
    """支付 + 用户资料（用户可能已不存在）"""

    payment: Payment
    user_name: Optional[str] = None
    user_email: Optional[str] = None


@dataclass
class DomainEvent:
    """
    事件日志记录 - 只追加，不修改、不删除

    payment_id 是写入时从负载中提取的关联字段（非外键），
    支付被删除后事件仍保留为历史。
    """

    id: UUID
    type: str
    data: str
    created_at: datetime
    payment_id: Optional[UUID] = None

    def __post_init__(self):
        self.created_at = _ensure_utc(self.created_at)
