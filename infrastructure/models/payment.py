"""
支付数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import Column, String, DateTime, Index, Uuid
from datetime import datetime, timezone

from .base import Base


class PaymentModel(Base):
    """
    支付数据库模型

    这是数据库表的映射，不包含业务逻辑
    所有业务规则都在 domain.payment.entity.Payment 中
    """
    __tablename__ = "payments"

    # 主键（创建时由应用生成）
    id = Column(Uuid, primary_key=True)

    # 请求用户（外部 users 表，不建外键）
    user_id = Column(Uuid, nullable=False, comment="用户ID")

    # 状态
    status = Column(
        String(20),
        nullable=False,
        default="pending",
        comment="支付状态: pending/approved/rejected/canceled"
    )

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )

    __table_args__ = (
        Index("ix_payments_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<PaymentModel(id={self.id}, user_id={self.user_id}, status='{self.status}')>"
