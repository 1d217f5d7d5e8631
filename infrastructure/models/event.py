"""
事件日志数据库模型 - 只追加的领域事件表
"""
from sqlalchemy import Column, String, DateTime, Text, Index, Uuid

from .base import Base


class EventModel(Base):
    """
    领域事件记录

    payment_id 在写入时从事件负载中提取并建立索引，用于按支付查询事件；
    它不是外键，支付被删除后事件依然保留。
    """
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True)
    type = Column(Text, nullable=False, comment="事件类型，如 PaymentRequested")
    data = Column(Text, nullable=False, comment="序列化后的事件负载（JSON）")
    created_at = Column(DateTime(timezone=True), nullable=False, comment="创建时间")
    payment_id = Column(Uuid, nullable=True, comment="负载中引用的支付ID")

    __table_args__ = (
        Index("ix_events_payment_id_created_at", "payment_id", "created_at"),
    )

    def __repr__(self):
        return f"<EventModel(id={self.id}, type='{self.type}', payment_id={self.payment_id})>"
