"""
事件日志仓储实现 - 只追加
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from domain.payment.entity import DomainEvent
from domain.payment.repository import EventRepository
from infrastructure.models.event import EventModel
from core.logging_config import get_logger


logger = get_logger(__name__)


class SQLAlchemyEventRepository(EventRepository):
    """事件仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: EventModel) -> DomainEvent:
        return DomainEvent(
            id=model.id,
            type=model.type,
            data=model.data,
            created_at=model.created_at,
            payment_id=model.payment_id,
        )

    async def append(self, event: DomainEvent) -> DomainEvent:
        db_event = EventModel(
            id=event.id,
            type=event.type,
            data=event.data,
            created_at=event.created_at,
            payment_id=event.payment_id,
        )
        self.session.add(db_event)
        await self.session.flush()
        logger.info(
            "event_appended",
            event_id=str(db_event.id),
            event_type=db_event.type,
            payment_id=str(db_event.payment_id) if db_event.payment_id else None,
        )
        return self._to_entity(db_event)

    async def list_by_payment(self, payment_id: UUID) -> List[DomainEvent]:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.payment_id == payment_id)
            .order_by(EventModel.created_at.desc())
        )
        return [self._to_entity(e) for e in result.scalars().all()]
