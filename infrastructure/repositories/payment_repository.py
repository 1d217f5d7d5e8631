"""
支付仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from domain.payment.entity import Payment, PaymentStatus, PaymentWithUser
from domain.payment.repository import PaymentRepository
from infrastructure.models.payment import PaymentModel
from infrastructure.models.user import UserModel
from core.logging_config import get_logger


logger = get_logger(__name__)


class SQLAlchemyPaymentRepository(PaymentRepository):
    """支付仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: PaymentModel) -> Payment:
        """将数据库模型转换为领域实体"""
        return Payment(
            id=model.id,
            user_id=model.user_id,
            status=PaymentStatus(model.status),
            created_at=model.created_at,
        )

    def _to_model(self, entity: Payment) -> PaymentModel:
        """将领域实体转换为数据库模型"""
        return PaymentModel(
            id=entity.id,
            user_id=entity.user_id,
            status=entity.status.value,
            created_at=entity.created_at,
        )

    async def create(self, payment: Payment) -> Payment:
        """创建支付记录"""
        db_payment = self._to_model(payment)
        self.session.add(db_payment)
        await self.session.flush()
        logger.info(
            "payment_row_inserted",
            payment_id=str(db_payment.id),
            user_id=str(db_payment.user_id),
        )
        return self._to_entity(db_payment)

    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        """根据ID获取支付"""
        result = await self.session.execute(
            select(PaymentModel).where(PaymentModel.id == payment_id)
        )
        db_payment = result.scalar_one_or_none()
        return self._to_entity(db_payment) if db_payment else None

    async def list_all(self) -> List[Payment]:
        """获取全部支付（按创建时间倒序）"""
        result = await self.session.execute(
            select(PaymentModel).order_by(PaymentModel.created_at.desc())
        )
        return [self._to_entity(p) for p in result.scalars().all()]

    async def update_status(self, payment_id: UUID, status: PaymentStatus) -> bool:
        """无条件覆盖状态（不校验当前状态）"""
        result = await self.session.execute(
            update(PaymentModel)
            .where(PaymentModel.id == payment_id)
            .values(status=PaymentStatus(status).value)
        )
        updated = (result.rowcount or 0) > 0
        if updated:
            logger.info("payment_status_overwritten", payment_id=str(payment_id), status=PaymentStatus(status).value)
        return updated

    async def delete(self, payment_id: UUID) -> bool:
        """硬删除支付记录（不影响事件日志）"""
        result = await self.session.execute(
            delete(PaymentModel).where(PaymentModel.id == payment_id)
        )
        deleted = (result.rowcount or 0) > 0
        if deleted:
            logger.info("payment_deleted", payment_id=str(payment_id))
        return deleted

    async def list_with_users(self) -> List[PaymentWithUser]:
        """支付左关联 users 表"""
        result = await self.session.execute(
            select(PaymentModel, UserModel.name, UserModel.email)
            .outerjoin(UserModel, UserModel.id == PaymentModel.user_id)
            .order_by(PaymentModel.created_at.desc())
        )
        return [
            PaymentWithUser(payment=self._to_entity(p), user_name=name, user_email=email)
            for p, name, email in result.all()
        ]
