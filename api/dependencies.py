"""
API依赖项 - 应用服务装配
"""
from fastapi import Request

from application.ports.event_publisher import EventPublisher
from application.services.payment_service import PaymentLifecycleService
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


async def get_event_publisher(request: Request) -> EventPublisher:
    """应用启动时在 lifespan 中创建并挂载到 app.state"""
    return request.app.state.event_publisher


async def get_payment_service(request: Request) -> PaymentLifecycleService:
    return PaymentLifecycleService(
        uow_factory=SQLAlchemyUnitOfWork,
        publisher=await get_event_publisher(request),
    )
