"""
Payments API routes.

Keep this thin: request parsing and status codes only, the lifecycle rules
live in PaymentLifecycleService. Error bodies are rendered by the global
exception handlers (404 for unknown payments, 5xx for store/broker failures).
"""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_payment_service
from application.dtos.payments import (
    CreatePayment,
    DeleteResult,
    EventDTO,
    PaymentCreated,
    PaymentDTO,
    PaymentWithUserDTO,
)
from application.services.payment_service import PaymentLifecycleService
from core.config import settings
from core.logging_config import get_logger
from domain.payment.entity import PaymentStatus


router = APIRouter(prefix="/payments", tags=["Payments"])
logger = get_logger(__name__)


@router.post(
    "",
    summary="Create payment",
    status_code=status.HTTP_201_CREATED,
    response_model=PaymentCreated,
)
async def create_payment(
    payload: CreatePayment,
    response: Response,
    service: PaymentLifecycleService = Depends(get_payment_service),
):
    created = await service.create_payment(payload)
    response.headers["Location"] = f"{settings.API_PREFIX}{router.prefix}/{created.id}"
    return created


@router.get("", summary="List payments", response_model=list[PaymentDTO])
async def list_payments(service: PaymentLifecycleService = Depends(get_payment_service)):
    return await service.list_payments()


# 注意：必须在 /{payment_id} 之前注册
@router.get("/full", summary="List payments with user profile", response_model=list[PaymentWithUserDTO])
async def list_payments_with_user(service: PaymentLifecycleService = Depends(get_payment_service)):
    return await service.list_payments_with_user()


@router.get("/{payment_id}", summary="Get payment", response_model=PaymentDTO)
async def get_payment(payment_id: UUID, service: PaymentLifecycleService = Depends(get_payment_service)):
    return await service.get_payment(payment_id)


async def _transition(service: PaymentLifecycleService, payment_id: UUID, target: PaymentStatus) -> Response:
    await service.transition_payment(payment_id, target)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{payment_id}/approve", summary="Approve payment", status_code=status.HTTP_204_NO_CONTENT)
async def approve_payment(payment_id: UUID, service: PaymentLifecycleService = Depends(get_payment_service)):
    return await _transition(service, payment_id, PaymentStatus.APPROVED)


@router.put("/{payment_id}/reject", summary="Reject payment", status_code=status.HTTP_204_NO_CONTENT)
async def reject_payment(payment_id: UUID, service: PaymentLifecycleService = Depends(get_payment_service)):
    return await _transition(service, payment_id, PaymentStatus.REJECTED)


@router.put("/{payment_id}/cancel", summary="Cancel payment", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_payment(payment_id: UUID, service: PaymentLifecycleService = Depends(get_payment_service)):
    return await _transition(service, payment_id, PaymentStatus.CANCELED)


@router.delete("/{payment_id}", summary="Delete payment", response_model=DeleteResult)
async def delete_payment(payment_id: UUID, service: PaymentLifecycleService = Depends(get_payment_service)):
    return await service.delete_payment(payment_id)


@router.get("/{payment_id}/events", summary="List payment events", response_model=list[EventDTO])
async def list_payment_events(payment_id: UUID, service: PaymentLifecycleService = Depends(get_payment_service)):
    return await service.list_events_for_payment(payment_id)
