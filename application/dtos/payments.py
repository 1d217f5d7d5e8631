"""
Payment DTOs (Pydantic v2) used at application boundaries.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from domain.payment.entity import DomainEvent, Payment, PaymentStatus, PaymentWithUser


class CreatePayment(BaseModel):
    """Creation request; accepts PascalCase `UserId`/`Items` keys as well as snake_case."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(validation_alias=AliasChoices("UserId", "user_id", "userId"))
    items: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Items", "items"),
    )


class PaymentCreated(BaseModel):
    id: UUID
    status: PaymentStatus = PaymentStatus.PENDING


class PaymentDTO(BaseModel):
    id: UUID
    user_id: UUID
    status: PaymentStatus
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            id=payment.id,
            user_id=payment.user_id,
            status=payment.status,
            created_at=payment.created_at,
        )


class PaymentWithUserDTO(BaseModel):
    id: UUID
    user_id: UUID
    user_name: Optional[str] = None
    email: Optional[str] = None
    status: PaymentStatus
    created_at: datetime

    @classmethod
    def from_entity(cls, row: PaymentWithUser) -> "PaymentWithUserDTO":
        p = row.payment
        return cls(
            id=p.id,
            user_id=p.user_id,
            user_name=row.user_name,
            email=row.user_email,
            status=p.status,
            created_at=p.created_at,
        )


class EventDTO(BaseModel):
    id: UUID
    type: str
    data: str
    created_at: datetime

    @classmethod
    def from_entity(cls, event: DomainEvent) -> "EventDTO":
        return cls(id=event.id, type=event.type, data=event.data, created_at=event.created_at)


class DeleteResult(BaseModel):
    deleted: bool = True
