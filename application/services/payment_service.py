"""
Application service orchestrating the payment lifecycle.

Creation performs three independent writes in a fixed order:

1. insert the payment row (own transaction, committed);
2. append the ``PaymentRequested`` event to the event log (own transaction);
3. publish the broker notification through the ``EventPublisher`` port.

There is no shared transaction and no compensation between these steps. A
failure in a later step leaves the earlier writes in place and is raised to
the caller unchanged. Status transitions only touch the payment row: they
record no event and publish nothing.
"""
from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from application.dtos.payments import (
    CreatePayment,
    DeleteResult,
    EventDTO,
    PaymentCreated,
    PaymentDTO,
    PaymentWithUserDTO,
)
from application.ports.event_publisher import EventPublisher
from core.logging_config import get_logger
from domain.common.exceptions import (
    BrokerUnavailableException,
    DomainValidationException,
    EventSerializationException,
    PaymentNotFoundException,
)
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.payment.entity import TRANSITION_TARGETS, DomainEvent, Payment, PaymentStatus
from domain.payment.events import PaymentRequested


logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_event_data(event: PaymentRequested) -> str:
    """Compact JSON for the event log ``data`` column."""
    try:
        return json.dumps(event.log_payload(), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EventSerializationException(event.type, reason=str(exc)) from exc


class PaymentLifecycleService:
    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        publisher: EventPublisher,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._publisher = publisher
        self._clock = clock or _utcnow

    async def create_payment(self, req: CreatePayment) -> PaymentCreated:
        payment_id = uuid.uuid4()
        now = self._clock()
        payment = Payment.request(payment_id, req.user_id, now)

        async with self._uow_factory(operation="insert_payment") as uow:
            await uow.payment_repository.create(payment)
        logger.info("payment_created", payment_id=str(payment_id), user_id=str(req.user_id))

        event = PaymentRequested(
            payment_id=payment_id,
            user_id=req.user_id,
            items=list(req.items),
            occurred_at=now,
        )
        record = DomainEvent(
            id=uuid.uuid4(),
            type=event.type,
            data=serialize_event_data(event),
            created_at=now,
            payment_id=payment_id,
        )
        async with self._uow_factory(operation="append_event") as uow:
            await uow.event_repository.append(record)
        logger.info(
            "payment_event_recorded",
            payment_id=str(payment_id),
            event_id=str(record.id),
            event_type=record.type,
        )

        try:
            await self._publisher.publish(event.message_payload())
        except (BrokerUnavailableException, EventSerializationException) as exc:
            # payment and event rows stay committed; nothing is rolled back
            logger.error(
                "payment_publish_failed",
                payment_id=str(payment_id),
                event_id=str(record.id),
                destination=self._publisher.destination,
                error_type=exc.error_type,
            )
            raise
        logger.info(
            "payment_event_published",
            payment_id=str(payment_id),
            destination=self._publisher.destination,
        )

        return PaymentCreated(id=payment_id, status=PaymentStatus.PENDING)

    async def get_payment(self, payment_id: UUID) -> PaymentDTO:
        async with self._uow_factory(readonly=True, operation="get_payment") as uow:
            payment = await uow.payment_repository.get_by_id(payment_id)
        if payment is None:
            raise PaymentNotFoundException(payment_id)
        return PaymentDTO.from_entity(payment)

    async def list_payments(self) -> list[PaymentDTO]:
        # unbounded full scan, newest first
        async with self._uow_factory(readonly=True, operation="list_payments") as uow:
            payments = await uow.payment_repository.list_all()
        return [PaymentDTO.from_entity(p) for p in payments]

    async def transition_payment(self, payment_id: UUID, target: PaymentStatus) -> None:
        """Overwrite the status whatever the current value is.

        Raises PaymentNotFoundException when no row matches. Terminal states
        are not protected: a canceled payment can still be approved.
        """
        target = PaymentStatus(target)
        if target not in TRANSITION_TARGETS:
            raise DomainValidationException(
                f"Cannot transition a payment to {target.value}",
                field="status",
                details={"allowed": sorted(s.value for s in TRANSITION_TARGETS)},
            )
        async with self._uow_factory(operation=f"transition_{target.value}") as uow:
            updated = await uow.payment_repository.update_status(payment_id, target)
        if not updated:
            raise PaymentNotFoundException(payment_id)
        logger.info("payment_transitioned", payment_id=str(payment_id), status=target.value)

    async def approve_payment(self, payment_id: UUID) -> None:
        await self.transition_payment(payment_id, PaymentStatus.APPROVED)

    async def reject_payment(self, payment_id: UUID) -> None:
        await self.transition_payment(payment_id, PaymentStatus.REJECTED)

    async def cancel_payment(self, payment_id: UUID) -> None:
        await self.transition_payment(payment_id, PaymentStatus.CANCELED)

    async def delete_payment(self, payment_id: UUID) -> DeleteResult:
        """Hard delete; the payment's events stay in the log."""
        async with self._uow_factory(operation="delete_payment") as uow:
            deleted = await uow.payment_repository.delete(payment_id)
        if not deleted:
            raise PaymentNotFoundException(payment_id)
        return DeleteResult(deleted=True)

    async def list_events_for_payment(self, payment_id: UUID) -> list[EventDTO]:
        async with self._uow_factory(readonly=True, operation="list_events") as uow:
            events = await uow.event_repository.list_by_payment(payment_id)
        return [EventDTO.from_entity(e) for e in events]

    async def list_payments_with_user(self) -> list[PaymentWithUserDTO]:
        async with self._uow_factory(readonly=True, operation="list_payments_with_user") as uow:
            rows = await uow.payment_repository.list_with_users()
        return [PaymentWithUserDTO.from_entity(r) for r in rows]
