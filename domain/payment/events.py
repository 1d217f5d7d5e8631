"""
Payment domain events.

Dataclass events record important payment lifecycle facts for downstream handling
(event log, broker notification). Domain remains free of infrastructure imports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
import uuid


PAYMENT_REQUESTED = "PaymentRequested"


@dataclass
class PaymentRequested:
    payment_id: uuid.UUID
    user_id: uuid.UUID
    items: list[str] = field(default_factory=list)
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    type: str = field(default=PAYMENT_REQUESTED, init=False)

    def log_payload(self) -> dict[str, Any]:
        """Payload stored in the event log."""
        return {
            "PaymentId": str(self.payment_id),
            "UserId": str(self.user_id),
            "Items": list(self.items),
        }

    def message_payload(self) -> dict[str, Any]:
        """Payload published to the broker."""
        return {
            "PaymentId": str(self.payment_id),
            "UserId": str(self.user_id),
            "Items": list(self.items),
            "Timestamp": self.occurred_at.isoformat(),
        }
