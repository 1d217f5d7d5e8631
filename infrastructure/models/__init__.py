"""Infrastructure models package exports."""
from .base import Base, metadata
from .user import UserModel
from .payment import PaymentModel
from .event import EventModel

__all__ = [
    "Base",
    "metadata",
    "UserModel",
    "PaymentModel",
    "EventModel",
]
