"""
Event publisher port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EventPublisher(Protocol):
    """Hands a domain event payload to an at-least-once delivery channel.

    Implementations raise BrokerUnavailableException when the channel cannot
    take the message and EventSerializationException when the payload cannot
    be encoded. No retry is expected from implementations.
    """

    destination: str

    async def publish(self, payload: dict[str, Any]) -> None: ...
