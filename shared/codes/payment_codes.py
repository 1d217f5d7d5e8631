"""
Payment specific codes.
"""
from __future__ import annotations

from enum import IntEnum


class PaymentCode(IntEnum):
    # Payment lookups (2xxxx, next to the generic NOT_FOUND)
    PAYMENT_NOT_FOUND = 20100
