"""领域层业务异常定义，供领域与基础设施使用。

核心（core）层仅负责全局映射与异常处理，尽量避免领域层反向依赖核心层。
"""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from shared.codes import BusinessCode, PaymentCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="DomainValidationError",
            details=details,
            field=field,
        )


class PaymentNotFoundException(BusinessException):
    def __init__(self, payment_id: Optional[UUID | str] = None):
        details = {"payment_id": str(payment_id)} if payment_id is not None else None
        super().__init__(
            code=PaymentCode.PAYMENT_NOT_FOUND,
            message="Payment not found",
            error_type="PaymentNotFound",
            details=details,
        )


class StoreUnavailableException(BusinessException):
    """关系存储不可用（连接失败、约束冲突、语句执行失败）"""

    def __init__(self, operation: str, reason: Optional[str] = None):
        details: dict = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            code=BusinessCode.DATABASE_ERROR,
            message="Payment store unavailable",
            error_type="StoreUnavailable",
            details=details,
        )


class BrokerUnavailableException(BusinessException):
    """消息代理不可用（连接失败、队列声明被拒绝、发布失败）"""

    def __init__(self, destination: str, reason: Optional[str] = None):
        details: dict = {"destination": destination}
        if reason:
            details["reason"] = reason
        super().__init__(
            code=BusinessCode.MESSAGE_BROKER_ERROR,
            message="Message broker unavailable",
            error_type="BrokerUnavailable",
            details=details,
        )


class EventSerializationException(BusinessException):
    def __init__(self, event_type: str, reason: Optional[str] = None):
        details: dict = {"event_type": event_type}
        if reason:
            details["reason"] = reason
        super().__init__(
            code=BusinessCode.SERIALIZATION_ERROR,
            message="Event payload could not be serialized",
            error_type="EventSerializationError",
            details=details,
        )
