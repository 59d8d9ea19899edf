"""Result value returned by the push, email and chat provider clients."""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one provider call.

    Attributes:
        status: Outcome class
        message: Provider text, kept for logs
        data: Provider response body on success
        error_code: Provider or HTTP error code on failure
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_retryable(self) -> bool:
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Network failure, timeout, throttling or provider outage."""
        return cls(OperationStatus.TRANSIENT_ERROR, message, error_code=error_code)

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Rejected request: bad payload, bad credentials or a malformed target."""
        return cls(OperationStatus.PERMANENT_ERROR, message, error_code=error_code)

    @classmethod
    def not_found(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        return cls(OperationStatus.NOT_FOUND, message, error_code=error_code)

    @classmethod
    def from_http_failure(
        cls, status_code: int, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Classify a non-2xx provider response.

        429 and 5xx are transient, 404 means the target is gone, anything
        else is permanent.
        """
        if status_code == 429 or status_code >= 500:
            return cls.transient_error(message, error_code)
        if status_code == 404:
            return cls.not_found(message, error_code)
        return cls.permanent_error(message, error_code)
