from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class StoreError(Exception):
    """Base error for store (DynamoDB / SQS) operations.

    Enumeration raises these; point operations carry them on an ``Ack``.
    """

    message: str
    operation: str | None = None
    table_name: str | None = None
    key: dict[str, Any] | None = None
    aws_request_id: str | None = None
    retryable: bool = False
    cause: BaseException | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class StoreCallError(StoreError):
    """The service or the transport failed the call."""


@dataclass(slots=True)
class ResourceNotFoundError(StoreCallError):
    pass


@dataclass(slots=True)
class StoreValidationError(StoreCallError):
    pass


@dataclass(slots=True)
class InvalidReceiptHandleError(StoreValidationError):
    pass


@dataclass(slots=True)
class StoreThrottledError(StoreCallError):
    pass


@dataclass(slots=True)
class StoreUnavailableError(StoreCallError):
    pass


@dataclass(slots=True)
class StoreInternalError(StoreCallError):
    pass


@dataclass(slots=True)
class UnknownCauseError(StoreError):
    """An exception that is not a recognized botocore error."""


@dataclass(slots=True)
class ScanAggregationError(StoreError):
    """Full-table drain aborted; ``cause`` holds the underlying StoreError."""


ScanError = ScanAggregationError
