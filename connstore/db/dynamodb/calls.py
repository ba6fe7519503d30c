from __future__ import annotations

from typing import Any, Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError, ParamValidationError

from .errors import (
    InvalidReceiptHandleError,
    ResourceNotFoundError,
    StoreError,
    StoreInternalError,
    StoreThrottledError,
    StoreUnavailableError,
    StoreValidationError,
    UnknownCauseError,
)

T = TypeVar("T")


_THROTTLE_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
    "RequestThrottled",
}

_NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "QueueDoesNotExist",
    "AWS.SimpleQueueService.NonExistentQueue",
}

_RECEIPT_HANDLE_CODES = {
    "ReceiptHandleIsInvalid",
    "InvalidReceiptHandle",
    "AWS.SimpleQueueService.ReceiptHandleIsInvalid",
}


def _aws_request_id_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("ResponseMetadata", {}).get("RequestId")


def _err_code_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("Error", {}).get("Code")


def map_store_error(
    *,
    operation: str,
    table_name: str | None,
    key: dict[str, Any] | None,
    exc: BaseException,
) -> StoreError:
    if isinstance(exc, StoreError):
        return exc

    if isinstance(exc, ClientError):
        code = _err_code_from_client_error(exc) or ""
        common: dict[str, Any] = {
            "operation": operation,
            "table_name": table_name,
            "key": key,
            "aws_request_id": _aws_request_id_from_client_error(exc),
            "cause": exc,
        }

        if code in _NOT_FOUND_CODES:
            return ResourceNotFoundError(message=f"{operation}: resource not found ({code})", **common)

        if code in _RECEIPT_HANDLE_CODES:
            return InvalidReceiptHandleError(
                message=f"{operation}: receipt handle is invalid or expired", **common
            )

        if code == "ValidationException":
            return StoreValidationError(message=f"{operation}: request validation failed", **common)

        if code in ("AccessDeniedException", "UnrecognizedClientException", "AccessDenied"):
            return StoreUnavailableError(message=f"{operation}: access denied", **common)

        if code in _THROTTLE_CODES:
            return StoreThrottledError(
                message=f"{operation}: request throttled or unavailable", retryable=True, **common
            )

        return StoreInternalError(message=f"{operation}: request failed ({code or 'ClientError'})", **common)

    # ParamValidationError is a BotoCoreError raised before anything is sent.
    if isinstance(exc, ParamValidationError):
        return StoreValidationError(
            message=f"{operation}: invalid request parameters",
            operation=operation,
            table_name=table_name,
            key=key,
            cause=exc,
        )

    if isinstance(exc, BotoCoreError):
        return StoreUnavailableError(
            message=f"{operation}: client error",
            operation=operation,
            table_name=table_name,
            key=key,
            retryable=True,
            cause=exc,
        )

    return UnknownCauseError(
        message=f"{operation}: unexpected error of type {type(exc).__name__}",
        operation=operation,
        table_name=table_name,
        key=key,
        cause=exc,
    )


def store_call(
    operation: str,
    fn: Callable[[], T],
    *,
    table_name: str | None = None,
    key: dict[str, Any] | None = None,
) -> T:
    """Run one store request, translating any failure into a StoreError."""
    try:
        return fn()
    except StoreError:
        raise
    except Exception as e:  # noqa: BLE001
        raise map_store_error(operation=operation, table_name=table_name, key=key, exc=e) from e
