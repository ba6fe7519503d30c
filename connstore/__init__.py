"""Data access for connection records (DynamoDB) and queue acknowledgments (SQS)."""

from __future__ import annotations

from typing import Any, Iterator

from .db.dynamodb.errors import (
    InvalidReceiptHandleError,
    ResourceNotFoundError,
    ScanAggregationError,
    ScanError,
    StoreCallError,
    StoreError,
    StoreInternalError,
    StoreThrottledError,
    StoreUnavailableError,
    StoreValidationError,
    UnknownCauseError,
)
from .db.dynamodb.pages import DEFAULT_PAGE_SIZE, PageRequest, PageResult, PageSource
from .db.dynamodb.pagination import decode_cursor, encode_cursor
from .results import Ack
from .store import ConnectionStore

__all__ = [
    "Ack",
    "ConnectionStore",
    "DEFAULT_PAGE_SIZE",
    "InvalidReceiptHandleError",
    "PageRequest",
    "PageResult",
    "PageSource",
    "ResourceNotFoundError",
    "ScanAggregationError",
    "ScanError",
    "StoreCallError",
    "StoreError",
    "StoreInternalError",
    "StoreThrottledError",
    "StoreUnavailableError",
    "StoreValidationError",
    "UnknownCauseError",
    "acknowledge_message",
    "decode_cursor",
    "delete_connection",
    "describe_table",
    "encode_cursor",
    "put_connection",
    "scan_all",
    "scan_pages",
]


def _default_store() -> ConnectionStore:
    return ConnectionStore()


def describe_table(table_name: str) -> dict[str, Any]:
    return _default_store().describe_table(table_name)


def scan_pages(
    table_name: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_cursor: dict[str, Any] | str | None = None,
) -> Iterator[PageResult]:
    return _default_store().scan_pages(table_name, page_size, start_cursor)


def scan_all(table_name: str, page_size: int = DEFAULT_PAGE_SIZE) -> list[dict[str, Any]]:
    return _default_store().scan_all(table_name, page_size)


def put_connection(table_name: str, connection_id: str) -> Ack:
    return _default_store().put_connection(table_name, connection_id)


def delete_connection(table_name: str, connection_id: str) -> Ack:
    return _default_store().delete_connection(table_name, connection_id)


def acknowledge_message(queue_url: str, receipt_handle: str) -> Ack:
    return _default_store().acknowledge_message(queue_url, receipt_handle)
