from __future__ import annotations

from typing import Any

from ..db.dynamodb.errors import StoreError, StoreValidationError
from ..db.dynamodb.table import DynamoTable
from ..observability.logging import get_logger
from ..results import Ack


log = get_logger("connections_repo")


def connection_key(connection_id: str) -> dict[str, Any]:
    return {"connectionId": str(connection_id)}


def _missing_id(operation: str, table_name: str) -> Ack:
    return Ack(
        operation=operation,
        error=StoreValidationError(
            message=f"{operation}: missing connectionId",
            operation=operation,
            table_name=table_name,
        ),
    )


def put_connection(table_name: str, connection_id: str, *, client: Any = None) -> Ack:
    cid = str(connection_id or "").strip()
    if not cid:
        return _missing_id("PutItem", table_name)

    try:
        resp = DynamoTable(table_name=table_name, client=client).put_item(item=connection_key(cid))
    except StoreError as e:
        log.warning("connection_put_failed", table=table_name, connectionId=cid, error=str(e))
        return Ack(operation="PutItem", error=e)
    return Ack(operation="PutItem", response=resp)


def delete_connection(table_name: str, connection_id: str, *, client: Any = None) -> Ack:
    cid = str(connection_id or "").strip()
    if not cid:
        return _missing_id("DeleteItem", table_name)

    try:
        resp = DynamoTable(table_name=table_name, client=client).delete_item(key=connection_key(cid))
    except StoreError as e:
        log.warning("connection_delete_failed", table=table_name, connectionId=cid, error=str(e))
        return Ack(operation="DeleteItem", error=e)
    return Ack(operation="DeleteItem", response=resp)
