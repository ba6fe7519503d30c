from __future__ import annotations

from typing import Any

from ...infrastructure.aws_clients import dynamodb_client
from ...observability.logging import get_logger
from .calls import store_call
from .marshalling import marshall
from .pages import PageRequest, PageResult, PageSource


log = get_logger("dynamodb_table")


class DynamoTable:
    def __init__(self, *, table_name: str, client: Any = None):
        self.table_name = str(table_name)
        self._client = client if client is not None else dynamodb_client()

    def describe(self) -> dict[str, Any]:
        def _op():
            return self._client.describe_table(TableName=self.table_name)

        resp = store_call("DescribeTable", _op, table_name=self.table_name)
        table = (resp or {}).get("Table") or {}
        log.info(
            "table_described",
            table=self.table_name,
            status=table.get("TableStatus"),
            itemCount=table.get("ItemCount"),
        )
        return table

    def scan_page(self, *, limit: int, exclusive_start_key: dict[str, Any] | None = None) -> PageResult:
        request = PageRequest(table_name=self.table_name, limit=limit, cursor=exclusive_start_key)

        def _op():
            return self._client.scan(**request.to_scan_kwargs())

        resp = store_call("Scan", _op, table_name=self.table_name, key=exclusive_start_key) or {}
        items = list(resp.get("Items") or [])
        count = resp.get("Count")
        return PageResult(
            items=items,
            count=int(count) if count is not None else len(items),
            cursor=resp.get("LastEvaluatedKey") or None,
        )

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]:
        def _op():
            return self._client.put_item(TableName=self.table_name, Item=marshall(item))

        return store_call("PutItem", _op, table_name=self.table_name, key=item)

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        def _op():
            return self._client.delete_item(TableName=self.table_name, Key=marshall(key))

        return store_call("DeleteItem", _op, table_name=self.table_name, key=key)


class DynamoPageSource(PageSource):
    """PageSource backed by a DynamoDB low-level client."""

    def __init__(self, client: Any = None):
        self._client = client if client is not None else dynamodb_client()

    def table(self, table_name: str) -> DynamoTable:
        return DynamoTable(table_name=table_name, client=self._client)

    def describe_table(self, table_name: str) -> dict[str, Any]:
        return self.table(table_name).describe()

    def fetch_page(self, request: PageRequest) -> PageResult:
        return self.table(request.table_name).scan_page(
            limit=request.limit,
            exclusive_start_key=request.cursor,
        )
