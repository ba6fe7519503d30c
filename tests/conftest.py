from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

# Ensure the repo root is on sys.path so `import connstore` works without installing.
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

# Route structlog through stdlib logging so tests never get log lines on stdout.
structlog.configure(
    processors=[structlog.processors.JSONRenderer()],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
)


_serializer = TypeSerializer()


def client_error(code: str, operation: str, *, request_id: str = "req-123") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} raised by fake"},
            "ResponseMetadata": {"RequestId": request_id, "HTTPStatusCode": 400},
        },
        operation,
    )


class FakeDynamoClient:
    """In-memory stand-in for the boto3 DynamoDB low-level client.

    Like the real service, a scan that fills its Limit returns a
    LastEvaluatedKey even when nothing follows, unless `exact_cursor` is set.
    """

    def __init__(self, *, key_attr: str = "connectionId", exact_cursor: bool = False):
        self.key_attr = key_attr
        self.exact_cursor = exact_cursor
        self.tables: dict[str, dict[str, dict[str, Any]]] = {}
        self.scan_calls: list[dict[str, Any]] = []
        self.fail_scan_on_call: int | None = None

    def create_table(self, name: str) -> None:
        self.tables.setdefault(name, {})

    def seed(self, name: str, records: list[dict[str, Any]]) -> None:
        self.create_table(name)
        for r in records:
            item = {k: _serializer.serialize(v) for k, v in r.items()}
            self.tables[name][self._key_of(item)] = item

    def _key_of(self, item: dict[str, Any]) -> str:
        return str(item[self.key_attr]["S"])

    def _require(self, name: str, operation: str) -> dict[str, dict[str, Any]]:
        if name not in self.tables:
            raise client_error("ResourceNotFoundException", operation)
        return self.tables[name]

    def describe_table(self, *, TableName: str) -> dict[str, Any]:
        rows = self._require(TableName, "DescribeTable")
        return {
            "Table": {
                "TableName": TableName,
                "TableStatus": "ACTIVE",
                "ItemCount": len(rows),
                "KeySchema": [{"AttributeName": self.key_attr, "KeyType": "HASH"}],
            }
        }

    def scan(self, *, TableName: str, Limit: int, ExclusiveStartKey: dict[str, Any] | None = None) -> dict[str, Any]:
        self.scan_calls.append({"TableName": TableName, "Limit": Limit, "ExclusiveStartKey": ExclusiveStartKey})
        if self.fail_scan_on_call is not None and len(self.scan_calls) == self.fail_scan_on_call:
            raise client_error("InternalServerError", "Scan")

        rows = self._require(TableName, "Scan")
        keys = list(rows.keys())
        start = 0
        if ExclusiveStartKey:
            start = keys.index(self._key_of(ExclusiveStartKey)) + 1
        page_keys = keys[start : start + Limit]
        items = [dict(rows[k]) for k in page_keys]

        out: dict[str, Any] = {"Items": items, "Count": len(items), "ScannedCount": len(items)}
        more = start + len(items) < len(keys)
        if items and (more or (not self.exact_cursor and len(items) == Limit)):
            out["LastEvaluatedKey"] = {self.key_attr: dict(items[-1][self.key_attr])}
        return out

    def put_item(self, *, TableName: str, Item: dict[str, Any]) -> dict[str, Any]:
        rows = self._require(TableName, "PutItem")
        rows[self._key_of(Item)] = dict(Item)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def delete_item(self, *, TableName: str, Key: dict[str, Any]) -> dict[str, Any]:
        rows = self._require(TableName, "DeleteItem")
        rows.pop(self._key_of(Key), None)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}


class FakeSqsClient:
    """Receipt handles are single-use, as SQS enforces for a given delivery."""

    def __init__(self, queue_url: str):
        self.queue_url = queue_url
        self.live_handles: set[str] = set()
        self.deleted: list[str] = []

    def deliver(self, receipt_handle: str) -> str:
        self.live_handles.add(receipt_handle)
        return receipt_handle

    def delete_message(self, *, QueueUrl: str, ReceiptHandle: str) -> dict[str, Any]:
        if QueueUrl != self.queue_url:
            raise client_error("AWS.SimpleQueueService.NonExistentQueue", "DeleteMessage")
        if ReceiptHandle not in self.live_handles:
            raise client_error("ReceiptHandleIsInvalid", "DeleteMessage")
        self.live_handles.discard(ReceiptHandle)
        self.deleted.append(ReceiptHandle)
        return {"ResponseMetadata": {"HTTPStatusCode": 200, "RequestId": "sqs-req"}}


def connection_records(n: int) -> list[dict[str, Any]]:
    return [{"connectionId": f"c{i:03d}", "seq": i} for i in range(n)]


@pytest.fixture
def fake_ddb() -> FakeDynamoClient:
    return FakeDynamoClient()


@pytest.fixture
def fake_sqs() -> FakeSqsClient:
    return FakeSqsClient("https://sqs.us-east-1.amazonaws.com/000000000000/vendor-queue")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    from connstore.settings import get_settings

    for name in ("ENVIRONMENT", "CURSOR_TOKEN_KEY", "AWS_ENDPOINT_URL", "CONNECTIONS_TABLE_NAME", "QUEUE_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
