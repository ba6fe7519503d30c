from __future__ import annotations

from typing import Any, Iterator

from .db.dynamodb import scan
from .db.dynamodb.pages import DEFAULT_PAGE_SIZE, PageResult, PageSource
from .db.dynamodb.table import DynamoPageSource
from .infrastructure import aws_clients
from .queues import sqs
from .repositories import connections_repo
from .results import Ack


class ConnectionStore:
    """Entry point over one DynamoDB client and one SQS client.

    Clients are injected; when omitted, the cached per-region boto3 clients
    are used. Instances hold no per-call state, so one store can serve
    concurrent scans and point operations.
    """

    def __init__(
        self,
        *,
        dynamodb_client: Any = None,
        sqs_client: Any = None,
        region: str | None = None,
        page_source: PageSource | None = None,
    ):
        self.region = region
        self._dynamodb_client = dynamodb_client
        self._sqs_client = sqs_client
        self._page_source = page_source

    @property
    def dynamodb(self) -> Any:
        if self._dynamodb_client is None:
            self._dynamodb_client = aws_clients.dynamodb_client(self.region)
        return self._dynamodb_client

    @property
    def sqs(self) -> Any:
        if self._sqs_client is None:
            self._sqs_client = aws_clients.sqs_client(self.region)
        return self._sqs_client

    @property
    def page_source(self) -> PageSource:
        if self._page_source is None:
            self._page_source = DynamoPageSource(self.dynamodb)
        return self._page_source

    # --- enumeration ---

    def describe_table(self, table_name: str) -> dict[str, Any]:
        return scan.describe_table(self.page_source, table_name)

    def scan_pages(
        self,
        table_name: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        start_cursor: dict[str, Any] | str | None = None,
    ) -> Iterator[PageResult]:
        return scan.scan_pages(self.page_source, table_name, page_size, start_cursor)

    def scan_all(self, table_name: str, page_size: int = DEFAULT_PAGE_SIZE) -> list[dict[str, Any]]:
        return scan.scan_all(self.page_source, table_name, page_size)

    # --- point operations ---

    def put_connection(self, table_name: str, connection_id: str) -> Ack:
        return connections_repo.put_connection(table_name, connection_id, client=self.dynamodb)

    def delete_connection(self, table_name: str, connection_id: str) -> Ack:
        return connections_repo.delete_connection(table_name, connection_id, client=self.dynamodb)

    def acknowledge_message(self, queue_url: str, receipt_handle: str) -> Ack:
        return sqs.acknowledge_message(queue_url, receipt_handle, client=self.sqs)
