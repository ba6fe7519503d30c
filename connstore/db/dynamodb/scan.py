"""
Full-table enumeration.

``scan_pages`` is a lazy, finite, non-restartable generator that drives a
``PageSource`` one bounded request at a time. ``scan_all`` checks the table
exists, then drains ``scan_pages`` into a single list.

Termination: the generator stops on the first page whose count is zero, even
if the store attached a cursor to it, and after yielding a page that carries
no cursor. DynamoDB returns a cursor whenever a page fills its limit, so a
table whose size is a multiple of the page size ends with one empty fetch.
``scan_all`` stops pulling as soon as a page has no cursor.
"""

from __future__ import annotations

from typing import Any, Generator

from ...observability.logging import get_logger
from .calls import store_call
from .errors import ScanAggregationError
from .marshalling import unmarshall
from .pages import DEFAULT_PAGE_SIZE, PageRequest, PageResult, PageSource
from .pagination import resolve_cursor


log = get_logger("dynamodb_scan")


def _require_page_size(page_size: Any) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
    return page_size


def describe_table(source: PageSource, table_name: str) -> dict[str, Any]:
    return store_call("DescribeTable", lambda: source.describe_table(table_name), table_name=table_name)


def scan_pages(
    source: PageSource,
    table_name: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_cursor: dict[str, Any] | str | None = None,
) -> Generator[PageResult, None, None]:
    """Yield unmarshalled pages of ``table_name`` in store order.

    ``start_cursor`` may be a raw LastEvaluatedKey or a token produced by
    ``PageResult.next_token()``. Argument errors raise here, before any fetch.
    """
    limit = _require_page_size(page_size)
    cursor = resolve_cursor(start_cursor)
    return _iter_pages(source, str(table_name), limit, cursor)


def _iter_pages(
    source: PageSource,
    table_name: str,
    limit: int,
    cursor: dict[str, Any] | None,
) -> Generator[PageResult, None, None]:
    while True:
        request = PageRequest(table_name=table_name, limit=limit, cursor=cursor)
        raw = store_call("Scan", lambda: source.fetch_page(request), table_name=table_name, key=cursor)

        if not raw.count:
            if raw.cursor:
                # Empty page wins over the cursor; see the module docstring.
                log.warning("scan_empty_page_with_cursor", table=table_name, cursor=raw.cursor)
            return

        cursor = raw.cursor
        log.debug("scan_page_fetched", table=table_name, count=raw.count, hasMore=bool(cursor))
        yield PageResult(
            items=[unmarshall(item) for item in raw.items],
            count=raw.count,
            cursor=cursor,
        )

        # A request without ExclusiveStartKey would restart the table.
        if not cursor:
            return


def scan_all(
    source: PageSource,
    table_name: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[dict[str, Any]]:
    limit = _require_page_size(page_size)

    results: list[dict[str, Any]] = []
    page_count = 0
    pages: Generator[PageResult, None, None] | None = None
    try:
        describe_table(source, table_name)
        pages = scan_pages(source, table_name, limit)
        for page in pages:
            page_count += 1
            results.extend(page.items)
            if not page.cursor:
                break
    except Exception as e:  # noqa: BLE001
        log.warning("scan_aborted", table=table_name, pages=page_count, error=str(e))
        raise ScanAggregationError(
            message=f"Scan of table {table_name!r} failed: {e}",
            operation="ScanAll",
            table_name=table_name,
            cause=e,
        ) from e
    finally:
        if pages is not None:
            pages.close()

    log.info("scan_completed", table=table_name, pages=page_count, items=len(results))
    return results
