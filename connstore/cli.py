"""
Command-line access to the connection store.

Usage:
    connstore scan TABLE [--page-size N] [--pages] [--cursor TOKEN]
    connstore describe TABLE
    connstore put-connection TABLE CONNECTION_ID
    connstore delete-connection TABLE CONNECTION_ID
    connstore ack-message QUEUE_URL RECEIPT_HANDLE

TABLE / QUEUE_URL default to CONNECTIONS_TABLE_NAME / QUEUE_URL when given as "-".
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from .db.dynamodb.errors import StoreError
from .observability.logging import configure_logging, get_logger
from .results import Ack
from .settings import get_settings
from .store import ConnectionStore


log = get_logger("cli")


def _emit(payload: Any) -> None:
    # Decimal / set / bytes from unmarshalled records.
    print(json.dumps(payload, default=str, ensure_ascii=False))


def _table(arg: str) -> str:
    if arg != "-":
        return arg
    tn = str(get_settings().connections_table_name or "").strip()
    if not tn:
        raise SystemExit("CONNECTIONS_TABLE_NAME is not set")
    return tn


def _queue(arg: str) -> str:
    if arg != "-":
        return arg
    q = str(get_settings().queue_url or "").strip()
    if not q:
        raise SystemExit("QUEUE_URL is not set")
    return q


def _ack_exit(ack: Ack) -> int:
    if ack.ok:
        _emit({"ok": True, "operation": ack.operation, "response": ack.response})
        return 0
    _emit({"ok": False, "operation": ack.operation, "error": str(ack.error), "type": type(ack.error).__name__})
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="connstore", description="Connection store data access")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("scan", help="Enumerate every record in a table")
    p.add_argument("table")
    p.add_argument("--page-size", type=int, default=None, help="Records per page (default SCAN_PAGE_SIZE)")
    p.add_argument("--pages", action="store_true", help="Print one JSON line per page with its resume cursor")
    p.add_argument("--cursor", default=None, help="Resume from a cursor printed by --pages")

    p = sub.add_parser("describe", help="Describe a table")
    p.add_argument("table")

    p = sub.add_parser("put-connection", help="Store a connection id")
    p.add_argument("table")
    p.add_argument("connection_id")

    p = sub.add_parser("delete-connection", help="Remove a connection id")
    p.add_argument("table")
    p.add_argument("connection_id")

    p = sub.add_parser("ack-message", help="Delete a queue message by receipt handle")
    p.add_argument("queue_url")
    p.add_argument("receipt_handle")

    return parser


def run(args: argparse.Namespace, store: ConnectionStore) -> int:
    if args.command == "scan":
        page_size = args.page_size or get_settings().scan_page_size
        table = _table(args.table)
        if args.pages or args.cursor:
            for page in store.scan_pages(table, page_size, args.cursor):
                _emit({"count": page.count, "items": page.items, "cursor": page.next_token()})
            return 0
        _emit(store.scan_all(table, page_size))
        return 0

    if args.command == "describe":
        _emit(store.describe_table(_table(args.table)))
        return 0

    if args.command == "put-connection":
        return _ack_exit(store.put_connection(_table(args.table), args.connection_id))

    if args.command == "delete-connection":
        return _ack_exit(store.delete_connection(_table(args.table), args.connection_id))

    if args.command == "ack-message":
        return _ack_exit(store.acknowledge_message(_queue(args.queue_url), args.receipt_handle))

    raise ValueError(f"unknown command: {args.command}")


def main(argv: Sequence[str] | None = None, *, store: ConnectionStore | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(level=settings.log_level)
    log.debug("cli_starting", command=args.command, settings=settings.to_log_safe_dict())

    try:
        return run(args, store or ConnectionStore())
    except (StoreError, ValueError) as e:
        log.error("cli_failed", command=args.command, error=str(e), type=type(e).__name__)
        _emit({"ok": False, "error": str(e), "type": type(e).__name__})
        return 1


if __name__ == "__main__":
    sys.exit(main())
