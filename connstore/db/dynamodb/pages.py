from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .pagination import encode_cursor


DEFAULT_PAGE_SIZE = 25


@dataclass(frozen=True, slots=True)
class PageRequest:
    table_name: str
    limit: int = DEFAULT_PAGE_SIZE
    cursor: dict[str, Any] | None = None

    def to_scan_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"TableName": self.table_name, "Limit": int(self.limit)}
        # Important: only pass ExclusiveStartKey when present.
        if self.cursor:
            kwargs["ExclusiveStartKey"] = self.cursor
        return kwargs


@dataclass(slots=True)
class PageResult:
    items: list[dict[str, Any]] = field(default_factory=list)
    count: int = 0
    cursor: dict[str, Any] | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.cursor)

    def next_token(self) -> str | None:
        """Sealed form of ``cursor`` for handing to external callers."""
        return encode_cursor(self.cursor)


class PageSource(ABC):
    """What the scanner needs from a store: one describe, one bounded scan."""

    @abstractmethod
    def describe_table(self, table_name: str) -> dict[str, Any]:
        """Return table metadata; raise a StoreError if the table is unusable."""

    @abstractmethod
    def fetch_page(self, request: PageRequest) -> PageResult:
        """Return one page of raw (still marshalled) items."""
