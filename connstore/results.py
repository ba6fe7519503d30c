from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .db.dynamodb.errors import StoreError


@dataclass(slots=True)
class Ack:
    """Outcome of a point operation (put, delete, acknowledge).

    Exactly one of ``response`` / ``error`` is meaningful: check ``ok`` or
    call ``unwrap()`` to get the store's raw response or raise the error.
    """

    operation: str
    response: dict[str, Any] | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        return self.response or {}
