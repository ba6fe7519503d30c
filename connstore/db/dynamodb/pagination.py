from __future__ import annotations

import base64
import json
from typing import Any

from ...infrastructure.token_crypto import decrypt_string, encrypt_string
from .errors import StoreValidationError


_TOKEN_VERSION = 1
_BYTES_TAG = "__b64__"


def _json_default(o: Any) -> Any:
    # Binary key attributes ({"B": b"..."}) are the only non-JSON values in a key.
    if isinstance(o, (bytes, bytearray)):
        return {_BYTES_TAG: base64.b64encode(bytes(o)).decode("ascii")}
    raise TypeError(f"Unsupported cursor value: {type(o).__name__}")


def _json_object_hook(d: dict[str, Any]) -> Any:
    if len(d) == 1 and _BYTES_TAG in d:
        return base64.b64decode(d[_BYTES_TAG])
    return d


def encode_cursor(last_evaluated_key: dict[str, Any] | None) -> str | None:
    """Seal a raw LastEvaluatedKey into an opaque token safe to hand to callers."""
    if not last_evaluated_key:
        return None

    payload = {"v": _TOKEN_VERSION, "lek": last_evaluated_key}
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=_json_default)
    return encrypt_string(raw)


def decode_cursor(token: str | None) -> dict[str, Any] | None:
    if not token:
        return None

    raw = decrypt_string(token)
    if not raw:
        raise StoreValidationError(message="Invalid scan cursor", operation="DecodeCursor")

    try:
        payload = json.loads(raw, object_hook=_json_object_hook)
    except ValueError as e:
        raise StoreValidationError(message="Invalid scan cursor", operation="DecodeCursor", cause=e) from e

    if not isinstance(payload, dict) or payload.get("v") != _TOKEN_VERSION:
        raise StoreValidationError(message="Invalid scan cursor", operation="DecodeCursor")

    lek = payload.get("lek")
    if lek is None:
        return None
    if not isinstance(lek, dict):
        raise StoreValidationError(message="Invalid scan cursor", operation="DecodeCursor")

    return lek


def resolve_cursor(cursor: dict[str, Any] | str | None) -> dict[str, Any] | None:
    """Accept either a raw key or a sealed token; empty means start of table."""
    if not cursor:
        return None
    if isinstance(cursor, str):
        return decode_cursor(cursor)
    if isinstance(cursor, dict):
        return cursor
    raise StoreValidationError(message="Invalid scan cursor", operation="DecodeCursor")
