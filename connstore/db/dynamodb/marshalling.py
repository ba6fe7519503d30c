from __future__ import annotations

from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer


_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def marshall(item: dict[str, Any]) -> dict[str, Any]:
    # Low-level client expects AttributeValue shape; TypeSerializer produces {'S': '...'} etc.
    return {k: _serializer.serialize(v) for k, v in item.items()}


def unmarshall(item: dict[str, Any]) -> dict[str, Any]:
    # Numbers come back as Decimal, string/number/binary sets as set.
    return {k: _deserializer.deserialize(v) for k, v in item.items()}
