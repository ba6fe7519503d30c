from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config

from ..settings import get_settings


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # Transport-level retries only; this layer does not retry on its own.
    return Config(
        retries={"max_attempts": 10, "mode": "adaptive"},
        connect_timeout=2,
        read_timeout=10,
    )


def _region(region: str | None) -> str:
    s = get_settings()
    return str(region or s.aws_region or "us-east-1").strip() or "us-east-1"


# Clients are cached per region so multi-region callers each get their own.
@lru_cache(maxsize=8)
def dynamodb_client(region: str | None = None):
    return boto3.client(
        "dynamodb",
        region_name=_region(region),
        endpoint_url=get_settings().aws_endpoint_url,
        config=botocore_config(),
    )


@lru_cache(maxsize=8)
def sqs_client(region: str | None = None):
    return boto3.client(
        "sqs",
        region_name=_region(region),
        endpoint_url=get_settings().aws_endpoint_url,
        config=botocore_config(),
    )
