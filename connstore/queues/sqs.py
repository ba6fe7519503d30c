from __future__ import annotations

from typing import Any

from ..db.dynamodb.calls import store_call
from ..db.dynamodb.errors import StoreError, StoreValidationError
from ..infrastructure.aws_clients import sqs_client
from ..observability.logging import get_logger
from ..results import Ack


log = get_logger("sqs")


def acknowledge_message(queue_url: str, receipt_handle: str, *, client: Any = None) -> Ack:
    """Delete one delivered message, marking it processed.

    Receipt handles are single-use: a second acknowledgment of the same
    delivery comes back as an ``InvalidReceiptHandleError`` on the Ack.
    """
    q = str(queue_url or "").strip()
    rh = str(receipt_handle or "").strip()
    if not q or not rh:
        return Ack(
            operation="DeleteMessage",
            error=StoreValidationError(
                message="DeleteMessage: missing queueUrl or receiptHandle",
                operation="DeleteMessage",
            ),
        )

    sqs = client if client is not None else sqs_client()
    try:
        resp = store_call("DeleteMessage", lambda: sqs.delete_message(QueueUrl=q, ReceiptHandle=rh))
    except StoreError as e:
        log.warning("message_delete_failed", queueUrl=q, error=str(e))
        return Ack(operation="DeleteMessage", error=e)

    log.info("message_deleted", queueUrl=q)
    return Ack(operation="DeleteMessage", response=resp)
