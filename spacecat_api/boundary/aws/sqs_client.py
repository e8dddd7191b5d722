"""
SQS client for job submission.

Dependencies: boto3
System role: Message queue adapter for audit and report jobs
"""

import json
import logging
from typing import Any

import boto3

logger = logging.getLogger(__name__)


class SQSClient:
    """Thin boto3 SQS wrapper sending JSON messages."""

    def __init__(self, region: str = "us-east-1", client: Any | None = None) -> None:
        """
        Initialize SQS client.

        Args:
            region: AWS region of the queues
            client: Pre-built boto3 SQS client (tests inject a stub)
        """
        self._sqs_client = client or boto3.client("sqs", region_name=region)

    def send_message(self, queue_url: str, payload: dict[str, Any]) -> str:
        """
        Send a JSON payload to a queue.

        Args:
            queue_url: Target queue URL
            payload: Message body, JSON-encoded before sending

        Returns:
            str: SQS MessageId

        Raises:
            ClientError: If the send fails
        """
        response = self._sqs_client.send_message(
            QueueUrl=queue_url,
            MessageBody=json.dumps(payload, default=str),
        )
        logger.info(
            "Queued message",
            extra={"queue_url": queue_url, "message_id": response.get("MessageId")},
        )
        return response["MessageId"]
