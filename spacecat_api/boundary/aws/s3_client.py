"""
S3 client for bucket operations.

Synchronous boto3 wrapper; async callers run these methods through
asyncio.to_thread. Bucket names are passed per call because the API reads
from several buckets (scrapes, reports, enhanced reports, fix assets).

Dependencies: boto3
System role: Object storage adapter
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = ("404", "NoSuchKey", "NotFound")


class S3StorageClient:
    """S3 client for listing, reading, writing and presigning objects."""

    def __init__(self, region: str = "us-east-1", client: Any | None = None) -> None:
        """
        Initialize S3 client.

        Args:
            region: AWS region for the buckets
            client: Pre-built boto3 S3 client (tests inject a stub)
        """
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    def list_objects(
        self,
        bucket: str,
        prefix: str,
        max_keys: int = 1000,
        continuation_token: str | None = None,
        delimiter: str | None = None,
    ) -> dict[str, Any]:
        """
        List one page of objects under a prefix.

        Args:
            bucket: Bucket name
            prefix: Key prefix
            max_keys: Page size
            continuation_token: Token returned by the previous page
            delimiter: Optional delimiter ('/' lists one folder level)

        Returns:
            dict: {"contents": [...], "next_token": str | None}

        Raises:
            ClientError: If listing fails
        """
        params: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": max_keys}
        if continuation_token:
            params["ContinuationToken"] = continuation_token
        if delimiter:
            params["Delimiter"] = delimiter

        response = self._s3_client.list_objects_v2(**params)
        return {
            "contents": response.get("Contents", []),
            "next_token": response.get("NextContinuationToken"),
        }

    def list_keys(self, bucket: str, prefix: str) -> list[str]:
        """
        List every key under a prefix, following continuation tokens.

        Raises:
            ClientError: If listing fails
        """
        keys: list[str] = []
        token: str | None = None
        while True:
            page = self.list_objects(bucket, prefix, continuation_token=token)
            keys.extend(item["Key"] for item in page["contents"])
            token = page["next_token"]
            if not token:
                return keys

    def get_text(self, bucket: str, key: str) -> str:
        """
        Read an object body as UTF-8 text.

        Raises:
            ClientError: If the object cannot be read
        """
        response = self._s3_client.get_object(Bucket=bucket, Key=key)
        return response["Body"].read().decode("utf-8")

    def get_json(self, bucket: str, key: str) -> Any:
        """
        Read and parse a JSON object.

        Raises:
            ClientError: If the object cannot be read
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.get_text(bucket, key))

    def put_json(self, bucket: str, key: str, payload: Any) -> None:
        """
        Write a JSON document (indented) to a key.

        Raises:
            ClientError: If the upload fails
        """
        self._s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=json.dumps(payload, indent=2),
            ContentType="application/json",
        )

    def delete_object(self, bucket: str, key: str) -> None:
        """
        Delete a single object.

        Raises:
            ClientError: If the delete fails
        """
        self._s3_client.delete_object(Bucket=bucket, Key=key)

    def object_exists(self, bucket: str, key: str) -> bool:
        """
        Check if an object exists.

        Args:
            bucket: Bucket name
            key: Object key to check

        Returns:
            bool: True if the object exists, False otherwise
        """
        try:
            self._s3_client.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_OBJECT_CODES:
                return False
            raise

    def generate_presigned_download_url(
        self,
        bucket: str,
        key: str,
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading/viewing an S3 object.

        Args:
            bucket: Bucket name
            key: S3 object key (path in bucket)
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            ClientError: If presigned URL generation fails
        """
        presigned_url = self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in,
        )
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at
