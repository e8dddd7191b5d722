"""
AWS boundary modules.

Exports: S3StorageClient, SQSClient
"""

from .s3_client import S3StorageClient
from .sqs_client import SQSClient

__all__ = ["S3StorageClient", "SQSClient"]
