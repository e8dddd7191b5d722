"""
Tests for the S3 and SQS adapters.

boto3 clients run against botocore Stubbers, so no AWS calls are made.

Dependencies: pytest, boto3, botocore
System role: AWS adapter verification
"""

import json

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import ANY, Stubber

from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.boundary.aws.sqs_client import SQSClient


def boto_client(service: str):
    return boto3.client(
        service,
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def s3_stub():
    client = boto_client("s3")
    with Stubber(client) as stubber:
        yield S3StorageClient(client=client), stubber
        stubber.assert_no_pending_responses()


class TestS3StorageClient:
    def test_list_objects_passes_paging_options(self, s3_stub):
        # Arrange
        storage, stubber = s3_stub
        stubber.add_response(
            "list_objects_v2",
            {"Contents": [{"Key": "scrapes/s/a.json", "Size": 10}], "NextContinuationToken": "next"},
            {"Bucket": "bucket", "Prefix": "scrapes/s/", "MaxKeys": 5, "ContinuationToken": "tok", "Delimiter": "/"},
        )

        # Act
        result = storage.list_objects("bucket", "scrapes/s/", 5, "tok", "/")

        # Assert
        assert result["next_token"] == "next"
        assert result["contents"][0]["Key"] == "scrapes/s/a.json"

    def test_list_keys_follows_continuation(self, s3_stub):
        # Arrange
        storage, stubber = s3_stub
        stubber.add_response(
            "list_objects_v2",
            {"Contents": [{"Key": "fixes/a"}], "NextContinuationToken": "page-2"},
            {"Bucket": "bucket", "Prefix": "fixes/", "MaxKeys": 1000},
        )
        stubber.add_response(
            "list_objects_v2",
            {"Contents": [{"Key": "fixes/b"}]},
            {"Bucket": "bucket", "Prefix": "fixes/", "MaxKeys": 1000, "ContinuationToken": "page-2"},
        )

        # Act
        keys = storage.list_keys("bucket", "fixes/")

        # Assert
        assert keys == ["fixes/a", "fixes/b"]

    def test_object_exists(self, s3_stub):
        # Arrange
        storage, stubber = s3_stub
        stubber.add_response("head_object", {}, {"Bucket": "bucket", "Key": "present"})
        stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)

        # Act / Assert
        assert storage.object_exists("bucket", "present") is True
        assert storage.object_exists("bucket", "absent") is False

    def test_object_exists_propagates_other_errors(self, s3_stub):
        # Arrange
        storage, stubber = s3_stub
        stubber.add_client_error("head_object", service_error_code="AccessDenied", http_status_code=403)

        # Act / Assert
        with pytest.raises(ClientError):
            storage.object_exists("bucket", "secret")

    def test_put_json_sets_content_type(self, s3_stub):
        # Arrange
        storage, stubber = s3_stub
        stubber.add_response(
            "put_object",
            {},
            {
                "Bucket": "bucket",
                "Key": "report.json",
                "Body": ANY,
                "ContentType": "application/json",
            },
        )

        # Act / Assert
        storage.put_json("bucket", "report.json", {"a": 1})

    def test_presigned_url(self):
        # Arrange
        storage = S3StorageClient(client=boto_client("s3"))

        # Act
        url, expires_at = storage.generate_presigned_download_url("bucket", "reports/r.json", 600)

        # Assert
        assert "reports/r.json" in url
        assert "X-Amz-Expires=600" in url or "Expires=" in url
        assert expires_at.tzinfo is not None


class TestSQSClient:
    def test_send_message_encodes_json(self):
        # Arrange
        client = boto_client("sqs")
        queue_url = "https://sqs.us-east-1.amazonaws.com/123/jobs"
        with Stubber(client) as stubber:
            stubber.add_response(
                "send_message",
                {"MessageId": "m-1"},
                {"QueueUrl": queue_url, "MessageBody": json.dumps({"type": "cwv", "siteId": "s"})},
            )

            # Act
            message_id = SQSClient(client=client).send_message(queue_url, {"type": "cwv", "siteId": "s"})

            # Assert
            assert message_id == "m-1"
            stubber.assert_no_pending_responses()
