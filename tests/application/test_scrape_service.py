"""
Tests for ScrapeService.

Dependencies: pytest, pytest-asyncio, aiosqlite, botocore
System role: File download and scraped content listing verification
"""

from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from spacecat_api.application.services.scrape_service import ScrapeService
from spacecat_api.configs.storage import StorageSettings
from spacecat_api.core.exceptions import (
    AccessDeniedError,
    NotFoundError,
    UpstreamServiceError,
    ValidationError,
)

MODIFIED = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def scrape_service(test_async_db, member_access, mock_s3_client) -> ScrapeService:
    return ScrapeService(
        db=test_async_db,
        access_control=member_access,
        s3_client=mock_s3_client,
        storage_settings=StorageSettings(scraper_bucket="scraper-bucket", presigned_url_expiry=600),
    )


class TestGetFileUrl:
    async def test_presigns_existing_object(self, scrape_service, site, mock_s3_client):
        # Arrange
        mock_s3_client.object_exists.return_value = True
        mock_s3_client.generate_presigned_download_url.return_value = ("https://signed.example.com/file", MODIFIED)

        # Act
        url = await scrape_service.get_file_url(str(site.id), "scrapes/site/page.json")

        # Assert
        assert url == "https://signed.example.com/file"
        mock_s3_client.generate_presigned_download_url.assert_called_once_with(
            "scraper-bucket", "scrapes/site/page.json", 600
        )

    async def test_missing_object(self, scrape_service, site, mock_s3_client):
        # Arrange
        mock_s3_client.object_exists.return_value = False

        # Act / Assert
        with pytest.raises(NotFoundError, match="File not found"):
            await scrape_service.get_file_url(str(site.id), "missing.json")
        mock_s3_client.generate_presigned_download_url.assert_not_called()

    async def test_missing_key(self, scrape_service, site):
        with pytest.raises(ValidationError, match="File key is required"):
            await scrape_service.get_file_url(str(site.id), None)

    async def test_presign_failure(self, scrape_service, site, mock_s3_client):
        # Arrange
        mock_s3_client.object_exists.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "HeadObject"
        )

        # Act / Assert
        with pytest.raises(UpstreamServiceError, match="Error occurred generating a pre-signed URL"):
            await scrape_service.get_file_url(str(site.id), "page.json")

    async def test_outsider_denied(self, test_async_db, outsider_access, mock_s3_client, site):
        # Arrange
        service = ScrapeService(
            db=test_async_db,
            access_control=outsider_access,
            s3_client=mock_s3_client,
            storage_settings=StorageSettings(scraper_bucket="scraper-bucket"),
        )

        # Act / Assert
        with pytest.raises(AccessDeniedError, match="can get files"):
            await service.get_file_url(str(site.id), "page.json")


class TestListScrapedContent:
    async def test_lists_page(self, scrape_service, site, mock_s3_client):
        # Arrange
        prefix = f"scrapes/{site.id}/blog/"
        mock_s3_client.list_objects.return_value = {
            "contents": [
                {"Key": prefix, "Size": 0, "LastModified": MODIFIED},
                {"Key": f"{prefix}post-1/scrape.json", "Size": 512, "LastModified": MODIFIED},
                {"Key": f"{prefix}README", "Size": 3, "LastModified": MODIFIED},
            ],
            "next_token": "abc/def==",
        }

        # Act
        result = await scrape_service.list_scraped_content(
            str(site.id), "scrapes", path="/blog/", page_size="25", page_token="prev%2Ftoken"
        )

        # Assert
        mock_s3_client.list_objects.assert_called_once_with(
            "scraper-bucket", prefix, 25, "prev/token", None
        )
        assert [item["name"] for item in result["items"]] == ["post-1/scrape.json", "README"]
        assert result["items"][0]["type"] == "json"
        assert result["items"][0]["size"] == 512
        assert result["items"][1]["type"] == ""
        assert result["nextPageToken"] == "abc%2Fdef%3D%3D"

    async def test_root_only_uses_delimiter(self, scrape_service, site, mock_s3_client):
        # Arrange
        mock_s3_client.list_objects.return_value = {"contents": [], "next_token": None}

        # Act
        result = await scrape_service.list_scraped_content(
            str(site.id), "accessibility", root_only="true", page_size="5"
        )

        # Assert
        mock_s3_client.list_objects.assert_called_once_with(
            "scraper-bucket", f"accessibility/{site.id}/", 100, None, "/"
        )
        assert result == {"items": [], "nextPageToken": None}

    async def test_invalid_page_size_uses_default(self, scrape_service, site, mock_s3_client):
        # Arrange
        mock_s3_client.list_objects.return_value = {"contents": [], "next_token": None}

        # Act
        await scrape_service.list_scraped_content(str(site.id), "imports", page_size="-1")

        # Assert
        assert mock_s3_client.list_objects.call_args.args[2] == 100

    async def test_invalid_type(self, scrape_service, site):
        with pytest.raises(ValidationError, match='Type must be either "scrapes" or "imports" or "accessibility"'):
            await scrape_service.list_scraped_content(str(site.id), "screenshots")

    async def test_s3_failure(self, scrape_service, site, mock_s3_client):
        # Arrange
        mock_s3_client.list_objects.side_effect = ClientError(
            {"Error": {"Code": "InternalError", "Message": "oops"}}, "ListObjectsV2"
        )

        # Act / Assert
        with pytest.raises(UpstreamServiceError, match="S3 error: Failed to list files"):
            await scrape_service.list_scraped_content(str(site.id), "scrapes")
