"""
Scraped content service.

Dependencies: boto3 (via S3StorageClient), sqlalchemy
System role: File downloads and scraped-content listings from the scraper bucket
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote, unquote

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.configs.storage import StorageSettings
from spacecat_api.core.exceptions import NotFoundError, UpstreamServiceError, ValidationError
from spacecat_api.core.s3_keys import SCRAPED_CONTENT_TYPES, build_s3_prefix, file_extension
from spacecat_api.core.validators import has_text, is_integer, is_valid_uuid
from spacecat_api.models.scrape import ScrapedContentItem, ScrapedContentPage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
ROOT_ONLY_PAGE_SIZE = 100


class ScrapeService:
    """Access to a site's files in the scraper bucket."""

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        s3_client: S3StorageClient,
        storage_settings: StorageSettings,
    ) -> None:
        """
        Initialize scrape service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
            s3_client: Storage client
            storage_settings: Scraper bucket and presign expiry
        """
        self.db = db
        self.access_control = access_control
        self.s3_client = s3_client
        self.storage = storage_settings

    async def get_file_url(self, site_id: str, key: str | None) -> str:
        """
        Presigned download URL for one object of the scraper bucket.

        Args:
            site_id: Site UUID
            key: Object key

        Returns:
            str: URL valid for the configured expiry (7 days by default)

        Raises:
            ValidationError: Missing key or malformed site id
            NotFoundError: Unknown site or missing object
            UpstreamServiceError: Presigning failed
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        if not has_text(key):
            raise ValidationError("File key is required", field="key")
        await self.access_control.require_site_access(
            site_id, "Only users belonging to the organization can get files"
        )

        bucket = self.storage.scraper_bucket
        try:
            exists = await asyncio.to_thread(self.s3_client.object_exists, bucket, key)
            if not exists:
                raise NotFoundError("File not found", entity="file", entity_id=key)
            url, _ = await asyncio.to_thread(
                self.s3_client.generate_presigned_download_url,
                bucket,
                key,
                self.storage.presigned_url_expiry,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to generate pre-signed S3 URL for key: {key}: {e}")
            raise UpstreamServiceError(
                "Error occurred generating a pre-signed URL", service="s3"
            ) from e
        return url

    async def list_scraped_content(
        self,
        site_id: str,
        content_type: str,
        path: str | None = None,
        root_only: str | None = None,
        page_size: Any = None,
        page_token: str | None = None,
    ) -> dict[str, Any]:
        """
        List one page of a site's scraped content.

        Args:
            site_id: Site UUID
            content_type: scrapes, imports or accessibility
            path: Optional sub path below the site folder
            root_only: "true" lists a single folder level
            page_size: Page size (default 100)
            page_token: URL-encoded continuation token

        Returns:
            dict: {items: [{name, type, size, lastModified, key}], nextPageToken}
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        if content_type not in SCRAPED_CONTENT_TYPES:
            raise ValidationError(
                'Type must be either "scrapes" or "imports" or "accessibility"', field="type"
            )
        await self.access_control.require_site_access(
            site_id, "Only users belonging to the organization can get scraped content files"
        )

        prefix = build_s3_prefix(content_type, site_id, path or "")
        is_root_only = root_only == "true"
        size = int(page_size) if is_integer(page_size) and int(page_size) > 0 else DEFAULT_PAGE_SIZE

        try:
            result = await asyncio.to_thread(
                self.s3_client.list_objects,
                self.storage.scraper_bucket,
                prefix,
                ROOT_ONLY_PAGE_SIZE if is_root_only else size,
                unquote(page_token) if page_token else None,
                "/" if is_root_only else None,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to list S3 objects for site {site_id}: {e}")
            raise UpstreamServiceError("S3 error: Failed to list files", service="s3") from e

        items = []
        for obj in result["contents"]:
            name = obj["Key"][len(prefix):] if obj["Key"].startswith(prefix) else obj["Key"]
            if not name:
                continue
            items.append(
                ScrapedContentItem(
                    name=name,
                    type=file_extension(obj["Key"]),
                    size=obj.get("Size", 0),
                    last_modified=obj.get("LastModified"),
                    key=obj["Key"],
                )
            )

        next_token = result["next_token"]
        page = ScrapedContentPage(
            items=items,
            next_page_token=quote(next_token, safe="") if next_token else None,
        )
        return page.to_json()
