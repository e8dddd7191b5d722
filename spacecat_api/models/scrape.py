"""
Scraped content DTOs.

Dependencies: pydantic
System role: File and scrape listing API contracts
"""

from datetime import datetime

from spacecat_api.models.common import CamelModel


class ScrapedContentItem(CamelModel):
    """One listed object below a scraped-content prefix."""

    name: str
    type: str
    size: int
    last_modified: datetime | None = None
    key: str


class ScrapedContentPage(CamelModel):
    items: list[ScrapedContentItem]
    next_page_token: str | None = None
