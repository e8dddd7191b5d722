"""
S3 key helpers.

Dependencies: None (pure domain layer)
System role: Key layout for scraped content, reports and fixes
"""

import posixpath

SCRAPED_CONTENT_TYPES = ("scrapes", "imports", "accessibility")


def build_s3_prefix(content_type: str, site_id: str, path: str = "") -> str:
    """
    Build the listing prefix for a site's scraped content.

    Args:
        content_type: One of scrapes, imports, accessibility
        site_id: Site UUID
        path: Optional sub path; surrounding slashes are ignored

    Returns:
        str: Prefix ending in '/', e.g. ``scrapes/{siteId}/blog/``
    """
    normalized = (path or "").strip("/")
    if normalized:
        return f"{content_type}/{site_id}/{normalized}/"
    return f"{content_type}/{site_id}/"


def fixes_prefix(site_id: str, fingerprint: str) -> str:
    """Folder holding generated fixes for one suggestion group."""
    return f"fixes/{site_id}/{fingerprint}/"


def assets_folder_for_report(report_key: str) -> str:
    """Sibling assets folder of a fix report.json key."""
    return report_key[: -len("report.json")] + "assets/"


def report_storage_path(site_id: str, report_type: str, report_id: str) -> str:
    return f"reports/{site_id}/{report_type}/{report_id}/"


def file_extension(key: str) -> str:
    """Extension of an object key without the dot, or '' when there is none."""
    _, ext = posixpath.splitext(key)
    return ext[1:] if ext else ""
