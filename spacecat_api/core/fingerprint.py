"""
Suggestion fingerprinting.

Suggestions that point at the same page and the same source element are
remediated together. Groups are keyed by the exact (url, source) pair; the
fingerprint only names the S3 folder the fix generator writes to.

Dependencies: hashlib (stdlib)
System role: Grouping key for the accessibility fix pipeline
"""

import hashlib
from typing import Any, Iterable

FINGERPRINT_LENGTH = 16


def url_source_fingerprint(url: str, source: str) -> str:
    """
    Compute the stable fingerprint of a (url, source) pair.

    Args:
        url: Page URL of the suggestion
        source: Source element selector or identifier

    Returns:
        str: First 16 hex characters of md5("{url}_{source}")
    """
    digest = hashlib.md5(f"{url}_{source}".encode("utf-8")).hexdigest()
    return digest[:FINGERPRINT_LENGTH]


def group_by_fingerprint(
    suggestions: Iterable[Any],
) -> dict[tuple[str, str], dict[str, Any]]:
    """
    Group suggestions sharing a url and source.

    Suggestions missing either value are skipped.

    Args:
        suggestions: Objects exposing a ``data`` dict with url and source

    Returns:
        dict: (url, source) -> {"url", "source", "fingerprint", "suggestions"}
        in first-seen order
    """
    groups: dict[tuple[str, str], dict[str, Any]] = {}
    for suggestion in suggestions:
        data = suggestion.data or {}
        url = data.get("url")
        source = data.get("source")
        if not url or not source:
            continue
        group = groups.get((url, source))
        if group is None:
            group = groups[(url, source)] = {
                "url": url,
                "source": source,
                "fingerprint": url_source_fingerprint(url, source),
                "suggestions": [],
            }
        group["suggestions"].append(suggestion)
    return groups
