"""Shared filtering utilities for report feeds."""

from typing import Sequence

from disaster_intel.core import Report


def matches_tags(report: Report, tags: Sequence[str]) -> bool:
    """
    Check if a report is related to any of the given tags.

    Args:
        report: Report to check
        tags: Tags supplied by the caller

    Returns:
        True if any tag is found in a keyword or in the content (case-insensitive)
    """
    if not tags:
        return True  # No filtering if no tags provided

    keywords = [keyword.lower() for keyword in report.keywords]
    content = report.content.lower()

    for tag in tags:
        needle = tag.lower()
        if any(needle in keyword for keyword in keywords) or needle in content:
            return True
    return False
