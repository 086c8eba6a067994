"""Description text processing: chapter segmentation and cleanup."""

from realm_talks.text.chapters import (
    Chapter,
    SegmentedDescription,
    parse_chapter_line,
    sanitize_description,
    segment,
)

__all__ = [
    "Chapter",
    "SegmentedDescription",
    "parse_chapter_line",
    "sanitize_description",
    "segment",
]
