"""
Data models for feed ingestion and the talks collection.

Provides the transient FeedEntry view of feed XML and the Pydantic
Episode, Talk and SearchItem records derived from it.
"""

from realm_talks.models.entities import (
    AudioSource,
    Episode,
    FeedEntry,
    SearchItem,
    Talk,
    normalize_tags,
)

__all__ = [
    "AudioSource",
    "Episode",
    "FeedEntry",
    "SearchItem",
    "Talk",
    "normalize_tags",
]
