"""
Data models for feed entries, episodes, talks and search items.

FeedEntry is a transient view of one Atom <entry> during a single ingestion
pass. Episode and Talk are the normalized records built from it: Episode
backs the episode pages, Talk is persisted into the talks collection.
"""

import datetime as dt
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_tags(tags: List[str]) -> List[str]:
    """
    Strip, drop empty and de-duplicate tags case-insensitively.

    The first spelling seen for a tag is kept, so ``["YouTube", "youtube"]``
    becomes ``["YouTube"]``.

    Args:
        tags: Raw tag strings

    Returns:
        Ordered list of unique tags
    """
    seen = set()
    normalized: List[str] = []
    for tag in tags:
        cleaned = tag.strip()
        key = cleaned.casefold()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        normalized.append(cleaned)
    return normalized


@dataclass
class FeedEntry:
    """
    One <entry> of a YouTube Atom feed.

    Attributes:
        id: Entry id, formatted ``prefix:videoId`` (e.g. ``yt:video:abc123``)
        title: Video title
        published: Raw publication timestamp string, possibly empty
        link: Watch URL from the alternate link href
        media_description: Text of media:group/media:description, if any
    """

    id: str
    title: str
    published: str = ""
    link: str = ""
    media_description: Optional[str] = None

    @classmethod
    def from_feedparser(cls, entry: Any) -> "FeedEntry":
        """Build a FeedEntry from a feedparser entry object."""
        description = entry.get("media_description")
        if description is None:
            description = entry.get("summary")
        return cls(
            id=entry.get("id") or "",
            title=entry.get("title") or "",
            published=entry.get("published") or "",
            link=entry.get("link") or "",
            media_description=description,
        )


class AudioSource(BaseModel):
    """Playable media reference for an episode."""
    src: str
    type: str = "video/mp4"


class Episode(BaseModel):
    """
    Episode data model.

    Represents one video of the channel as shown on the episode pages.
    ``content`` mirrors ``description``; the feed carries no separate
    long-form body.
    """
    id: int = 0
    title: str
    published: dt.datetime
    description: str = ""
    content: str = ""
    url: str = ""
    audio: AudioSource
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)


class Talk(BaseModel):
    """
    Talk record persisted as one JSON file in the talks collection.

    On disk the URL fields use camelCase keys (``videoUrl``, ``slidesUrl``).
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    date: dt.date
    event: str
    video_url: str = Field(default="", alias="videoUrl")
    slides_url: Optional[str] = Field(default=None, alias="slidesUrl")
    summary: str
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk dictionary layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize with two-space indentation and a trailing newline."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"


class SearchItem(BaseModel):
    """Entry of the site search index."""
    type: str = "talk"
    title: str
    description: str
    url: str
    date: Optional[dt.date] = None
    tags: List[str] = Field(default_factory=list)
