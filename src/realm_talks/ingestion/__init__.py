"""
Ingestion module for YouTube feed fetching and normalization.

Provides feed fetching, per-field fallbacks and the mapping from feed
entries to Episode and Talk records.
"""

from realm_talks.ingestion.feed import (
    FieldResult,
    entry_to_talk,
    fetch_entries,
    get_all_episodes,
    get_episode,
    normalize,
    summarize,
)
from realm_talks.ingestion.youtube import get_embed_url, get_video_id

__all__ = [
    "FieldResult",
    "entry_to_talk",
    "fetch_entries",
    "get_all_episodes",
    "get_episode",
    "normalize",
    "summarize",
    "get_embed_url",
    "get_video_id",
]
