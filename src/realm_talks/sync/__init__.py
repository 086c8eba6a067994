"""
Talks collection sync.

Writes new videos from the channel feed into the talks collection,
de-duplicating by video URL, and builds the talks search index.
"""

from realm_talks.sync.talks import SyncResult, build_search_index, load_talks, sync_talks

__all__ = ["SyncResult", "build_search_index", "load_talks", "sync_talks"]
