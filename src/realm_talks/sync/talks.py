"""
Talks collection sync.

Fetches the channel feed and writes one JSON file per new video into the
talks collection. Existing talks are indexed by ``videoUrl``; any feed
entry whose URL is already present is skipped, which makes repeated runs
over an unchanged feed add nothing.

There is no locking: a single build process is expected to run the sync
at a time.

Example:
    >>> from realm_talks.sync.talks import sync_talks
    >>> result = sync_talks(config)
    >>> print(f"Added {len(result.added)} talks")
"""

import json
import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from pydantic import ValidationError

from realm_talks.config import Config, get_config
from realm_talks.errors import FeedParseError, FilesystemError
from realm_talks.ingestion.feed import entry_to_talk, fetch_entries
from realm_talks.models.entities import SearchItem, Talk

logger = logging.getLogger(__name__)

FILENAME_MAX_LENGTH = 50
TALK_EXTENSION = ".json"

# Progress statuses passed to a sync progress callback
STATUS_ADDED = "added"
STATUS_SKIPPED = "skipped"
STATUS_NO_LINK = "no_link"

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
#  Data models
# ---------------------------------------------------------------------------

@dataclass
class SyncedTalk:
    """A talk handled during a sync run; only added talks carry a file name and date."""

    title: str
    filename: str
    date: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass
class SyncResult:
    """
    Result of a talks sync run.

    Attributes:
        feed_url: Feed that was synced
        added: Talks written during this run
        skipped: Video URLs skipped because they already exist
        without_link: Titles of entries skipped because they have no link
        total_in_feed: Number of entries in the feed
        existing_count: Number of talks known before the run
    """

    feed_url: str = ""
    added: List[SyncedTalk] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    without_link: List[str] = field(default_factory=list)
    total_in_feed: int = 0
    existing_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "feed_url": self.feed_url,
            "added": [talk.to_dict() for talk in self.added],
            "skipped": self.skipped,
            "without_link": self.without_link,
            "total_in_feed": self.total_in_feed,
            "existing_count": self.existing_count,
            "added_count": len(self.added),
            "skipped_count": len(self.skipped),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
#  Collection storage
# ---------------------------------------------------------------------------

def talk_slug(title: str) -> str:
    """Lower-case, hyphenated form of a title."""
    return _SLUG_SEPARATORS.sub("-", title.lower()).strip("-")


def talk_filename(title: str) -> str:
    """
    File name for a talk, derived from its title.

    Example:
        >>> talk_filename("Azure AD: The Dragon's Keep!")
        'azure-ad-the-dragon-s-keep.json'
    """
    stem = talk_slug(title)[:FILENAME_MAX_LENGTH] or "untitled"
    return stem + TALK_EXTENSION


def _ensure_dir(talks_dir: Path) -> None:
    try:
        talks_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Cannot create talks directory {talks_dir}: {exc}") from exc


def _iter_talk_files(talks_dir: Path) -> Iterable[Path]:
    return sorted(talks_dir.glob(f"*{TALK_EXTENSION}"))


def load_existing_video_urls(talks_dir: Path) -> Set[str]:
    """
    Collect the videoUrl of every talk in the collection.

    Creates the directory when it does not exist yet. Files that are not
    valid JSON are logged and skipped.

    Args:
        talks_dir: Talks collection directory

    Returns:
        Set of known video URLs
    """
    if not talks_dir.exists():
        _ensure_dir(talks_dir)
        return set()

    urls: Set[str] = set()
    for path in _iter_talk_files(talks_dir):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to parse %s: %s", path.name, exc)
            continue
        if isinstance(data, dict) and data.get("videoUrl"):
            urls.add(data["videoUrl"])

    return urls


def load_talks(talks_dir: Path) -> Dict[str, Talk]:
    """
    Load every valid talk in the collection, keyed by file stem.

    Args:
        talks_dir: Talks collection directory

    Returns:
        Mapping of talk id to Talk
    """
    talks: Dict[str, Talk] = {}
    if not talks_dir.exists():
        return talks

    for path in _iter_talk_files(talks_dir):
        try:
            talks[path.stem] = Talk.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, OSError) as exc:
            logger.warning("Skipping invalid talk %s: %s", path.name, exc)

    return talks


def save_talk(talk: Talk, talks_dir: Path) -> str:
    """
    Write a talk to the collection.

    When the title-derived file name is already taken a numeric suffix is
    appended (``-2``, ``-3``, ...) so distinct videos sharing a title are
    all kept. The stem is shortened to make room for the suffix, so the
    name never exceeds ``FILENAME_MAX_LENGTH`` before the extension.

    Args:
        talk: Talk to persist
        talks_dir: Talks collection directory

    Returns:
        File name the talk was written to

    Raises:
        FilesystemError: If the directory or file cannot be written
    """
    _ensure_dir(talks_dir)

    filename = talk_filename(talk.title)
    stem = filename[: -len(TALK_EXTENSION)]
    suffix = 2
    while (talks_dir / filename).exists():
        logger.info("File %s already exists, trying another name", filename)
        tail = f"-{suffix}"
        filename = f"{stem[: FILENAME_MAX_LENGTH - len(tail)]}{tail}{TALK_EXTENSION}"
        suffix += 1

    path = talks_dir / filename
    try:
        path.write_text(talk.to_json(), encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Cannot write talk file {path}: {exc}") from exc

    return filename


# ---------------------------------------------------------------------------
#  Sync entry point
# ---------------------------------------------------------------------------

def sync_talks(
    config: Optional[Config] = None,
    feed_url: Optional[str] = None,
    progress_callback: Optional[Callable[[str, SyncedTalk], None]] = None,
) -> SyncResult:
    """
    Add every feed video that is not yet in the talks collection.

    Entries without a link are skipped with a warning: they cannot be
    matched against existing talks on later runs.

    Args:
        config: Application Config object (optional, uses default if None)
        feed_url: Feed to sync (default: the configured feed)
        progress_callback: Optional callback invoked as each entry is
            handled (status, talk). ``talk.filename`` is empty unless the
            status is ``STATUS_ADDED``.

    Returns:
        SyncResult describing added and skipped talks

    Raises:
        NetworkError: If the feed cannot be fetched
        FilesystemError: If the collection cannot be written
    """
    if config is None:
        config = get_config()

    feed_url = feed_url or config.resolved_feed_url
    result = SyncResult(feed_url=feed_url)

    try:
        entries = fetch_entries(feed_url, timeout=config.request_timeout)
    except FeedParseError as exc:
        logger.warning("%s; treating feed as empty", exc)
        entries = []
    result.total_in_feed = len(entries)

    known_urls = load_existing_video_urls(config.talks_dir)
    result.existing_count = len(known_urls)

    def report(status: str, talk: SyncedTalk) -> None:
        if progress_callback:
            progress_callback(status, talk)

    for entry in entries:
        if not entry.link:
            logger.warning("Skipping %r (%s): entry has no link", entry.title, entry.id)
            result.without_link.append(entry.title)
            report(STATUS_NO_LINK, SyncedTalk(title=entry.title, filename="", date="", url=""))
            continue

        if entry.link in known_urls:
            logger.debug("Skipping %s (already exists: %s)", entry.title, entry.link)
            result.skipped.append(entry.link)
            report(
                STATUS_SKIPPED,
                SyncedTalk(title=entry.title, filename="", date="", url=entry.link),
            )
            continue

        talk = entry_to_talk(entry, config)
        filename = save_talk(talk, config.talks_dir)
        known_urls.add(entry.link)

        synced = SyncedTalk(
            title=talk.title,
            filename=filename,
            date=talk.date.isoformat(),
            url=talk.video_url,
        )
        result.added.append(synced)
        logger.info("Added talk %s -> %s", talk.title, filename)
        report(STATUS_ADDED, synced)

    return result


# ---------------------------------------------------------------------------
#  Search index
# ---------------------------------------------------------------------------

def build_search_index(talks: Dict[str, Talk]) -> List[SearchItem]:
    """
    Build search items for the talks collection.

    Args:
        talks: Mapping of talk id to Talk, as returned by ``load_talks``

    Returns:
        One SearchItem per talk
    """
    return [
        SearchItem(
            type="talk",
            title=talk.title,
            description=f"{talk.event}: {talk.summary}",
            url=f"/talks/#{talk_id}",
            date=talk.date,
            tags=talk.tags,
        )
        for talk_id, talk in talks.items()
    ]
