"""
YouTube feed fetching and episode normalization.

Fetches a channel or playlist Atom feed, parses it with feedparser and maps
each entry to an Episode (episode pages) or a Talk (talks collection).

Field extraction never aborts a batch: a malformed id becomes ``0``, a
missing or invalid date becomes the current time and a missing description
becomes the empty string. Each of these goes through a ``FieldResult`` so
callers can tell the fallback path from the success path.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

import feedparser
import requests
from dateutil import parser as date_parser

from realm_talks.config import Config, get_config
from realm_talks.errors import FeedParseError, FieldError, NetworkError
from realm_talks.models.entities import AudioSource, Episode, FeedEntry, Talk

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------

REQUEST_TIMEOUT = 10  # seconds
SUMMARY_MAX_LENGTH = 200
ELLIPSIS = "..."
USER_AGENT = "realm-talks/0.1 (+https://www.youtube.com)"

_NON_DIGITS = re.compile(r"\D")


# ---------------------------------------------------------------------------
#  Field results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldResult:
    """
    Outcome of extracting one field from a feed entry.

    Attributes:
        value: Extracted value, or the default when ``fallback`` is True
        fallback: True when the default was substituted
        error: Why the default was used
    """

    value: Any
    fallback: bool = False
    error: Optional[FieldError] = None


# ---------------------------------------------------------------------------
#  Fetching
# ---------------------------------------------------------------------------

def fetch_entries(feed_url: str, timeout: float = REQUEST_TIMEOUT) -> List[FeedEntry]:
    """
    Fetch a feed over HTTP and parse its entries.

    Args:
        feed_url: URL of the Atom feed
        timeout: Request timeout in seconds

    Returns:
        List of FeedEntry objects; empty when the feed has no entries

    Raises:
        NetworkError: Non-2xx response, timeout or connection failure
        FeedParseError: Body is not a parseable feed

    Example:
        >>> entries = fetch_entries(
        ...     "https://www.youtube.com/feeds/videos.xml?channel_id=UC..."
        ... )
        >>> print(entries[0].title)
    """
    try:
        response = requests.get(
            feed_url,
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.exceptions.Timeout as exc:
        raise NetworkError(f"Timed out after {timeout}s fetching {feed_url}") from exc
    except requests.exceptions.HTTPError as exc:
        raise NetworkError(f"Failed to fetch feed {feed_url}: {exc}") from exc
    except requests.exceptions.RequestException as exc:
        raise NetworkError(f"Request for feed {feed_url} failed: {exc}") from exc

    feed = feedparser.parse(response.content)

    if feed.bozo and not feed.entries:
        raise FeedParseError(f"Failed to parse feed {feed_url}: {feed.bozo_exception}")

    if not feed.entries:
        logger.warning("No entries found in feed %s", feed_url)
        return []

    entries = [FeedEntry.from_feedparser(entry) for entry in feed.entries]
    logger.info("Parsed %d entries from %s", len(entries), feed_url)
    return entries


# ---------------------------------------------------------------------------
#  Field extraction
# ---------------------------------------------------------------------------

def parse_video_id(raw_id: Optional[str]) -> int:
    """
    Derive the numeric episode id from a feed entry id.

    Takes the segment after the last ``:``, strips every non-digit and
    parses the rest. Returns 0 when no digits remain.

    Example:
        >>> parse_video_id("yt:video:12345")
        12345
        >>> parse_video_id("yt:video:abc")
        0
    """
    if not raw_id:
        return 0
    digits = _NON_DIGITS.sub("", raw_id.split(":")[-1])
    return int(digits) if digits else 0


def parse_published(raw: Optional[str], now: Optional[datetime] = None) -> FieldResult:
    """
    Parse a publication timestamp, substituting the current time on failure.

    Naive timestamps are taken as UTC so every returned value is
    timezone-aware.

    Args:
        raw: Timestamp string from the feed (ISO-8601 for YouTube)
        now: Fallback value; defaults to the current UTC time

    Returns:
        FieldResult holding a timezone-aware datetime
    """
    if now is None:
        now = datetime.now(timezone.utc)

    if not raw or not str(raw).strip():
        error = FieldError("published", "missing publication date")
        logger.warning("%s, using current time", error)
        return FieldResult(value=now, fallback=True, error=error)

    try:
        parsed = date_parser.parse(str(raw))
    except (ValueError, OverflowError) as exc:
        error = FieldError("published", f"invalid date {raw!r} ({exc})")
        logger.warning("%s, using current time", error)
        return FieldResult(value=now, fallback=True, error=error)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return FieldResult(value=parsed)


def extract_description(entry: FeedEntry) -> FieldResult:
    """Return the media description of an entry, or an empty string."""
    if entry.media_description:
        return FieldResult(value=entry.media_description)
    error = FieldError("description", "no media:description")
    logger.warning("Entry %r has %s", entry.title, error)
    return FieldResult(value="", fallback=True, error=error)


def summarize(description: str, limit: int = SUMMARY_MAX_LENGTH) -> str:
    """
    Shorten a description for use as a summary.

    Descriptions longer than ``limit`` are cut and end with ``...`` so the
    result is exactly ``limit`` characters; shorter ones are returned as is.
    """
    if len(description) <= limit:
        return description
    return description[: limit - len(ELLIPSIS)] + ELLIPSIS


# ---------------------------------------------------------------------------
#  Normalization
# ---------------------------------------------------------------------------

def normalize(entry: FeedEntry, tags: Optional[List[str]] = None) -> Episode:
    """
    Map a feed entry to an Episode.

    Never raises for bad field values; defaults are applied per field.

    Args:
        entry: Parsed feed entry
        tags: Tags to attach (default: none)

    Returns:
        Normalized Episode
    """
    published = parse_published(entry.published)
    description = extract_description(entry).value

    return Episode(
        id=parse_video_id(entry.id),
        title=entry.title,
        published=published.value,
        description=description,
        content=description,
        url=entry.link,
        audio=AudioSource(src=entry.link),
        tags=list(tags or []),
    )


def entry_to_talk(entry: FeedEntry, config: Config) -> Talk:
    """
    Map a feed entry to a Talk for the talks collection.

    The talk date is the UTC calendar date of the publication time.

    Args:
        entry: Parsed feed entry
        config: Application config providing event name, tags and summary
            defaults

    Returns:
        Talk ready to be saved
    """
    published = parse_published(entry.published).value
    description = extract_description(entry).value
    summary = summarize(description, config.summary_max_length)

    return Talk(
        title=entry.title,
        date=published.astimezone(timezone.utc).date(),
        event=config.event_name,
        video_url=entry.link,
        summary=summary or config.default_summary,
        tags=list(config.default_tags),
    )


# ---------------------------------------------------------------------------
#  Render-time episode listing
# ---------------------------------------------------------------------------

def fallback_episodes() -> List[Episode]:
    """Placeholder episodes used when the feed cannot be fetched."""
    description = "Welcome to our podcast about cybersecurity and technology."
    return [
        Episode(
            id=1,
            title="Welcome to Securing the Realm",
            published=datetime(2024, 1, 1, tzinfo=timezone.utc),
            description=description,
            content=description,
            url="https://example.com",
            audio=AudioSource(src="https://example.com"),
        )
    ]


def get_all_episodes(config: Optional[Config] = None) -> List[Episode]:
    """
    Fetch and normalize every episode of the configured feed.

    Network failures are logged and answered with ``fallback_episodes()``
    so the site stays renderable. A feed that cannot be parsed yields no
    episodes.

    Args:
        config: Application Config object (optional, uses default if None)

    Returns:
        List of Episode objects in feed order
    """
    if config is None:
        config = get_config()

    feed_url = config.resolved_feed_url
    try:
        entries = fetch_entries(feed_url, timeout=config.request_timeout)
    except NetworkError as exc:
        logger.error("Failed to fetch episodes: %s", exc)
        logger.warning("Using fallback episodes due to network error")
        return fallback_episodes()
    except FeedParseError as exc:
        logger.warning("%s; treating feed as empty", exc)
        return []

    return [normalize(entry, tags=config.default_tags) for entry in entries]


def get_episode(episode_id: Any, episodes: List[Episode]) -> Optional[Episode]:
    """
    Find an episode by id.

    Ids are compared in string form so route parameters such as ``"42"``
    match directly.
    """
    wanted = str(episode_id)
    for episode in episodes:
        if str(episode.id) == wanted:
            return episode
    return None
