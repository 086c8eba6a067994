"""
YouTube URL helpers.

Extracts video ids from watch and short links and builds privacy-enhanced
embed URLs for the episode pages.
"""

from typing import Optional
from urllib.parse import parse_qs, urlparse

EMBED_BASE_URL = "https://www.youtube-nocookie.com/embed/"


def get_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the video id from a YouTube URL.

    Supports ``https://youtu.be/<id>`` short links and
    ``https://www.youtube.com/watch?v=<id>`` watch URLs.

    Args:
        url: YouTube video URL

    Returns:
        Video id, or None if the URL is not a recognised YouTube link

    Example:
        >>> get_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> get_video_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    if not url:
        return None

    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    hostname = parsed.hostname or ""

    if hostname == "youtu.be":
        video_id = parsed.path.lstrip("/")
        return video_id or None

    if "youtube.com" in hostname:
        values = parse_qs(parsed.query).get("v")
        if values and values[0]:
            return values[0]

    return None


def get_embed_url(url: Optional[str]) -> Optional[str]:
    """Return the youtube-nocookie embed URL for a video URL, or None."""
    video_id = get_video_id(url)
    if video_id is None:
        return None
    return f"{EMBED_BASE_URL}{video_id}"
