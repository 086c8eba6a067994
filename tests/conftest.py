"""
Shared test fixtures.

Provides pytest fixtures for common test resources including:
- Temporary directories
- Test configuration pointing at a temporary talks collection
- A sample YouTube Atom feed
"""

import tempfile
from pathlib import Path

import pytest

from realm_talks.config import Config

FEED_URL = "https://www.youtube.com/feeds/videos.xml?channel_id=UCtest"

SAMPLE_FEED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015"
      xmlns:media="http://search.yahoo.com/mrss/"
      xmlns="http://www.w3.org/2005/Atom">
  <id>yt:channel:UCtest</id>
  <title>Securing the Realm</title>
  <entry>
    <id>yt:video:vid001</id>
    <yt:videoId>vid001</yt:videoId>
    <title>Dragons of Azure</title>
    <link rel="alternate" href="https://www.youtube.com/watch?v=vid001"/>
    <published>2024-01-15T10:00:00+00:00</published>
    <updated>2024-01-16T10:00:00+00:00</updated>
    <media:group>
      <media:title>Dragons of Azure</media:title>
      <media:description>Intro to identity.</media:description>
    </media:group>
  </entry>
  <entry>
    <id>yt:video:vid002</id>
    <yt:videoId>vid002</yt:videoId>
    <title>The Keep Walls</title>
    <link rel="alternate" href="https://www.youtube.com/watch?v=vid002"/>
    <published>2024-02-01T08:30:00+00:00</published>
    <updated>2024-02-01T08:30:00+00:00</updated>
  </entry>
</feed>
"""


@pytest.fixture
def temp_dir():
    """
    Create temporary directory for test files.

    Yields:
        Path: Temporary directory path
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """
    Create test configuration with a temporary talks directory.

    Args:
        temp_dir: Temporary directory fixture

    Returns:
        Config: Test configuration
    """
    return Config(
        feed_url=FEED_URL,
        talks_dir=temp_dir / "talks",
        request_timeout=5,
    )


@pytest.fixture
def sample_feed_xml() -> bytes:
    """Raw Atom feed with two video entries."""
    return SAMPLE_FEED_XML
