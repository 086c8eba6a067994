"""
Configuration management for the realm-talks content tooling.

Provides centralized configuration using Pydantic for validation and
environment variable support. Supports site.yaml for per-site settings.
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "REALM_TALKS_"

DEFAULT_CHANNEL_ID = "UCS4KTDaZTiyiMj2yZztwmlg"
FEED_URL_TEMPLATE = "https://www.youtube.com/feeds/videos.xml?channel_id={channel_id}"

# Default content path, relative to the directory the build runs in
TALKS_SUBDIR = Path("src") / "content" / "talks"


def load_site_yaml(search_dir: Optional[Path] = None) -> dict:
    """
    Load site.yaml configuration file.

    Searches for site.yaml starting from search_dir (or the current
    working directory) and walking up to 3 parent directories.

    Args:
        search_dir: Directory to start searching from

    Returns:
        Dictionary with site.yaml contents, or empty dict if not found
    """
    start = search_dir or Path.cwd()
    for parent in [start] + list(start.parents)[:3]:
        candidate = parent / "site.yaml"
        if candidate.exists():
            with open(candidate, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
    return {}


class Config(BaseSettings):
    """
    Application configuration with environment variable support.

    Configuration can be provided via:
    1. Environment variables (prefixed with REALM_TALKS_)
    2. .env file
    3. site.yaml
    4. Default values

    Example:
        export REALM_TALKS_CHANNEL_ID="UCxxxxxxxxxxxxxxxxxxxxxx"
        export REALM_TALKS_TALKS_DIR="/custom/path/talks"
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Feed source
    channel_id: str = Field(
        default=DEFAULT_CHANNEL_ID,
        description="YouTube channel whose feed is synced"
    )
    feed_url: str = Field(
        default="",
        description="Feed URL; derived from channel_id when empty"
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout in seconds for feed requests"
    )

    # Talks collection
    talks_dir: Path = Field(
        default_factory=lambda: Path.cwd() / TALKS_SUBDIR,
        description="Directory holding one JSON file per talk (default: ./src/content/talks)"
    )
    event_name: str = Field(
        default="YouTube - Securing the Realm",
        description="Event label written into synced talks"
    )
    default_summary: str = Field(
        default="A video from the Securing the Realm YouTube channel.",
        description="Summary used when a video has no description"
    )
    default_tags: List[str] = Field(
        default_factory=lambda: ["YouTube", "Video"],
        description="Tags attached to synced talks and episodes"
    )
    summary_max_length: int = Field(
        default=200,
        ge=4,
        description="Maximum summary length including the ellipsis"
    )

    @property
    def resolved_feed_url(self) -> str:
        """Feed URL, falling back to the channel feed for channel_id."""
        return self.feed_url or FEED_URL_TEMPLATE.format(channel_id=self.channel_id)


def get_config(search_dir: Optional[Path] = None) -> Config:
    """
    Get the application configuration instance.

    Merges settings from environment variables, .env file,
    and site.yaml (if present). Environment variables win over
    site.yaml values.

    Args:
        search_dir: Directory to start the site.yaml search from

    Returns:
        Config: Application configuration
    """
    yaml_config = load_site_yaml(search_dir)
    section = yaml_config.get("talks", yaml_config)
    if not isinstance(section, dict):
        section = {}

    overrides = {
        key: value
        for key, value in section.items()
        if key in Config.model_fields and f"{ENV_PREFIX}{key.upper()}" not in os.environ
    }
    return Config(**overrides)
