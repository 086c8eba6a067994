"""
Command-line interface for the realm-talks content tooling.

Usage:
    realm-talks sync                    # Add new channel videos to the talks collection
    realm-talks episodes                # List episodes from the channel feed
    realm-talks episodes --output-json  # JSON output for build scripts
    realm-talks chapters FILE           # Split a description into prose and chapters
"""

import argparse
import json
import logging
import sys

from realm_talks.config import get_config
from realm_talks.errors import FilesystemError, NetworkError

RULE = "─" * 60


def _print_sync_progress(status, talk):
    from realm_talks.sync.talks import STATUS_ADDED, STATUS_SKIPPED

    if status == STATUS_ADDED:
        print(f"Added: {talk.title}")
        print(f"   File: {talk.filename}")
        print(f"   Date: {talk.date}")
        print(f"   URL: {talk.url}")
        print()
    elif status == STATUS_SKIPPED:
        print(f"Skipping: {talk.title} (already exists)")
    else:
        print(f"Skipping: {talk.title} (no video link)")


def cmd_sync(args):
    """Sync channel videos into the talks collection."""
    from realm_talks.sync.talks import sync_talks

    config = get_config()
    print("Syncing YouTube videos to talks collection...")
    print()
    print(f"Fetching feed from: {config.resolved_feed_url}")
    print()

    try:
        result = sync_talks(config, progress_callback=_print_sync_progress)
    except (NetworkError, FilesystemError) as exc:
        print(f"ERROR: Error syncing YouTube talks: {exc}", file=sys.stderr)
        sys.exit(1)

    print(RULE)
    print("Sync complete!")
    print(f"   Found {result.total_in_feed} videos in feed")
    print(f"   Found {result.existing_count} existing talks")
    print(f"   Added: {len(result.added)} new talks")
    print(f"   Skipped: {len(result.skipped)} existing talks")
    if result.without_link:
        print(f"   Skipped: {len(result.without_link)} videos without a link")
    print(f"   Total in feed: {result.total_in_feed}")
    print(RULE)


def cmd_episodes(args):
    """List episodes from the channel feed."""
    from realm_talks.ingestion.feed import get_all_episodes

    episodes = get_all_episodes(get_config())

    if args.output_json:
        payload = [episode.model_dump(mode="json") for episode in episodes]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not episodes:
        print("No episodes found.")
        return

    print(f"Found {len(episodes)} episode(s):")
    for episode in episodes:
        print(f"  - [{episode.published.date().isoformat()}] {episode.title} (id={episode.id})")
        print(f"    {episode.url}")


def cmd_chapters(args):
    """Split a description into prose and chapters."""
    from realm_talks.text.chapters import segment

    description = args.file.read()
    result = segment(description)

    if not result:
        print("Description is empty.")
        return

    if result.pre_text:
        print(result.pre_text)
        print()

    if result.chapter_lines:
        print("Chapters:")
        for chapter in result.chapters:
            print(f"  {chapter.timestamp:>8}  {chapter.label}  ({chapter.seconds}s)")
        print()

    if result.post_text:
        print(result.post_text)


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        prog="realm-talks",
        description="Securing the Realm content tooling -- sync and inspect channel videos",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # sync
    sub_sync = subparsers.add_parser("sync", help="Add new channel videos to the talks collection")
    sub_sync.set_defaults(func=cmd_sync)

    # episodes
    sub_episodes = subparsers.add_parser("episodes", help="List episodes from the channel feed")
    sub_episodes.add_argument(
        "--output-json",
        action="store_true",
        default=False,
        help="Output episodes as JSON",
    )
    sub_episodes.set_defaults(func=cmd_episodes)

    # chapters
    sub_chapters = subparsers.add_parser(
        "chapters",
        help="Split a video description into prose and chapters",
    )
    sub_chapters.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Description file (default: stdin)",
    )
    sub_chapters.set_defaults(func=cmd_chapters)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()
