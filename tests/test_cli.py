"""
Tests for the realm-talks command-line interface.

Runs ``main()`` with patched ``sys.argv`` and checks printed output and
exit codes.
"""

import io
import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from realm_talks.cli import main
from realm_talks.errors import FilesystemError, NetworkError
from realm_talks.ingestion.feed import fallback_episodes
from realm_talks.sync.talks import (
    STATUS_ADDED,
    STATUS_NO_LINK,
    STATUS_SKIPPED,
    SyncedTalk,
    SyncResult,
)


def _run(*argv):
    with patch("sys.argv", ["realm-talks", *argv]):
        main()


ADDED_TALK = SyncedTalk(
    title="Dragons of Azure",
    filename="dragons-of-azure.json",
    date="2024-01-15",
    url="https://www.youtube.com/watch?v=aaa",
)
SKIPPED_TALK = SyncedTalk(
    title="Old Castle Walls",
    filename="",
    date="",
    url="https://www.youtube.com/watch?v=old",
)


class TestSyncCommand:
    """Tests for ``realm-talks sync``."""

    @patch("realm_talks.sync.talks.sync_talks")
    @patch("realm_talks.cli.get_config")
    def test_prints_progress(self, mock_config, mock_sync, test_config, capsys):
        mock_config.return_value = test_config

        def fake_sync(config, progress_callback=None):
            progress_callback(STATUS_SKIPPED, SKIPPED_TALK)
            progress_callback(STATUS_ADDED, ADDED_TALK)
            return SyncResult(
                feed_url=test_config.feed_url,
                added=[ADDED_TALK],
                skipped=[SKIPPED_TALK.url],
                total_in_feed=2,
                existing_count=1,
            )

        mock_sync.side_effect = fake_sync

        _run("sync")

        out = capsys.readouterr().out
        assert f"Fetching feed from: {test_config.feed_url}" in out
        assert "Found 2 videos in feed" in out
        assert "Found 1 existing talks" in out
        assert "Added: Dragons of Azure" in out
        assert "File: dragons-of-azure.json" in out
        assert "Skipping: Old Castle Walls (already exists)" in out
        assert "Added: 1 new talks" in out
        assert "Skipped: 1 existing talks" in out
        assert "Total in feed: 2" in out
        assert out.index("Skipping: Old Castle Walls") < out.index("Added: Dragons of Azure")

    @patch("realm_talks.sync.talks.sync_talks")
    @patch("realm_talks.cli.get_config")
    def test_reports_entries_without_link(self, mock_config, mock_sync, test_config, capsys):
        mock_config.return_value = test_config

        def fake_sync(config, progress_callback=None):
            progress_callback(STATUS_NO_LINK, SyncedTalk(title="No Link", filename="", date="", url=""))
            return SyncResult(feed_url=test_config.feed_url, without_link=["No Link"], total_in_feed=1)

        mock_sync.side_effect = fake_sync

        _run("sync")

        out = capsys.readouterr().out
        assert "Skipping: No Link (no video link)" in out
        assert "Skipped: 1 videos without a link" in out

    @pytest.mark.parametrize("error", [NetworkError("offline"), FilesystemError("read-only")])
    @patch("realm_talks.sync.talks.sync_talks")
    @patch("realm_talks.cli.get_config")
    def test_failure_exits_non_zero(self, mock_config, mock_sync, error, test_config, capsys):
        mock_config.return_value = test_config
        mock_sync.side_effect = error

        with pytest.raises(SystemExit) as exc_info:
            _run("sync")

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "ERROR: Error syncing YouTube talks" in captured.err
        assert "ERROR" not in captured.out

    @patch("realm_talks.sync.talks.sync_talks")
    @patch("realm_talks.cli.get_config")
    def test_talks_written_before_failure_are_reported(self, mock_config, mock_sync, test_config, capsys):
        """A talk saved before a later write fails still shows up in the output."""
        mock_config.return_value = test_config

        def fail_midway(config, progress_callback=None):
            progress_callback(STATUS_ADDED, ADDED_TALK)
            raise FilesystemError("disk full")

        mock_sync.side_effect = fail_midway

        with pytest.raises(SystemExit):
            _run("sync")

        captured = capsys.readouterr()
        assert "Added: Dragons of Azure" in captured.out
        assert "File: dragons-of-azure.json" in captured.out
        assert "disk full" in captured.err


class TestEpisodesCommand:
    """Tests for ``realm-talks episodes``."""

    @patch("realm_talks.ingestion.feed.get_all_episodes")
    @patch("realm_talks.cli.get_config")
    def test_human_output(self, mock_config, mock_episodes, test_config, capsys):
        mock_config.return_value = test_config
        mock_episodes.return_value = fallback_episodes()

        _run("episodes")

        out = capsys.readouterr().out
        assert "Found 1 episode(s)" in out
        assert "[2024-01-01] Welcome to Securing the Realm (id=1)" in out

    @patch("realm_talks.ingestion.feed.get_all_episodes")
    @patch("realm_talks.cli.get_config")
    def test_json_output(self, mock_config, mock_episodes, test_config, capsys):
        mock_config.return_value = test_config
        mock_episodes.return_value = fallback_episodes()

        _run("episodes", "--output-json")

        data = json.loads(capsys.readouterr().out)
        assert data[0]["id"] == 1
        assert data[0]["audio"] == {"src": "https://example.com", "type": "video/mp4"}
        assert datetime.fromisoformat(data[0]["published"].replace("Z", "+00:00")) == datetime(
            2024, 1, 1, tzinfo=timezone.utc
        )

    @patch("realm_talks.ingestion.feed.get_all_episodes")
    @patch("realm_talks.cli.get_config")
    def test_no_episodes(self, mock_config, mock_episodes, test_config, capsys):
        mock_config.return_value = test_config
        mock_episodes.return_value = []

        _run("episodes")

        assert "No episodes found." in capsys.readouterr().out


class TestChaptersCommand:
    """Tests for ``realm-talks chapters``."""

    def test_reads_file(self, temp_dir, capsys):
        path = temp_dir / "description.txt"
        path.write_text("Intro\n\nChapters\n00:00 Start\n01:05 Middle\n\nOutro", encoding="utf-8")

        _run("chapters", str(path))

        out = capsys.readouterr().out
        assert "Intro" in out
        assert "Start  (0s)" in out
        assert "Middle  (65s)" in out
        assert "Outro" in out

    def test_reads_stdin(self, capsys):
        with patch("sys.stdin", io.StringIO("Just text")):
            _run("chapters")

        out = capsys.readouterr().out
        assert "Just text" in out
        assert "Chapters:" not in out

    def test_empty_description(self, capsys):
        with patch("sys.stdin", io.StringIO("   \n")):
            _run("chapters")

        assert "Description is empty." in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        _run()

    assert exc_info.value.code == 0
    assert "realm-talks" in capsys.readouterr().out
