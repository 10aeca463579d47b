"""Tests for CLI main module."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from liked_sync.cli.main import cli
from liked_sync.core.config import Settings
from liked_sync.core.exceptions import AuthError, RetrievalError, SyncError
from liked_sync.core.models import SyncSummary, TokenInfo


@pytest.fixture(autouse=True)
def cli_settings(settings: Settings):
    """Use test settings instead of the environment."""
    with patch("liked_sync.cli.main.get_settings", return_value=settings):
        yield settings


class TestCli:
    """Tests for main CLI group."""

    def test_cli_help(self) -> None:
        """Test CLI shows help."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Liked Sync" in result.output

    def test_cli_version(self) -> None:
        """Test CLI shows version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "liked-sync" in result.output


class TestAuthUrl:
    """Tests for auth-url command."""

    def test_prints_authorize_url(self) -> None:
        """Test the authorization URL is printed."""
        runner = CliRunner()
        result = runner.invoke(cli, ["auth-url", "--state", "xyz"])

        assert result.exit_code == 0
        assert "https://accounts.spotify.com/authorize?" in result.output
        assert "client_id=test_client_id" in result.output
        assert "state=xyz" in result.output


class TestSyncCommand:
    """Tests for sync command."""

    def test_sync_with_access_tokens_json(self) -> None:
        """Test raw access tokens are passed straight to the sync."""
        summary = SyncSummary.completed(added=2, source_songs=4, target_songs_before=3)

        with patch("liked_sync.cli.main.LikedSongsSync") as mock_sync:
            mock_sync.return_value.sync = AsyncMock(return_value=summary)
            runner = CliRunner()
            result = runner.invoke(cli, ["sync", "--source-token", "src", "--target-token", "dst", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "message": "Sync completed successfully!",
            "added": 2,
            "sourceSongs": 4,
            "targetSongs": 5,
        }
        mock_sync.return_value.sync.assert_awaited_once_with("src", "dst")

    def test_sync_exchanges_codes_and_refresh_tokens(self) -> None:
        """Test codes and refresh tokens are exchanged before syncing."""
        with (
            patch("liked_sync.cli.main.SpotifyClient") as mock_client,
            patch("liked_sync.cli.main.LikedSongsSync") as mock_sync,
        ):
            mock_client.return_value.exchange_code = AsyncMock(return_value=TokenInfo(access_token="src-access"))
            mock_client.return_value.refresh_token = AsyncMock(return_value=TokenInfo(access_token="dst-access"))
            mock_sync.return_value.sync = AsyncMock(return_value=SyncSummary.already_in_sync())

            runner = CliRunner()
            result = runner.invoke(
                cli,
                ["sync", "--source-code", "code1", "--target-refresh-token", "refresh2"],
            )

        assert result.exit_code == 0
        assert "Accounts are already in sync!" in result.output
        mock_client.return_value.exchange_code.assert_awaited_once_with("code1")
        mock_client.return_value.refresh_token.assert_awaited_once_with("refresh2")
        mock_sync.return_value.sync.assert_awaited_once_with("src-access", "dst-access")

    def test_sync_prints_summary_table(self) -> None:
        """Test the human-readable summary shows counts."""
        summary = SyncSummary.completed(added=7, source_songs=10, target_songs_before=1)

        with patch("liked_sync.cli.main.LikedSongsSync") as mock_sync:
            mock_sync.return_value.sync = AsyncMock(return_value=summary)
            runner = CliRunner()
            result = runner.invoke(cli, ["sync", "--source-token", "a", "--target-token", "b"])

        assert result.exit_code == 0
        assert "Sync completed successfully!" in result.output
        assert "Added" in result.output
        assert "Target songs" in result.output

    def test_sync_missing_tokens(self) -> None:
        """Test a missing account credential is a usage error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["sync", "--source-token", "a"])

        assert result.exit_code == 2
        assert "Missing access tokens" in result.output

    def test_sync_auth_failure(self) -> None:
        """Test failed token exchange exits with status 1."""
        with patch("liked_sync.cli.main.SpotifyClient") as mock_client:
            mock_client.return_value.exchange_code = AsyncMock(side_effect=AuthError("Token exchange failed: bad"))
            runner = CliRunner()
            result = runner.invoke(cli, ["sync", "--source-code", "bad", "--target-token", "b"])

        assert result.exit_code == 1
        assert "Token exchange failed" in result.output

    def test_sync_fetch_failure(self) -> None:
        """Test a fatal sync error exits with status 1."""
        cause = RetrievalError("https://api.spotify.com/v1/me/tracks?limit=50", 500, "Internal Server Error")

        with patch("liked_sync.cli.main.LikedSongsSync") as mock_sync:
            mock_sync.return_value.sync = AsyncMock(side_effect=SyncError(str(cause), cause=cause))
            runner = CliRunner()
            result = runner.invoke(cli, ["sync", "--source-token", "a", "--target-token", "b"])

        assert result.exit_code == 1
        assert "Failed to fetch liked songs" in result.output
