"""Service for syncing liked songs between two Spotify accounts.

Reads the complete liked-tracks library of a source and a target account,
works out which source tracks the target is missing, and saves them to the
target in paced batches. Sync is one-way: nothing is ever removed from the
target, and nothing is written back to the source.

Fetching is all-or-nothing: a failed page aborts the whole sync before any
write happens. Writing is best-effort: a failed batch is logged and skipped,
and only the batches that landed are counted in the summary.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from liked_sync.core.config import Settings
from liked_sync.core.exceptions import RetrievalError, SyncError, ValidationError
from liked_sync.core.models import BatchWriteOutcome, SyncSummary
from liked_sync.core.results import Err, Ok, Result
from liked_sync.services.spotify import SpotifyClient
from liked_sync.utils.batching import chunked

logger = logging.getLogger(__name__)

# Async callable accepting phase=<str> plus counts as keyword arguments
ProgressCallback = Callable[..., Awaitable[None]]
SleepFunc = Callable[[float], Awaitable[Any]]


async def fetch_liked_collection(
    client: SpotifyClient, access_token: str
) -> Result[list[str], RetrievalError]:
    """Fetch every liked track ID for one account, following pagination.

    Returns Err on the first failed page; pages fetched before it are dropped.
    """
    track_ids: list[str] = []
    url: str | None = None
    pages = 0

    while True:
        result = await client.fetch_liked_track_page(access_token, url)
        if isinstance(result, Err):
            return result

        page = result.value
        pages += 1
        track_ids.extend(page.items)
        logger.debug(f"Fetched page {pages}: {len(page.items)} tracks ({len(track_ids)} so far)")

        if not page.next:
            break
        url = page.next

    return Ok(track_ids)


def diff_missing(source: Sequence[str], target: Sequence[str]) -> list[str]:
    """Return source track IDs absent from target, in source order."""
    target_ids = set(target)
    return [track_id for track_id in source if track_id not in target_ids]


async def write_missing(
    client: SpotifyClient,
    access_token: str,
    track_ids: Sequence[str],
    batch_size: int,
    pacing_delay: float,
    sleep: SleepFunc = asyncio.sleep,
) -> list[BatchWriteOutcome]:
    """Save tracks to the target library in batches, pausing between batches.

    A failed batch is logged and recorded with ``written=0``; the remaining
    batches are still attempted.
    """
    batches = list(chunked(track_ids, batch_size))
    outcomes: list[BatchWriteOutcome] = []

    for number, batch in enumerate(batches, 1):
        result = await client.write_liked_track_batch(access_token, batch, batch_number=number)

        if isinstance(result, Ok):
            outcomes.append(BatchWriteOutcome(batch_number=number, requested=len(batch), written=result.value))
            logger.debug(f"Added batch {number}/{len(batches)} ({len(batch)} tracks)")
        else:
            logger.error(str(result.error))
            outcomes.append(BatchWriteOutcome(batch_number=number, requested=len(batch), error=str(result.error)))

        if number < len(batches):
            await sleep(pacing_delay)

    return outcomes


class LikedSongsSync:
    """Copies liked songs from a source account into a target account.

    Each call to :meth:`sync` is self-contained; the instance holds only
    configuration and collaborators, never per-run state.
    """

    def __init__(
        self,
        settings: Settings,
        spotify_client: SpotifyClient | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initialize the sync service.

        Args:
            settings: Application settings.
            spotify_client: Optional Spotify client (created lazily).
            sleep: Coroutine used for the pause between write batches.
        """
        self.settings = settings
        self._spotify_client = spotify_client
        self._sleep = sleep

    @property
    def spotify(self) -> SpotifyClient:
        """Get or create Spotify client."""
        if self._spotify_client is None:
            self._spotify_client = SpotifyClient(self.settings)
        return self._spotify_client

    async def _fetch(self, account: str, access_token: str) -> list[str]:
        logger.info(f"Fetching liked songs from {account} account...")
        result = await fetch_liked_collection(self.spotify, access_token)
        if isinstance(result, Err):
            logger.error(f"Fetching {account} account failed: {result.error}")
            raise SyncError(str(result.error), cause=result.error) from result.error
        logger.info(f"Found {len(result.value)} liked songs in {account} account")
        return result.value

    async def sync(
        self,
        source_access_token: str,
        target_access_token: str,
        progress_callback: ProgressCallback | None = None,
    ) -> SyncSummary:
        """Add the source account's liked songs that the target is missing.

        Args:
            source_access_token: Bearer token for the account to copy from.
            target_access_token: Bearer token for the account to copy into.
            progress_callback: Optional async callback for progress updates.

        Returns:
            SyncSummary whose ``added`` counts only batches that were saved.

        Raises:
            SyncError: If either library could not be fetched. No tracks are
                written in that case.
        """

        async def report(phase: str, **counts: Any) -> None:
            if progress_callback:
                await progress_callback(phase=phase, **counts)

        await report("fetch_started", account="source")
        source_tracks = await self._fetch("source", source_access_token)
        await report("fetch_complete", account="source", total_tracks=len(source_tracks))

        await report("fetch_started", account="target")
        target_tracks = await self._fetch("target", target_access_token)
        await report("fetch_complete", account="target", total_tracks=len(target_tracks))

        missing = diff_missing(source_tracks, target_tracks)
        logger.info(f"Need to add {len(missing)} new songs")
        await report("diff_complete", missing_tracks=len(missing))

        if not missing:
            logger.info("Accounts are already in sync")
            return SyncSummary.already_in_sync()

        logger.info("Adding songs to target account...")
        await report("write_started", missing_tracks=len(missing))
        outcomes = await write_missing(
            self.spotify,
            target_access_token,
            missing,
            batch_size=self.settings.write_batch_size,
            pacing_delay=self.settings.pacing_delay_seconds,
            sleep=self._sleep,
        )
        added = sum(outcome.written for outcome in outcomes)
        failed = [outcome.batch_number for outcome in outcomes if not outcome.ok]
        await report("write_complete", added_tracks=added, failed_batches=len(failed))

        if failed:
            logger.warning(f"Added {added} of {len(missing)} songs; failed batches: {failed}")
        else:
            logger.info(f"Added {added} songs")

        return SyncSummary.completed(
            added=added,
            source_songs=len(source_tracks),
            target_songs_before=len(target_tracks),
        )


async def resolve_access_token(
    client: SpotifyClient,
    code: str | None = None,
    refresh_token: str | None = None,
) -> str:
    """Turn an authorization code or refresh token into an access token.

    A code takes precedence over a refresh token.

    Raises:
        ValidationError: If neither is given.
        AuthError: If the exchange fails.
    """
    if code:
        token = await client.exchange_code(code)
    elif refresh_token:
        token = await client.refresh_token(refresh_token)
    else:
        raise ValidationError("Missing access tokens")
    return token.access_token


async def sync_liked_songs(
    settings: Settings,
    source_access_token: str,
    target_access_token: str,
    progress_callback: ProgressCallback | None = None,
) -> SyncSummary:
    """Run a single sync with a fresh service instance."""
    return await LikedSongsSync(settings).sync(
        source_access_token,
        target_access_token,
        progress_callback=progress_callback,
    )
