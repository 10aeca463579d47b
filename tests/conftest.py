"""Shared test fixtures for Liked Sync."""

from unittest.mock import AsyncMock

import pytest

from liked_sync.core.config import Settings
from liked_sync.core.exceptions import RetrievalError, WriteChunkError
from liked_sync.core.models import LikedTrackPage
from liked_sync.core.results import Err, Ok


class FakeSpotifyLibrary:
    """In-memory stand-in for SpotifyClient's liked-tracks calls.

    Libraries are keyed by access token. Pages are served ``page_size`` at a
    time with ``next`` URLs of the form ``page:<token>:<offset>``, and
    successful writes are appended to the token's library.
    """

    def __init__(self, libraries: dict[str, list[str]], page_size: int = 50):
        self.libraries = {token: list(ids) for token, ids in libraries.items()}
        self.page_size = page_size
        self.failing_pages: set[tuple[str, int]] = set()
        self.failing_batches: set[int] = set()
        self.page_requests: list[tuple[str, str | None]] = []
        self.write_calls: list[list[str]] = []

    async def fetch_liked_track_page(self, access_token: str, url: str | None = None):
        self.page_requests.append((access_token, url))
        offset = int(url.rsplit(":", 1)[1]) if url else 0
        page_number = offset // self.page_size + 1
        page_url = url or "https://api.spotify.com/v1/me/tracks?limit=50"

        if (access_token, page_number) in self.failing_pages:
            return Err(RetrievalError(page_url, 503, "Service Unavailable"))

        library = self.libraries[access_token]
        items = library[offset : offset + self.page_size]
        next_offset = offset + self.page_size
        next_url = f"page:{access_token}:{next_offset}" if next_offset < len(library) else None
        return Ok(LikedTrackPage(items=items, next=next_url, total=len(library)))

    async def write_liked_track_batch(self, access_token: str, track_ids: list[str], batch_number: int = 1):
        self.write_calls.append(list(track_ids))
        if batch_number in self.failing_batches:
            return Err(WriteChunkError(batch_number, 500, "Internal Server Error"))
        self.libraries[access_token].extend(track_ids)
        return Ok(len(track_ids))


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and the default sync tuning."""
    return Settings(
        spotify_client_id="test_client_id",
        spotify_client_secret="test_client_secret",
        spotify_redirect_uri="http://localhost:3000/callback",
    )


@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Replacement for asyncio.sleep that records pacing delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def make_library():
    """Factory for FakeSpotifyLibrary instances."""

    def _make(libraries: dict[str, list[str]], page_size: int = 50) -> FakeSpotifyLibrary:
        return FakeSpotifyLibrary(libraries, page_size=page_size)

    return _make


@pytest.fixture
def make_ids():
    """Factory for distinct track IDs like ``src0001``."""

    def _make(prefix: str, count: int) -> list[str]:
        return [f"{prefix}{i:04d}" for i in range(count)]

    return _make
