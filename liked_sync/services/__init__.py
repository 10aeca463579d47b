"""External service clients and the sync engine."""

from liked_sync.services.spotify import SpotifyClient
from liked_sync.services.sync import LikedSongsSync, diff_missing, sync_liked_songs

__all__ = ["SpotifyClient", "LikedSongsSync", "diff_missing", "sync_liked_songs"]
