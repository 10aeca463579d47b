"""Utility modules for Liked Sync."""

from liked_sync.utils.batching import chunked

__all__ = ["chunked"]
