"""Core modules for Liked Sync."""

from liked_sync.core.config import Settings, get_settings
from liked_sync.core.models import (
    BatchWriteOutcome,
    LikedTrackPage,
    SyncSummary,
    TokenInfo,
)
from liked_sync.core.results import Err, Ok, Result

__all__ = [
    "Settings",
    "get_settings",
    "TokenInfo",
    "LikedTrackPage",
    "BatchWriteOutcome",
    "SyncSummary",
    "Ok",
    "Err",
    "Result",
]
