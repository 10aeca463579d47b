"""Core data models for Liked Sync."""

from pydantic import BaseModel, ConfigDict, Field

ALREADY_IN_SYNC_MESSAGE = "Accounts are already in sync!"
SYNC_COMPLETED_MESSAGE = "Sync completed successfully!"


class TokenInfo(BaseModel):
    """Tokens returned by the Spotify accounts service."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
    refresh_token: str | None = None
    scope: str | None = None


class LikedTrackPage(BaseModel):
    """One page of a liked-tracks listing, reduced to track IDs."""

    items: list[str] = Field(default_factory=list)
    next: str | None = None
    total: int | None = None

    @classmethod
    def from_api(cls, data: dict) -> "LikedTrackPage":
        """Build a page from a raw GET /me/tracks response.

        Items without a track ID (local files, unavailable tracks) are dropped.
        """
        ids = []
        for item in data.get("items") or []:
            track = item.get("track") or {}
            track_id = track.get("id")
            if track_id:
                ids.append(track_id)
        return cls(items=ids, next=data.get("next"), total=data.get("total"))


class BatchWriteOutcome(BaseModel):
    """Result of saving one batch of tracks."""

    batch_number: int
    requested: int
    written: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the batch was saved."""
        return self.error is None


class SyncSummary(BaseModel):
    """Result of a sync run, shaped for JSON output."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    added: int = Field(default=0, ge=0)
    source_songs: int | None = Field(default=None, alias="sourceSongs")
    target_songs: int | None = Field(default=None, alias="targetSongs")

    @classmethod
    def already_in_sync(cls) -> "SyncSummary":
        """Summary for a run with nothing to add."""
        return cls(message=ALREADY_IN_SYNC_MESSAGE, added=0)

    @classmethod
    def completed(cls, added: int, source_songs: int, target_songs_before: int) -> "SyncSummary":
        """Summary for a run that wrote tracks; target count includes what was added."""
        return cls(
            message=SYNC_COMPLETED_MESSAGE,
            added=added,
            source_songs=source_songs,
            target_songs=target_songs_before + added,
        )

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, omitting unset counts."""
        return self.model_dump(by_alias=True, exclude_none=True)
