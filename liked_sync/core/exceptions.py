"""Custom exceptions for Liked Sync."""


class LikedSyncError(Exception):
    """Base exception for all Liked Sync errors."""

    pass


class AuthError(LikedSyncError):
    """Exchanging an authorization code or refresh token failed."""

    pass


class ValidationError(LikedSyncError):
    """Validation failed."""

    pass


class ExternalServiceError(LikedSyncError):
    """External service (Spotify) failed."""

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ):
        self.service = service
        self.status_code = status_code
        self.url = url
        super().__init__(f"{service}: {message}")


class RetrievalError(ExternalServiceError):
    """A liked-tracks page could not be fetched."""

    def __init__(self, url: str, status_code: int | None, reason: str):
        self.reason = reason
        status = f"{status_code} {reason}" if status_code is not None else reason
        super().__init__(
            "Spotify",
            f"Failed to fetch liked songs from {url}: {status}",
            status_code=status_code,
            url=url,
        )


class WriteChunkError(ExternalServiceError):
    """A batch of tracks could not be saved to the target library."""

    def __init__(self, batch_number: int, status_code: int | None, reason: str):
        self.batch_number = batch_number
        self.reason = reason
        status = f"{status_code} {reason}" if status_code is not None else reason
        super().__init__(
            "Spotify",
            f"Failed to add batch {batch_number}: {status}",
            status_code=status_code,
        )


class SyncError(LikedSyncError):
    """Liked songs sync failed."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
