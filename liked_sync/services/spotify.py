"""Spotify API client for Liked Sync."""

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from liked_sync.core.config import SPOTIFY_MAX_IDS_PER_REQUEST, Settings
from liked_sync.core.exceptions import AuthError, RetrievalError, WriteChunkError
from liked_sync.core.models import LikedTrackPage, TokenInfo
from liked_sync.core.results import Err, Ok, Result

logger = logging.getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class SpotifyClient:
    """Client for the Spotify accounts service and the liked-tracks endpoints."""

    SCOPES = [
        "user-library-read",
        "user-library-modify",
    ]

    LIKED_TRACKS_ENDPOINT = "/me/tracks"

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client_id = settings.spotify_client_id
        self.client_secret = settings.spotify_client_secret
        self.redirect_uri = settings.spotify_redirect_uri
        self.api_base = settings.spotify_api_base

    def get_auth_url(self, state: str | None = None) -> str:
        """Get OAuth authorization URL."""
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.SCOPES),
        }
        if state:
            params["state"] = state
        return f"{self.settings.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> TokenInfo:
        """Exchange authorization code for tokens."""
        return await self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
            },
            "Token exchange failed",
        )

    async def refresh_token(self, refresh_token: str) -> TokenInfo:
        """Refresh an access token."""
        return await self._token_request(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
            "Token refresh failed",
        )

    async def _token_request(self, data: dict[str, str], failure: str) -> TokenInfo:
        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                response = await client.post(
                    self.settings.token_url,
                    data=data,
                    auth=(self.client_id, self.client_secret),
                )
        except httpx.HTTPError as e:
            raise AuthError(f"{failure}: {e}") from e

        if response.status_code != 200:
            raise AuthError(f"{failure}: {response.text}")

        try:
            result: dict[str, Any] = response.json()
        except ValueError as e:
            raise AuthError(f"{failure}: invalid response body") from e
        if not isinstance(result, dict):
            raise AuthError(f"{failure}: invalid response body")
        if not result.get("access_token"):
            # Spotify reports some failures as a 200 with an error body
            raise AuthError(f"{failure}: {result.get('error_description') or result.get('error') or 'no access token'}")
        try:
            return TokenInfo.model_validate(result)
        except ValueError as e:
            raise AuthError(f"{failure}: invalid response body") from e

    def liked_tracks_url(self) -> str:
        """Get the URL of the first liked-tracks page."""
        return f"{self.api_base}{self.LIKED_TRACKS_ENDPOINT}?limit={self.settings.page_size}"

    async def fetch_liked_track_page(
        self, access_token: str, url: str | None = None
    ) -> Result[LikedTrackPage, RetrievalError]:
        """Fetch one page of the user's liked tracks.

        Args:
            access_token: Bearer token of the account being read.
            url: Page URL as returned in a previous page's ``next`` field.
                Defaults to the first page.

        Returns:
            Ok with the page, or Err with a RetrievalError naming the URL and status.
        """
        page_url = url or self.liked_tracks_url()
        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                response = await client.request(
                    "GET",
                    page_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            return Err(RetrievalError(page_url, None, str(e) or type(e).__name__))

        if not _is_success(response.status_code):
            return Err(RetrievalError(page_url, response.status_code, response.reason_phrase))

        try:
            page = LikedTrackPage.from_api(response.json())
        except (ValueError, TypeError, AttributeError):
            return Err(RetrievalError(page_url, response.status_code, "invalid response body"))

        return Ok(page)

    async def write_liked_track_batch(
        self, access_token: str, track_ids: list[str], batch_number: int = 1
    ) -> Result[int, WriteChunkError]:
        """Save up to 50 tracks to the user's liked tracks.

        Returns:
            Ok with the number of tracks written, or Err with a WriteChunkError.
        """
        if len(track_ids) > SPOTIFY_MAX_IDS_PER_REQUEST:
            raise ValueError(
                f"At most {SPOTIFY_MAX_IDS_PER_REQUEST} tracks per request, got {len(track_ids)}"
            )
        if not track_ids:
            return Ok(0)

        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                response = await client.request(
                    "PUT",
                    f"{self.api_base}{self.LIKED_TRACKS_ENDPOINT}",
                    headers={"Authorization": f"Bearer {access_token}"},
                    json={"ids": track_ids},
                )
        except httpx.HTTPError as e:
            return Err(WriteChunkError(batch_number, None, str(e) or type(e).__name__))

        if not _is_success(response.status_code):
            return Err(WriteChunkError(batch_number, response.status_code, response.reason_phrase))

        return Ok(len(track_ids))
