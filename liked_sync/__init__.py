"""Liked Sync - copy liked songs from one Spotify account to another."""

__version__ = "0.1.0"
