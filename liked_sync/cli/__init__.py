"""Command-line interface for Liked Sync."""
