"""Main CLI entry point for Liked Sync."""

import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from liked_sync import __version__
from liked_sync.core.config import Settings, get_settings
from liked_sync.core.exceptions import AuthError, SyncError, ValidationError
from liked_sync.core.models import SyncSummary
from liked_sync.services.spotify import SpotifyClient
from liked_sync.services.sync import LikedSongsSync, resolve_access_token

console = Console()


def configure_logging(level: str) -> None:
    """Send library logs to stderr so --json output stays clean."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version=__version__, prog_name="liked-sync")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Liked Sync - copy liked songs from one Spotify account to another."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    settings = get_settings()
    ctx.obj["settings"] = settings
    configure_logging("DEBUG" if verbose else settings.log_level)


@cli.command(name="auth-url")
@click.option("--state", help="Opaque state value echoed back to the redirect URI")
@click.pass_context
def auth_url(ctx: click.Context, state: str | None) -> None:
    """Print the URL used to authorize both accounts."""
    client = SpotifyClient(ctx.obj["settings"])
    console.print("Use this URL to authorize both accounts:")
    click.echo(client.get_auth_url(state))


async def _token_for(
    client: SpotifyClient,
    access_token: str | None,
    code: str | None,
    refresh_token: str | None,
) -> str:
    if access_token:
        return access_token
    return await resolve_access_token(client, code=code, refresh_token=refresh_token)


async def _run_sync(settings: Settings, tokens: dict[str, str | None]) -> SyncSummary:
    client = SpotifyClient(settings)
    source = await _token_for(client, tokens["source_token"], tokens["source_code"], tokens["source_refresh_token"])
    target = await _token_for(client, tokens["target_token"], tokens["target_code"], tokens["target_refresh_token"])
    return await LikedSongsSync(settings, spotify_client=client).sync(source, target)


@cli.command()
@click.option("--source-code", help="Authorization code for the source account")
@click.option("--source-refresh-token", help="Refresh token for the source account")
@click.option("--source-token", help="Access token for the source account")
@click.option("--target-code", help="Authorization code for the target account")
@click.option("--target-refresh-token", help="Refresh token for the target account")
@click.option("--target-token", help="Access token for the target account")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def sync(
    ctx: click.Context,
    source_code: str | None,
    source_refresh_token: str | None,
    source_token: str | None,
    target_code: str | None,
    target_refresh_token: str | None,
    target_token: str | None,
    as_json: bool,
) -> None:
    """Add the source account's liked songs to the target account."""
    tokens = {
        "source_code": source_code,
        "source_refresh_token": source_refresh_token,
        "source_token": source_token,
        "target_code": target_code,
        "target_refresh_token": target_refresh_token,
        "target_token": target_token,
    }

    try:
        summary = asyncio.run(_run_sync(ctx.obj["settings"], tokens))
    except ValidationError as e:
        raise click.UsageError(str(e)) from e
    except (AuthError, SyncError) as e:
        console.print(f"[red]{e}[/red]")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(summary.to_dict()))
        return

    console.print(f"[green]{summary.message}[/green]")
    table = Table(title="Sync Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="magenta")
    table.add_row("Added", str(summary.added))
    if summary.source_songs is not None:
        table.add_row("Source songs", str(summary.source_songs))
    if summary.target_songs is not None:
        table.add_row("Target songs", str(summary.target_songs))
    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
