"""Command-line entry point."""

import asyncio
import logging
import sys
from pathlib import Path

import click

from gist_backup.config import Settings, get_settings
from gist_backup.exceptions import GistBackupError
from gist_backup.logging_config import configure_logging
from gist_backup.services.downloader import GistDownloader
from gist_backup.services.github_client import GitHubClient


async def run_backup(
    settings: Settings,
    username: str,
    destination: Path,
    logger: logging.Logger,
) -> list[Path]:
    """Open a client, back up every gist of ``username`` and close the client."""
    async with GitHubClient(settings, logger=logger.getChild("client")) as client:
        downloader = GistDownloader(client, logger=logger.getChild("downloader"))
        return await downloader.download_all_gists_for_user(username, destination)


@click.command(name="gist-backup", help="Backup your GitHub Gists")
@click.option("-u", "--username", required=True, help="GitHub username")
@click.option(
    "-d",
    "--dst",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Target directory",
)
@click.option(
    "-k", "--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token"
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug mode")
def cli(username: str, dst: Path, token: str | None, debug: bool) -> None:
    """Back up every gist of USERNAME into DST/USERNAME."""
    if not username.strip():
        raise click.BadParameter("must not be empty", param_hint="'--username'")

    settings = get_settings()
    updates = {"debug": debug or settings.debug}
    if token:
        updates["github_token"] = token
    settings = settings.model_copy(update=updates)

    logger = configure_logging(settings.debug)
    logger.info("Starting backup...")

    try:
        written = asyncio.run(run_backup(settings, username, dst, logger))
    except GistBackupError as e:
        logger.error("Error downloading gists: %s", e)
        sys.exit(1)

    logger.info("Backup completed: %d gists saved to %s", len(written), dst / username)


if __name__ == "__main__":
    cli()
