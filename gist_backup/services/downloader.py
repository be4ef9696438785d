"""Materializes a user's gists as a directory tree."""

import asyncio
import logging
from pathlib import Path

from gist_backup.exceptions import (
    FilesystemError,
    GistBackupError,
    GistDownloadError,
    GistFileError,
)
from gist_backup.models.schemas import Gist
from gist_backup.services.github_client import GitHubClient

METADATA_FILENAME = "metadata.json"


def _ensure_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(path, e.strerror or str(e)) from e
    return path


def _child_path(parent: Path, name: str) -> Path:
    """Join ``name`` onto ``parent``, refusing anything that leaves ``parent``."""
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise FilesystemError(parent / name, "name is not a single path segment")
    return parent / name


class GistDownloader:
    """
    Sequential gist backup on top of a GitHubClient.

    Layout produced:
    - <root>/<username>/<gist id>/metadata.json
    - <root>/<username>/<gist id>/<filename> for every file of the gist

    Every run overwrites what is already there. The first error aborts the
    run; files written before it are left in place.
    """

    def __init__(self, client: GitHubClient, logger: logging.Logger | None = None):
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    async def download_all_gists_for_user(
        self, username: str, destination_root: Path | str
    ) -> list[Path]:
        """
        Back up every gist of ``username`` under ``destination_root/username``.

        Returns:
            The gist directories written, in listing order

        Raises:
            GistDownloadError: If any gist fails; wraps the underlying error
            GistBackupError: If listing fails or the user directory cannot be created
        """
        gists = await self._client.list_gists(username)

        user_dir = _ensure_dir(_child_path(Path(destination_root), username))

        written = []
        for gist in gists:
            self._logger.debug("Downloading gist %s", gist.id)
            try:
                written.append(await self.download_gist(gist.id, user_dir))
            except GistBackupError as e:
                raise GistDownloadError(gist.id, e) from e

        self._logger.info("Backed up %d gists for %s", len(written), username)
        return written

    async def download_gist(self, gist_id: str, destination: Path | str) -> Path:
        """
        Download one gist into ``destination/gist_id``.

        Returns:
            The gist directory

        Raises:
            GistFileError: If a file's content cannot be fetched or written
            GistBackupError: For failures fetching the gist or writing metadata
        """
        destination = _ensure_dir(Path(destination))

        gist = await self._client.get_gist(gist_id)

        gist_dir = _ensure_dir(_child_path(destination, gist_id))
        await self._write_metadata(gist, gist_dir / METADATA_FILENAME)

        for filename, gist_file in gist.files.items():
            try:
                target = _child_path(gist_dir, filename)
                await self._download_file(str(gist_file.raw_url), target)
            except GistBackupError as e:
                raise GistFileError(filename, e) from e
            self._logger.debug("Wrote %s", target)

        return gist_dir

    async def _write_metadata(self, gist: Gist, path: Path) -> None:
        payload = gist.metadata_json(indent=2)
        try:
            await asyncio.to_thread(path.write_text, payload, encoding="utf-8")
        except OSError as e:
            raise FilesystemError(path, e.strerror or str(e)) from e

    async def _download_file(self, url: str, target: Path) -> None:
        async with self._client.fetch_raw(url) as chunks:
            try:
                f = await asyncio.to_thread(open, target, "wb")
                try:
                    async for chunk in chunks:
                        await asyncio.to_thread(f.write, chunk)
                finally:
                    await asyncio.to_thread(f.close)
            except OSError as e:
                raise FilesystemError(target, e.strerror or str(e)) from e
