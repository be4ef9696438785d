"""Custom exceptions for the backup pipeline."""

from pathlib import Path


class GistBackupError(Exception):
    """Base exception for all backup errors."""


class TransportError(GistBackupError):
    """Raised when a request cannot be sent or no response arrives."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Request to {url} failed: {message}")


class GitHubAPIError(GistBackupError):
    """Raised when GitHub API returns an error."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"GitHub API error ({status_code}): {message}")


class DecodeError(GistBackupError):
    """Raised when a response body is not the JSON we expect."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Invalid response from {url}: {message}")


class FilesystemError(GistBackupError):
    """Raised when a directory or file cannot be written."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"Cannot write {path}: {message}")


class GistFileError(GistBackupError):
    """Raised when a single file of a gist cannot be downloaded."""

    def __init__(self, filename: str, cause: Exception):
        self.filename = filename
        self.cause = cause
        super().__init__(f"Failed to download file {filename}: {cause}")


class GistDownloadError(GistBackupError):
    """Raised when one gist of a user backup fails."""

    def __init__(self, gist_id: str, cause: Exception):
        self.gist_id = gist_id
        self.cause = cause
        super().__init__(f"Failed to download gist {gist_id}: {cause}")
