"""Shared test fixtures and sample data."""

import copy

import httpx
import pytest
import pytest_asyncio

from gist_backup.config import Settings
from gist_backup.services.downloader import GistDownloader
from gist_backup.services.github_client import GitHubClient

API = "https://api.github.com"
RAW = "https://gist.githubusercontent.com"

# Sample test data matching GitHub API response for octocat
SAMPLE_GIST_DATA = {
    "id": "6cad326836d38bd3a7ae",
    "url": "https://api.github.com/gists/6cad326836d38bd3a7ae",
    "html_url": "https://gist.github.com/octocat/6cad326836d38bd3a7ae",
    "description": "Hello world!",
    "public": True,
    "created_at": "2014-10-01T16:19:34Z",
    "updated_at": "2025-12-23T23:51:45Z",
    "comments": 291,
    "truncated": False,
    "files": {
        "hello_world.rb": {
            "filename": "hello_world.rb",
            "type": "application/x-ruby",
            "language": "Ruby",
            "raw_url": "https://gist.githubusercontent.com/octocat/6cad326836d38bd3a7ae/raw/hello_world.rb",
            "size": 175,
        }
    },
    "owner": {
        "login": "octocat",
        "id": 583231,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "html_url": "https://github.com/octocat",
    },
}


def make_gist(gist_id: str, files: dict[str, bytes], owner: str = "alice") -> dict:
    """Build an API gist record whose files point at fake raw URLs."""
    return {
        "id": gist_id,
        "url": f"{API}/gists/{gist_id}",
        "html_url": f"https://gist.github.com/{owner}/{gist_id}",
        "description": f"gist {gist_id}",
        "public": True,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
        "comments": 0,
        "files": {
            name: {
                "filename": name,
                "type": "text/plain",
                "language": None,
                "raw_url": f"{RAW}/{owner}/{gist_id}/raw/{name}",
                "size": len(content),
            }
            for name, content in files.items()
        },
    }


class FakeGitHub:
    """
    In-memory stand-in for the GitHub API and raw content host.

    Every request is recorded in ``requests``. ``overrides`` maps a full URL to
    a canned ``httpx.Response`` returned instead of the normal answer.
    """

    def __init__(self):
        self.users: dict[str, list[str]] = {}
        self.gists: dict[str, dict] = {}
        self.raw: dict[str, bytes] = {}
        self.overrides: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add_gist(self, username: str, gist_id: str, files: dict[str, bytes]) -> dict:
        record = make_gist(gist_id, files, owner=username)
        self.users.setdefault(username, []).append(gist_id)
        self.gists[gist_id] = record
        for name, content in files.items():
            self.raw[record["files"][name]["raw_url"]] = content
        return record

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"

        if url in self.overrides:
            return self.overrides[url]
        if url in self.raw:
            return httpx.Response(200, content=self.raw[url])

        path = request.url.path
        if path.startswith("/users/") and path.endswith("/gists"):
            username = path.split("/")[2]
            if username not in self.users:
                return httpx.Response(404, json={"message": "Not Found"})
            # List entries never carry inline content.
            listing = copy.deepcopy([self.gists[g] for g in self.users[username]])
            return httpx.Response(200, json=listing)
        if path.startswith("/gists/"):
            record = self.gists.get(path.split("/")[2])
            if record is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json=record)
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    """Test settings."""
    return Settings(github_api_timeout=5.0, github_token=None)


@pytest.fixture
def sample_gist_data():
    """Sample gist data for testing."""
    return copy.deepcopy(SAMPLE_GIST_DATA)


@pytest.fixture
def empty_github():
    """Fake GitHub with no users."""
    return FakeGitHub()


@pytest.fixture
def fake_github(empty_github):
    """Fake GitHub preloaded with alice's two gists."""
    fake = empty_github
    fake.add_gist("alice", "g1", {"a.txt": b"hello from a\n"})
    fake.add_gist("alice", "g2", {})
    return fake


@pytest_asyncio.fixture
async def github_client(settings, fake_github):
    """Started client wired to the fake GitHub."""
    async with GitHubClient(settings, transport=fake_github.transport()) as client:
        yield client


@pytest.fixture
def downloader(github_client):
    """Downloader on top of the fake-backed client."""
    return GistDownloader(github_client)
