"""Shared test fixtures for lab tests."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gl_lab.client import GitLabClient
from gl_lab.models import Page, Request
from gl_lab.pipeline import Pipeline

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the real environment and ~/.config out of every test."""
    monkeypatch.delenv("GITLAB_TOKEN", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("GITLAB_URL", MOCK_GITLAB_URL)
    monkeypatch.setenv("LAB_CONFIG", str(tmp_path / "config.json"))


@pytest.fixture
def with_token(monkeypatch):
    monkeypatch.setenv("GITLAB_TOKEN", "test-token")


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server."""
    return GitLabClient(MOCK_GITLAB_URL, "test-token")


@pytest.fixture
def anonymous_client():
    """GitLabClient without a token."""
    return GitLabClient(MOCK_GITLAB_URL)


@pytest.fixture
def sample_statuses() -> list[dict[str, Any]]:
    """Commit statuses as GitLab returns them, newest first."""
    return [
        {"id": 2, "status": "success", "name": "build", "target_url": f"{MOCK_GITLAB_URL}/jobs/2"},
        {"id": 1, "status": "pending", "name": "lint", "target_url": None},
    ]


@pytest.fixture
def sample_user() -> dict[str, Any]:
    return {"id": 7, "username": "alice", "name": "Alice Example"}


class FakePages:
    """
    Stand-in for GitLabClient.fetch_page serving canned pages in order.

    ``fetches`` counts pages actually fetched (i.e. pipelines that were run).
    """

    def __init__(self, pages: list[list[Any]], fail_at: int | None = None, error: Exception | None = None):
        self.pages = pages
        self.fail_at = fail_at
        self.error = error
        self.fetches = 0
        self.requests: list[Request] = []

    def initial_request(self) -> Request:
        return Request("GET", f"{MOCK_API_URL}/items", params={"per_page": 100})

    def __call__(self, request: Request) -> Pipeline[Page[Any]]:
        def fetch() -> Page[Any]:
            index = self.fetches
            self.fetches += 1
            self.requests.append(request)
            if index == self.fail_at:
                raise self.error
            next_request = None
            if index + 1 < len(self.pages):
                next_request = request.with_url(f"{MOCK_API_URL}/items?page={index + 2}")
            return Page(items=list(self.pages[index]), next_request=next_request)

        return Pipeline.from_call(fetch)
