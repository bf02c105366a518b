"""GitLab API client built on the request pipeline and pagination stream."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Callable, TypeVar

import requests

from gl_lab.errors import DecodeError, HttpStatusError, TransportError
from gl_lab.models import (
    API_V4,
    LOGGER_NAME,
    PER_PAGE,
    Branch,
    CommitStatus,
    Event,
    ExternalStatusCheck,
    MergeRequest,
    NewCommitStatus,
    Page,
    Project,
    Request,
    User,
    decode_json,
)
from gl_lab.pipeline import Pipeline
from gl_lab.stream import Stream

T = TypeVar("T")


class GitLabClient:
    """Thin wrapper around GitLab REST API v4 returning pipelines and streams."""

    def __init__(self, base_url: str, token: str | None = None, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{API_V4}"
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.logger = logging.getLogger(LOGGER_NAME)

    # -- Transport --

    def request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        body: dict | None = None,
    ) -> Request:
        """Build a Request for an endpoint relative to the API root, or an absolute URL."""
        if urllib.parse.urlparse(endpoint).scheme:
            url = endpoint
        else:
            url = f"{self.api_url}/{endpoint.lstrip('/')}"
        return Request(method=method.upper(), url=url, params=params, body=body, token=self.token)

    def send(self, request: Request) -> requests.Response:
        """Perform exactly one HTTP call. No retries."""
        headers = {}
        if request.token:
            headers["Authorization"] = f"Bearer {request.token}"

        self.logger.debug(f"{request.method} {request.url} {request.params or ''} {request.body or ''}")
        try:
            resp = self.session.request(
                request.method,
                request.url,
                params=request.params,
                json=request.body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            self.logger.debug(f"API error {resp.status_code}: {resp.text[:500]}")
            raise HttpStatusError(resp.status_code, resp.text, url=request.url)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"Response from {resp.url} is not valid JSON: {e}") from e

    def call(self, request: Request, decode: Callable[[Any], T] = decode_json) -> Pipeline[T]:
        return Pipeline.from_call(self.send, request).map(self._json).map(decode)

    def get(self, endpoint: str, decode: Callable[[Any], T] = decode_json, params: dict | None = None) -> Pipeline[T]:
        return self.call(self.request("GET", endpoint, params=params), decode)

    def post(self, endpoint: str, data: dict | None = None, decode: Callable[[Any], T] = decode_json) -> Pipeline[T]:
        return self.call(self.request("POST", endpoint, body=data), decode)

    # -- Pagination --

    def fetch_page(self, request: Request, decode: Callable[[Any], T]) -> Pipeline[Page[T]]:
        """Fetch one page and work out the request for the page after it."""

        def to_page(resp: requests.Response) -> Page[T]:
            data = self._json(resp)
            if not isinstance(data, list):
                raise DecodeError(f"Expected a JSON array from {request.url}, got {type(data).__name__}")
            return Page(items=[decode(item) for item in data], next_request=self._continuation(resp, request))

        return Pipeline.from_call(self.send, request).map(to_page)

    @staticmethod
    def _continuation(resp: requests.Response, request: Request) -> Request | None:
        """Follow the Link rel="next" header, falling back to X-Next-Page."""
        next_link = resp.links.get("next", {}).get("url")
        if next_link:
            return request.with_url(next_link)
        next_page = resp.headers.get("x-next-page", "").strip()
        if next_page:
            return request.with_params(page=next_page)
        return None

    def stream(self, endpoint: str, decode: Callable[[Any], T], params: dict | None = None) -> Stream[T]:
        params = dict(params or {})
        params.setdefault("per_page", PER_PAGE)
        return Stream(self.request("GET", endpoint, params=params), lambda req: self.fetch_page(req, decode))

    # -- Resources --

    def user_by_id(self, user_id: str | int) -> Pipeline[User]:
        return self.get(f"/users/{user_id}", User.from_dict)

    def users_by_name(self, username: str) -> Stream[User]:
        return self.stream("/users", User.from_dict, params={"username": username})

    def user_projects(self, user_id: str | int) -> Stream[Project]:
        return self.stream(f"/users/{user_id}/projects", Project.from_dict)

    def user_events(self, user_id: str | int) -> Stream[Event]:
        return self.stream(f"/users/{user_id}/events", Event.from_dict)

    def merge_requests(self, state: str | None = None, scope: str | None = None) -> Stream[MergeRequest]:
        params = {k: v for k, v in (("state", state), ("scope", scope)) if v}
        return self.stream("/merge_requests", MergeRequest.from_dict, params=params)

    def external_status_checks(self, project: str | int) -> Stream[ExternalStatusCheck]:
        endpoint = f"/projects/{self.project_ref(project)}/external_status_checks"
        return self.stream(endpoint, ExternalStatusCheck.from_dict)

    def create_project(
        self, name: str, description: str | None = None, visibility: str | None = None
    ) -> Pipeline[Project]:
        data = {"name": name}
        if description is not None:
            data["description"] = description
        if visibility is not None:
            data["visibility"] = visibility
        return self.post("/projects", data, Project.from_dict)

    def commit_statuses(self, project: str | int, sha: str) -> Stream[CommitStatus]:
        sha = urllib.parse.quote(sha, safe="")
        endpoint = f"/projects/{self.project_ref(project)}/repository/commits/{sha}/statuses"
        return self.stream(endpoint, CommitStatus.from_dict)

    def set_commit_status(self, project: str | int, sha: str, status: NewCommitStatus) -> Pipeline[CommitStatus]:
        sha = urllib.parse.quote(sha, safe="")
        endpoint = f"/projects/{self.project_ref(project)}/statuses/{sha}"
        return self.post(endpoint, status.to_dict(), CommitStatus.from_dict)

    def branches(self, project: str | int) -> Stream[Branch]:
        return self.stream(f"/projects/{self.project_ref(project)}/repository/branches", Branch.from_dict)

    def raw_get(self, endpoint: str) -> Pipeline[Any]:
        """GET any endpoint and return the decoded body untouched."""
        return self.get(endpoint)

    # -- Resolution helpers --

    def project_ref(self, project: str | int) -> str:
        """
        Turn a project id, namespace path or project web URL into the
        identifier used in /projects/:id endpoints.
        """
        text = str(project)
        if text.isdigit():
            return text
        return urllib.parse.quote(self._extract_path_from_url(text), safe="")

    def _extract_path_from_url(self, url: str) -> str:
        """Extract the namespace/project path from a GitLab URL."""
        parsed = urllib.parse.urlparse(url)
        if parsed.scheme and parsed.netloc:
            # Full URL: https://gitlab.com/myorg/myteam/myproject
            path = parsed.path.strip("/")
            for suffix in ("/-/", "/-", ".git"):
                if suffix in path:
                    path = path[: path.index(suffix)]
            return path
        return url.strip("/")
