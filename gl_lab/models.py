"""Data models and constants for lab."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

from gl_lab.errors import DecodeError

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GITLAB_URL = "https://gitlab.com"
API_V4 = "/api/v4"
PER_PAGE = 100

TOKEN_ENV = "GITLAB_TOKEN"
URL_ENV = "GITLAB_URL"
CONFIG_ENV = "LAB_CONFIG"

LOGGER_NAME = "lab"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class CommitState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELED = "canceled"


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Request:
    """One HTTP call against the GitLab API."""

    method: str
    url: str
    params: Mapping[str, Any] | None = None
    body: Mapping[str, Any] | None = None
    token: str | None = field(default=None, repr=False)

    def with_url(self, url: str) -> Request:
        # Continuation links already carry their query string
        return replace(self, url=url, params=None)

    def with_params(self, **params: Any) -> Request:
        merged = dict(self.params or {})
        merged.update(params)
        return replace(self, params=merged)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One fetched batch of a collection; ``next_request`` is None on the last page."""

    items: list[T]
    next_request: Request | None = None


# ---------------------------------------------------------------------------
# Domain records
# ---------------------------------------------------------------------------


def _require(data: Any, kind: str, *keys: str) -> dict:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a {kind} object, got {type(data).__name__}")
    missing = [k for k in keys if k not in data]
    if missing:
        raise DecodeError(f"{kind} is missing field(s): {', '.join(missing)}")
    return data


@dataclass(frozen=True)
class User:
    id: int
    username: str
    name: str
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> User:
        d = _require(data, "user", "id", "username")
        return cls(id=d["id"], username=d["username"], name=d.get("name", ""), raw=d)


@dataclass(frozen=True)
class Project:
    id: int
    name: str
    path_with_namespace: str
    web_url: str
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> Project:
        d = _require(data, "project", "id", "name")
        return cls(
            id=d["id"],
            name=d["name"],
            path_with_namespace=d.get("path_with_namespace", ""),
            web_url=d.get("web_url", ""),
            raw=d,
        )


@dataclass(frozen=True)
class Event:
    action_name: str
    target_type: str | None
    created_at: str
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> Event:
        d = _require(data, "event", "action_name")
        return cls(
            action_name=d["action_name"],
            target_type=d.get("target_type"),
            created_at=d.get("created_at", ""),
            raw=d,
        )


@dataclass(frozen=True)
class MergeRequest:
    id: int
    iid: int
    title: str
    state: str
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> MergeRequest:
        d = _require(data, "merge request", "id", "title")
        return cls(id=d["id"], iid=d.get("iid", d["id"]), title=d["title"], state=d.get("state", ""), raw=d)


@dataclass(frozen=True)
class ExternalStatusCheck:
    id: int
    name: str
    external_url: str
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> ExternalStatusCheck:
        d = _require(data, "external status check", "id", "name", "external_url")
        return cls(id=d["id"], name=d["name"], external_url=d["external_url"], raw=d)


@dataclass(frozen=True)
class CommitStatus:
    id: int
    status: str
    name: str
    target_url: str | None
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> CommitStatus:
        d = _require(data, "commit status", "id", "status")
        return cls(
            id=d["id"],
            status=d["status"],
            name=d.get("name") or "",
            target_url=d.get("target_url"),
            raw=d,
        )


@dataclass(frozen=True)
class Branch:
    name: str
    default: bool
    raw: dict = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> Branch:
        d = _require(data, "branch", "name")
        return cls(name=d["name"], default=bool(d.get("default", False)), raw=d)


@dataclass
class NewCommitStatus:
    """Payload for setting the build status of a commit."""

    state: CommitState
    ref: str | None = None
    name: str | None = None
    target_url: str | None = None
    description: str | None = None
    coverage: float | None = None
    pipeline_id: int | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"state": self.state.value}
        for key in ("ref", "name", "target_url", "description", "coverage", "pipeline_id"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d


def decode_json(data: Any) -> Any:
    """Identity decoder for endpoints returned as-is."""
    return data
