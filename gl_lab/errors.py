"""Error taxonomy for lab.

Every failure that can happen while talking to GitLab is represented by one of
these classes. Pipelines and streams carry them as values (see ``result.Err``);
only the CLI turns them into an exit code.
"""

from __future__ import annotations


class LabError(Exception):
    """Base class for all lab failures."""


class ConfigurationError(LabError):
    """The token (or another config value) could not be resolved."""


class TransportError(LabError):
    """Connection, DNS or timeout failure before a response arrived."""


class HttpStatusError(LabError):
    """GitLab answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "", url: str = ""):
        self.status_code = status_code
        self.body = body
        self.url = url
        message = f"HTTP {status_code}"
        if url:
            message += f" for {url}"
        if body:
            message += f": {body[:500]}"
        super().__init__(message)


class DecodeError(LabError):
    """The response body did not have the expected shape."""


class EmptyResultError(LabError):
    """A collection that must not be empty came back empty."""
