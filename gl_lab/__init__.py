"""
lab: make git easier with GitLab.

A command-line client for the GitLab REST API. Single resources are fetched
through a short-circuiting request pipeline; collections through a lazy
pagination stream that fetches one page at a time, only when needed.

Environment:
    GITLAB_TOKEN - GitLab Personal Access Token
    GITLAB_URL   - GitLab instance URL (default: https://gitlab.com)
    LAB_CONFIG   - Path to the JSON config file
"""

from gl_lab.cli import __version__, main
from gl_lab.client import GitLabClient
from gl_lab.pipeline import Pipeline
from gl_lab.result import Err, Ok
from gl_lab.stream import END, Stream, StreamState

__all__ = ["main", "__version__", "END", "GitLabClient", "Pipeline", "Stream", "StreamState", "Ok", "Err"]
