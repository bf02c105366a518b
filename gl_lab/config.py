"""Token and instance URL resolution."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from gl_lab.errors import ConfigurationError
from gl_lab.models import CONFIG_ENV, DEFAULT_GITLAB_URL, TOKEN_ENV, URL_ENV


@dataclass(frozen=True)
class Config:
    """Settings resolved once per invocation."""

    base_url: str = DEFAULT_GITLAB_URL
    token: str | None = field(default=None, repr=False)

    def require_token(self) -> str:
        if not self.token:
            raise ConfigurationError(
                f"No GitLab token found. Pass --token, set {TOKEN_ENV}, or add \"token\" to the config file."
            )
        return self.token


def default_config_path(environ: Mapping[str, str] = os.environ) -> Path:
    """$LAB_CONFIG, else $XDG_CONFIG_HOME/lab/config.json, else ~/.config/lab/config.json."""
    if environ.get(CONFIG_ENV):
        return Path(environ[CONFIG_ENV]).expanduser()
    base = environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "lab" / "config.json"


def load_config_file(path: Path) -> dict:
    """Read the JSON config file. A missing file yields an empty mapping."""
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return data


def resolve_config(
    token: str | None = None,
    gitlab_url: str | None = None,
    environ: Mapping[str, str] = os.environ,
    config_path: Path | None = None,
) -> Config:
    """
    Resolve settings from, in order of precedence: explicit flags, environment
    variables, then the config file.

    The config file is only read when a flag or environment variable leaves
    something unresolved.
    """
    resolved_token = token or environ.get(TOKEN_ENV)
    resolved_url = gitlab_url or environ.get(URL_ENV)

    if not resolved_token or not resolved_url:
        file_values = load_config_file(config_path or default_config_path(environ))
        resolved_token = resolved_token or file_values.get("token")
        resolved_url = resolved_url or file_values.get("gitlab_url")

    return Config(base_url=resolved_url or DEFAULT_GITLAB_URL, token=resolved_token or None)
