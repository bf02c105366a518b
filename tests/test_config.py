"""Tests for token and URL resolution."""

import json

import pytest

from gl_lab.config import Config, default_config_path, load_config_file, resolve_config
from gl_lab.errors import ConfigurationError
from gl_lab.models import DEFAULT_GITLAB_URL


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "lab" / "config.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"token": "file-token", "gitlab_url": "https://file.example.com"}))
    return path


class TestTokenPrecedence:
    """Flag beats environment beats config file."""

    def test_flag_wins(self, config_file):
        config = resolve_config(token="flag-token", environ={"GITLAB_TOKEN": "env-token"}, config_path=config_file)
        assert config.token == "flag-token"

    def test_env_beats_file(self, config_file):
        config = resolve_config(environ={"GITLAB_TOKEN": "env-token"}, config_path=config_file)
        assert config.token == "env-token"

    def test_file_used_last(self, config_file):
        config = resolve_config(environ={}, config_path=config_file)
        assert config.token == "file-token"

    def test_missing_everywhere(self, tmp_path):
        config = resolve_config(environ={}, config_path=tmp_path / "absent.json")

        assert config.token is None
        with pytest.raises(ConfigurationError):
            config.require_token()

    def test_empty_env_value_is_ignored(self, config_file):
        config = resolve_config(environ={"GITLAB_TOKEN": ""}, config_path=config_file)
        assert config.token == "file-token"


class TestBaseUrl:
    def test_default_url(self, tmp_path):
        config = resolve_config(environ={}, config_path=tmp_path / "absent.json")
        assert config.base_url == DEFAULT_GITLAB_URL

    def test_flag_then_env_then_file(self, config_file):
        assert resolve_config(gitlab_url="https://flag.example.com", config_path=config_file, environ={}).base_url == (
            "https://flag.example.com"
        )
        assert resolve_config(environ={"GITLAB_URL": "https://env.example.com"}, config_path=config_file).base_url == (
            "https://env.example.com"
        )
        assert resolve_config(environ={}, config_path=config_file).base_url == "https://file.example.com"


class TestConfigFile:
    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_config_file(path)

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('["token"]')

        with pytest.raises(ConfigurationError):
            load_config_file(path)

    def test_file_not_read_when_flags_resolve_everything(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        config = resolve_config(token="t", gitlab_url="https://x.example.com", environ={}, config_path=path)
        assert config == Config(base_url="https://x.example.com", token="t")

    def test_default_path_from_lab_config(self, tmp_path):
        path = default_config_path({"LAB_CONFIG": str(tmp_path / "custom.json")})
        assert path == tmp_path / "custom.json"

    def test_default_path_from_xdg(self, tmp_path):
        path = default_config_path({"XDG_CONFIG_HOME": str(tmp_path)})
        assert path == tmp_path / "lab" / "config.json"

    def test_token_not_in_repr(self):
        assert "secret" not in repr(Config(token="secret"))
