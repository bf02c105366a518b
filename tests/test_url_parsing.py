"""Unit tests for project reference parsing in GitLabClient."""


# Constants (also defined in conftest.py for fixtures)
MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"


class TestExtractPathFromUrl:
    """Tests for _extract_path_from_url method."""

    def test_full_https_url(self, mock_client):
        """Full HTTPS URL extracts path correctly."""
        result = mock_client._extract_path_from_url("https://gitlab.com/org/project")
        assert result == "org/project"

    def test_url_with_trailing_slash(self, mock_client):
        result = mock_client._extract_path_from_url("https://gitlab.com/org/project/")
        assert result == "org/project"

    def test_url_with_git_suffix(self, mock_client):
        """URL with .git suffix strips it."""
        result = mock_client._extract_path_from_url("https://gitlab.com/org/project.git")
        assert result == "org/project"

    def test_url_with_merge_request_path(self, mock_client):
        """URL with /-/ resource path strips it."""
        result = mock_client._extract_path_from_url("https://gitlab.com/org/sub/project/-/merge_requests/3")
        assert result == "org/sub/project"

    def test_bare_path_with_slashes(self, mock_client):
        result = mock_client._extract_path_from_url("/org/project/")
        assert result == "org/project"


class TestProjectRef:
    """Tests for project_ref, used to build /projects/:id endpoints."""

    def test_numeric_id_unchanged(self, mock_client):
        assert mock_client.project_ref(42) == "42"
        assert mock_client.project_ref("42") == "42"

    def test_path_is_url_encoded(self, mock_client):
        assert mock_client.project_ref("myorg/team/app") == "myorg%2Fteam%2Fapp"

    def test_web_url_is_reduced_to_path(self, mock_client):
        assert mock_client.project_ref(f"{MOCK_GITLAB_URL}/myorg/app.git") == "myorg%2Fapp"


class TestRequestBuilding:
    """Tests for GitLabClient.request."""

    def test_relative_endpoint_joins_api_root(self, mock_client):
        request = mock_client.request("get", "/projects/1")
        assert request.method == "GET"
        assert request.url == f"{MOCK_API_URL}/projects/1"
        assert request.token == "test-token"

    def test_endpoint_without_leading_slash(self, mock_client):
        assert mock_client.request("GET", "version").url == f"{MOCK_API_URL}/version"

    def test_absolute_url_is_kept(self, mock_client):
        url = "https://other.example.com/api/v4/x"
        assert mock_client.request("GET", url).url == url

    def test_trailing_slash_in_base_url(self):
        from gl_lab.client import GitLabClient

        client = GitLabClient(f"{MOCK_GITLAB_URL}/")
        assert client.api_url == MOCK_API_URL
