"""Tests for the GitHub tag and branch client."""

from unittest.mock import patch

import pytest

from repository.github import GitHubClient, RepositoryError, split_repository


@pytest.fixture
def client():
    return GitHubClient(base_url="https://api.example.test/", token="ghp_testtoken")


class TestSplitRepository:
    """owner/repo slug handling."""

    def test_valid(self):
        assert split_repository("octo/widgets") == ("octo", "widgets")

    @pytest.mark.parametrize("slug", ["", "octo", "octo/widgets/extra", "/widgets"])
    def test_invalid(self, slug):
        with pytest.raises(ValueError):
            split_repository(slug)


class TestGitHubClient:
    """REST calls against a mocked get_json."""

    def test_headers_carry_token(self, client):
        headers = client._get_headers()
        assert headers["Authorization"] == "Bearer ghp_testtoken"
        assert headers["Accept"] == "application/vnd.github+json"

    def test_headers_without_token(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        assert "Authorization" not in GitHubClient(base_url="https://x")._get_headers()

    def test_base_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.test/api/v3")
        assert GitHubClient().base_url == "https://ghe.example.test/api/v3"

    @patch("repository.github.get_json")
    def test_default_branch(self, mock_get_json, client):
        mock_get_json.return_value = (200, {}, {"default_branch": "main"})
        assert client.get_default_branch("octo", "widgets") == "main"
        mock_get_json.assert_called_once()
        assert mock_get_json.call_args[0][0] == "https://api.example.test/repos/octo/widgets"

    @patch("repository.github.get_json")
    def test_default_branch_error(self, mock_get_json, client):
        mock_get_json.return_value = (404, {}, None)
        with pytest.raises(RepositoryError):
            client.get_default_branch("octo", "widgets")

    @patch("repository.github.get_json")
    def test_tags_follow_link_header(self, mock_get_json, client):
        next_url = "https://api.example.test/repos/octo/widgets/tags?per_page=100&page=2"
        mock_get_json.side_effect = [
            (200, {"Link": f'<{next_url}>; rel="next", <{next_url}>; rel="last"'},
             [{"name": "v1.2.1"}, {"name": "v1.2.0"}]),
            (200, {}, [{"name": "v1.1.0"}, {"commit": {}}]),
        ]

        tags = client.get_tags("octo", "widgets")

        assert tags == ["v1.2.1", "v1.2.0", "v1.1.0"]
        urls = [call[0][0] for call in mock_get_json.call_args_list]
        assert urls == [
            "https://api.example.test/repos/octo/widgets/tags?per_page=100",
            next_url,
        ]

    @patch("repository.github.get_json")
    def test_no_tags(self, mock_get_json, client):
        mock_get_json.return_value = (200, {}, [])
        assert client.get_tags("octo", "widgets") == []

    @patch("repository.github.get_json")
    def test_tags_failure_raises(self, mock_get_json, client):
        mock_get_json.return_value = (0, {}, None)
        with pytest.raises(RepositoryError):
            client.get_tags("octo", "widgets")
