"""Tests for GitHub request headers."""

import base64

from gh_issue_status.config import GitHubConfig
from gh_issue_status.github_client.headers import (
    ISSUE_MEDIA_TYPE,
    github_request_headers,
)

API = "https://api.github.com/repos/testorg/testrepo"


class TestGitHubRequestHeaders:
    """Test github_request_headers."""

    def test_basic_auth_with_user_and_token(self) -> None:
        """Test user and token produce Basic credentials."""
        config = GitHubConfig(githubAPI=API, githubUser="octocat", githubToken="s3cret")

        headers = github_request_headers(config)

        assert headers["Authorization"].startswith("Basic ")
        encoded = headers["Authorization"].removeprefix("Basic ")
        assert base64.b64decode(encoded).decode() == "octocat:s3cret"

    def test_token_only(self) -> None:
        """Test a token without user uses the token scheme."""
        config = GitHubConfig(githubAPI=API, githubToken="s3cret")

        assert github_request_headers(config)["Authorization"] == "token s3cret"

    def test_no_credentials(self) -> None:
        """Test no Authorization header without credentials."""
        headers = github_request_headers(GitHubConfig(githubAPI=API))

        assert "Authorization" not in headers
        assert headers == {"Accept": ISSUE_MEDIA_TYPE}

    def test_user_without_token_is_anonymous(self) -> None:
        """Test a user alone is not enough for Basic auth."""
        config = GitHubConfig(githubAPI=API, githubUser="octocat")

        assert "Authorization" not in github_request_headers(config)

    def test_accept_requests_html_bodies(self) -> None:
        """Test Accept is always the HTML media type."""
        config = GitHubConfig(githubAPI=API, githubToken="s3cret")

        assert (
            github_request_headers(config)["Accept"]
            == "application/vnd.github.v3.html+json"
        )
