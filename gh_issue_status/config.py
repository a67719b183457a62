"""Configuration for GitHub API access."""

import os
import re

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_BASE = "https://api.github.com"

# Accepts "owner/repo" and "https://github.com/owner/repo[/anything]"
REPO_PATTERN = re.compile(
    r"^(?:https?://github\.com/)?(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?/?(?:/.*)?$"
)


def repo_api_url(repo: str, api_base: str = DEFAULT_API_BASE) -> str:
    """Resolve a repository reference to its REST API base URL.

    Args:
        repo: Repository as "owner/repo" or a github.com URL
        api_base: Root of the GitHub REST API

    Returns:
        URL of the form "{api_base}/repos/{owner}/{repo}"

    Raises:
        ValueError: If the reference does not name a repository
    """
    match = REPO_PATTERN.match(repo.strip())
    if not match:
        raise ValueError(
            f"Invalid GitHub repository '{repo}'. Expected 'owner/repo' or a "
            "https://github.com/owner/repo URL."
        )
    return f"{api_base.rstrip('/')}/repos/{match['owner']}/{match['repo']}"


class GitHubConfig(BaseModel):
    """Credentials and endpoint used for one retrieval run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    github_user: str | None = Field(
        None, alias="githubUser", description="GitHub username for Basic auth"
    )
    github_token: str | None = Field(
        None, alias="githubToken", description="Personal access token"
    )
    github_api: str = Field(
        ...,
        alias="githubAPI",
        description="Repository API base, e.g. https://api.github.com/repos/o/r",
    )
    max_concurrency: int | None = Field(
        None, ge=1, description="Cap on simultaneous issue requests (None = no cap)"
    )
    max_pages: int | None = Field(
        None, ge=1, description="Cap on pages followed by fetch_all (None = no cap)"
    )

    @field_validator("github_api")
    @classmethod
    def validate_github_api(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("github_api must not be empty")
        return value

    @classmethod
    def from_env(
        cls, github_api: str | None = None, repo: str | None = None, **overrides
    ) -> "GitHubConfig":
        """Build configuration from explicit values, .env and the environment.

        Explicit github_api wins over repo, which wins over GITHUB_API, which
        wins over GITHUB_REPO.

        Args:
            github_api: Explicit repository API base URL
            repo: Repository reference resolved with repo_api_url
            **overrides: Other fields; None values fall back to the environment

        Raises:
            ValueError: If no API location can be determined
        """
        load_dotenv()

        if github_api is None and repo:
            github_api = repo_api_url(repo)
        if github_api is None:
            github_api = os.getenv("GITHUB_API")
        if github_api is None and os.getenv("GITHUB_REPO"):
            github_api = repo_api_url(os.environ["GITHUB_REPO"])
        if not github_api:
            raise ValueError(
                "GitHub API location is required. Pass a repository or set "
                "GITHUB_API / GITHUB_REPO environment variable."
            )

        values = {k: v for k, v in overrides.items() if v is not None}
        values.setdefault("github_user", os.getenv("GITHUB_USER"))
        values.setdefault("github_token", os.getenv("GITHUB_TOKEN"))
        return cls(github_api=github_api, **values)
