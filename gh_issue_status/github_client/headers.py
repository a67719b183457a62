"""Request headers for the GitHub REST API."""

import base64

from ..config import GitHubConfig

# Rendered HTML bodies. See: https://docs.github.com/en/rest/using-the-rest-api/media-types
ISSUE_MEDIA_TYPE = "application/vnd.github.v3.html+json"
LIST_MEDIA_TYPE = "application/vnd.github.v3+json"


def github_request_headers(config: GitHubConfig) -> dict[str, str]:
    """Build Accept and Authorization headers for config.

    Basic auth is used when both user and token are set, a token header when
    only the token is set, and no Authorization header otherwise.
    """
    headers = {"Accept": ISSUE_MEDIA_TYPE}

    if config.github_user and config.github_token:
        credentials = base64.b64encode(
            f"{config.github_user}:{config.github_token}".encode()
        ).decode("ascii")
        headers["Authorization"] = f"Basic {credentials}"
    elif config.github_token:
        headers["Authorization"] = f"token {config.github_token}"

    return headers
