"""Test configuration and fixtures."""

from collections.abc import Callable, Iterator

import httpx
import pytest

from gh_issue_status.config import GitHubConfig
from gh_issue_status.github_client.cache import default_cache
from gh_issue_status.notifications import PubSubHub

API = "https://api.github.com/repos/testorg/testrepo"


@pytest.fixture
def config() -> GitHubConfig:
    """Configuration without credentials."""
    return GitHubConfig(githubAPI=API)


@pytest.fixture
def hub() -> PubSubHub:
    """Isolated notification hub."""
    return PubSubHub()


@pytest.fixture
def published(hub: PubSubHub) -> dict[str, list[str]]:
    """Messages published on the hub, by topic."""
    messages: dict[str, list[str]] = {"warning": [], "error": []}
    hub.sub("warning", messages["warning"].append)
    hub.sub("error", messages["error"].append)
    return messages


@pytest.fixture
def mock_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by handler."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture(autouse=True)
def clear_default_cache() -> Iterator[None]:
    """Start and finish every test with an empty process-wide cache."""
    default_cache.clear()
    yield
    default_cache.clear()
