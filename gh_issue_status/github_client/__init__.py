"""GitHub client package for API interaction."""

from .cache import ResponseCache
from .headers import github_request_headers
from .issues import IssueBatchFetcher, fetch_and_store_github_issues
from .models import FetchError, GitHubLabel, IssueRecord
from .pagination import fetch_all, find_next
from .rate_limit import RateLimitGuard, check_limit_reached

__all__ = [
    "FetchError",
    "GitHubLabel",
    "IssueBatchFetcher",
    "IssueRecord",
    "RateLimitGuard",
    "ResponseCache",
    "check_limit_reached",
    "fetch_all",
    "fetch_and_store_github_issues",
    "find_next",
    "github_request_headers",
]
