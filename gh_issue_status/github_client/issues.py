"""Concurrent retrieval of the GitHub issues a document references."""

import asyncio
import contextlib
import logging
from collections.abc import Iterable
from typing import Any

import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from ..config import GitHubConfig
from ..document import find_issue_references
from ..notifications import ERROR, PubSubHub
from ..notifications import hub as default_hub
from .cache import ResponseCache, default_cache
from .headers import github_request_headers
from .models import FetchError, IssueRecord
from .rate_limit import RateLimitGuard, default_guard

logger = logging.getLogger(__name__)


class IssueBatchFetcher:
    """Fetches many issues at once and normalizes them into IssueRecords."""

    def __init__(
        self,
        config: GitHubConfig,
        *,
        cache: ResponseCache | None = None,
        guard: RateLimitGuard | None = None,
        hub: PubSubHub | None = None,
        max_concurrency: int | None = None,
    ):
        """Initialize fetcher.

        Args:
            config: Credentials and repository API base
            cache: Cache-aware fetch primitive; the process-wide cache if None
            guard: Rate-limit guard; the process-wide guard if None
            hub: Hub for error notifications; the process-wide hub if None
            max_concurrency: Cap on in-flight requests. Falls back to
                config.max_concurrency; None means no cap.
        """
        self.config = config
        self.cache = cache if cache is not None else default_cache
        self.guard = guard if guard is not None else default_guard
        self.hub = hub if hub is not None else default_hub
        self.max_concurrency = max_concurrency or config.max_concurrency
        self.headers = github_request_headers(config)

    def issue_url(self, issue_number: int) -> str:
        return f"{self.config.github_api}/issues/{issue_number}"

    async def fetch_issues(
        self, issue_numbers: Iterable[int], client: httpx.AsyncClient | None = None
    ) -> dict[int, IssueRecord]:
        """Fetch issue_numbers concurrently.

        Args:
            issue_numbers: Positive issue numbers to fetch
            client: HTTP client to use; a temporary one is opened when None

        Returns:
            Dict mapping every requested issue number to its record
        """
        if client is None:
            async with httpx.AsyncClient() as own_client:
                return await self.fetch_issues(issue_numbers, own_client)

        semaphore = (
            asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        )
        tasks = [
            self._fetch_issue(client, issue_number, semaphore)
            for issue_number in dict.fromkeys(issue_numbers)
        ]
        results = await asyncio.gather(*tasks)
        return dict(results)

    async def _fetch_issue(
        self,
        client: httpx.AsyncClient,
        issue_number: int,
        semaphore: asyncio.Semaphore | None,
    ) -> tuple[int, IssueRecord]:
        request = client.build_request(
            "GET", self.issue_url(issue_number), headers=self.headers
        )
        async with semaphore or contextlib.nullcontext():
            try:
                response = await self.cache.fetch(client, request)
            except httpx.TransportError as e:
                message = str(e) or f"{type(e).__name__} fetching issue #{issue_number}"
                logger.error("Request for issue #%d failed: %s", issue_number, message)
                return issue_number, self._failed(issue_number, message, None)

        return issue_number, self.process_response(response, issue_number)

    def process_response(
        self, response: httpx.Response, issue_number: int
    ) -> IssueRecord:
        """Turn one issue response into an IssueRecord.

        "message" in a GitHub payload is always an error message.
        """
        self.guard.check(response)

        issue = {"title": "", "number": issue_number, "state": "", "message": ""}
        try:
            payload = response.json()
            if not isinstance(payload, dict):
                raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
        except ValueError:
            logger.exception("Could not parse issue #%d", issue_number)
            payload = {"message": f"Error JSON parsing issue #{issue_number} from GitHub."}

        record = self._merge(issue, payload, issue_number)

        if not response.is_success or record.message:
            self._report(issue_number, record.message, response.status_code)
            record.error = FetchError(
                issue_number=issue_number,
                message=record.message,
                status=response.status_code,
            )
        return record

    def _merge(
        self, issue: dict[str, Any], payload: dict[str, Any], issue_number: int
    ) -> IssueRecord:
        """Merge payload onto issue, keeping the defaults for fields that don't fit."""
        try:
            return IssueRecord.model_validate({**issue, **payload})
        except ValidationError as e:
            invalid = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            logger.warning(
                "Ignoring malformed fields of issue #%d: %s",
                issue_number,
                ", ".join(sorted(invalid)),
            )
            kept = {k: v for k, v in payload.items() if k not in invalid}
            return IssueRecord.model_validate({**issue, **kept})

    def _failed(self, issue_number: int, message: str, status: int | None) -> IssueRecord:
        self._report(issue_number, message, status)
        return IssueRecord(
            number=issue_number,
            message=message,
            error=FetchError(issue_number=issue_number, message=message, status=status),
        )

    def _report(self, issue_number: int, message: str, status: int | None) -> None:
        msg = (
            f"Error fetching issue #{issue_number} from GitHub. {message} "
            f"(HTTP Status {status})."
        )
        self.hub.pub(ERROR, msg)


async def fetch_and_store_github_issues(
    config: GitHubConfig,
    document: str | BeautifulSoup,
    *,
    client: httpx.AsyncClient | None = None,
    cache: ResponseCache | None = None,
    guard: RateLimitGuard | None = None,
    hub: PubSubHub | None = None,
) -> dict[int, IssueRecord]:
    """Fetch every issue referenced in document.

    Failures of individual issues are reported on the hub and recorded on the
    returned records; they never fail the batch. Exceptions from the fetch
    primitive other than network errors do propagate.

    Args:
        config: Credentials and repository API base
        document: HTML source or parsed document with .issue[data-number]
            elements
        client: HTTP client to use; a temporary one is opened when None
        cache: Cache-aware fetch primitive
        guard: Rate-limit guard
        hub: Hub for error notifications

    Returns:
        Dict mapping issue number to IssueRecord
    """
    issue_numbers = find_issue_references(document)
    fetcher = IssueBatchFetcher(config, cache=cache, guard=guard, hub=hub)
    return await fetcher.fetch_issues(issue_numbers, client)
