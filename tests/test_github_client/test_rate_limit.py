"""Tests for rate limit detection."""

from unittest.mock import patch

import httpx
import pytest

from gh_issue_status.github_client import rate_limit
from gh_issue_status.github_client.rate_limit import (
    RATE_LIMIT_WARNING,
    RateLimitGuard,
    check_limit_reached,
)
from gh_issue_status.notifications import PubSubHub


def make_response(status: int, remaining: str | None) -> httpx.Response:
    headers = {} if remaining is None else {"X-RateLimit-Remaining": remaining}
    return httpx.Response(status, headers=headers)


class TestRateLimitGuard:
    """Test RateLimitGuard."""

    @pytest.mark.parametrize(
        "status,remaining,expected",
        [
            (403, "0", True),
            (403, "5", False),
            (403, None, False),
            (200, "0", False),
            (429, "0", False),
            (404, "0", False),
        ],
    )
    def test_check_detects_exhaustion(
        self,
        hub: PubSubHub,
        status: int,
        remaining: str | None,
        expected: bool,
    ) -> None:
        """Test only 403 with zero remaining counts as exhausted."""
        guard = RateLimitGuard(hub)

        assert guard.check(make_response(status, remaining)) is expected

    def test_warns_only_once(
        self, hub: PubSubHub, published: dict[str, list[str]]
    ) -> None:
        """Test repeated exhaustion publishes a single warning."""
        guard = RateLimitGuard(hub)

        results = [guard.check(make_response(403, "0")) for _ in range(3)]

        assert results == [True, True, True]
        assert published["warning"] == [RATE_LIMIT_WARNING]
        assert guard.has_warned()

    def test_no_warning_when_not_exhausted(
        self, hub: PubSubHub, published: dict[str, list[str]]
    ) -> None:
        """Test no warning for a normal response."""
        guard = RateLimitGuard(hub)

        guard.check(make_response(200, "4999"))

        assert published["warning"] == []
        assert not guard.has_warned()

    def test_mark_warned_suppresses_warning(
        self, hub: PubSubHub, published: dict[str, list[str]]
    ) -> None:
        """Test a guard marked as warned stays quiet."""
        guard = RateLimitGuard(hub)
        guard.mark_warned()

        assert guard.check(make_response(403, "0"))
        assert published["warning"] == []

    def test_guards_are_independent(
        self, hub: PubSubHub, published: dict[str, list[str]]
    ) -> None:
        """Test each guard warns once on its own."""
        RateLimitGuard(hub).check(make_response(403, "0"))
        RateLimitGuard(hub).check(make_response(403, "0"))

        assert len(published["warning"]) == 2


class TestCheckLimitReached:
    """Test the module-level check_limit_reached."""

    def test_uses_given_guard(
        self, hub: PubSubHub, published: dict[str, list[str]]
    ) -> None:
        """Test an explicit guard is used."""
        guard = RateLimitGuard(hub)

        assert check_limit_reached(make_response(403, "0"), guard)
        assert published["warning"] == [RATE_LIMIT_WARNING]

    def test_default_guard_warns_once_per_process(
        self, hub: PubSubHub, published: dict[str, list[str]]
    ) -> None:
        """Test the default guard is shared between calls."""
        with patch.object(rate_limit, "default_guard", RateLimitGuard(hub)):
            for _ in range(4):
                assert check_limit_reached(make_response(403, "0"))

        assert published["warning"] == [RATE_LIMIT_WARNING]

    def test_false_for_remaining_quota(self) -> None:
        """Test remaining quota is not exhaustion."""
        assert not check_limit_reached(make_response(403, "5"))
