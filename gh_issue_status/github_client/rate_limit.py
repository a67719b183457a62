"""Detection of exhausted GitHub API quota."""

import logging

import httpx

from ..notifications import WARNING, PubSubHub
from ..notifications import hub as default_hub

logger = logging.getLogger(__name__)

RATE_LIMIT_WARNING = (
    "You have run out of github requests. Some github assets will not show up."
)


class RateLimitGuard:
    """Detects quota exhaustion and warns about it once.

    Each guard warns at most once in its lifetime. The module-level
    default_guard gives process-wide behaviour; create a separate guard to
    scope the warning to a session.
    """

    def __init__(self, hub: PubSubHub | None = None):
        """Initialize guard.

        Args:
            hub: Hub to publish the warning on. Defaults to the process-wide hub.
        """
        self.hub = hub or default_hub
        self._warned = False

    def has_warned(self) -> bool:
        return self._warned

    def mark_warned(self) -> None:
        self._warned = True

    def check(self, response: httpx.Response) -> bool:
        """Return True if response reports an exhausted rate limit.

        The caller is expected to carry on and parse the body; this only
        detects and reports.
        """
        if (
            response.status_code != 403
            or response.headers.get("X-RateLimit-Remaining") != "0"
        ):
            return False

        if not self.has_warned():
            self.mark_warned()
            logger.warning("GitHub rate limit reached")
            self.hub.pub(WARNING, RATE_LIMIT_WARNING)
        return True


default_guard = RateLimitGuard()


def check_limit_reached(
    response: httpx.Response, guard: RateLimitGuard | None = None
) -> bool:
    """Check response against guard, or the process-wide default guard."""
    return (guard or default_guard).check(response)
