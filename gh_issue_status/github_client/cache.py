"""In-memory response cache used for issue lookups."""

import logging
import time
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

# One day, in seconds
DEFAULT_MAX_AGE = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 1000


@dataclass
class CachedResponse:
    response: httpx.Response
    stored_at: float


class ResponseCache:
    """Cache-aware fetch for GET requests.

    Entries live for the lifetime of the cache object only; nothing is
    written to disk. At most max_entries responses are kept, the least
    recently stored being evicted first.
    """

    def __init__(
        self,
        max_age: float = DEFAULT_MAX_AGE,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        """Initialize cache.

        Args:
            max_age: Seconds a stored response is served without revalidation
            max_entries: Number of responses kept before evicting the oldest
        """
        self.max_age = max_age
        self.max_entries = max_entries
        self._entries: dict[tuple[str, str], CachedResponse] = {}

    def _key(self, request: httpx.Request) -> tuple[str, str]:
        return request.method, str(request.url)

    def _is_fresh(self, entry: CachedResponse) -> bool:
        return time.monotonic() - entry.stored_at < self.max_age

    async def fetch(
        self, client: httpx.AsyncClient, request: httpx.Request
    ) -> httpx.Response:
        """Send request, answering from cache when a fresh entry exists.

        A failed (non-2xx) response is replaced by a stale cached response
        when one is available.

        Args:
            client: HTTP client used for network requests
            request: Request to send

        Returns:
            Cached or freshly fetched response
        """
        if request.method != "GET":
            return await client.send(request)

        key = self._key(request)
        cached = self._entries.get(key)
        if cached and self._is_fresh(cached):
            logger.debug("Cache hit for %s", request.url)
            return cached.response

        response = await client.send(request)
        if not response.is_success:
            if cached:
                logger.warning("Returning a stale cached response for %s", request.url)
                return cached.response
            return response

        self._store(key, response)
        return response

    def _store(self, key: tuple[str, str], response: httpx.Response) -> None:
        self._entries.pop(key, None)
        self._entries[key] = CachedResponse(response=response, stored_at=time.monotonic())
        while len(self._entries) > self.max_entries:
            del self._entries[next(iter(self._entries))]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


default_cache = ResponseCache()
