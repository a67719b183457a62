"""Link-header pagination over GitHub list endpoints."""

import logging
import re
from collections.abc import Mapping
from typing import Any

import httpx

from .headers import LIST_MEDIA_TYPE

logger = logging.getLogger(__name__)

PER_PAGE = "100"

# Link: <url1>; rel="next", <url2>; rel="foo"; bar="baz"
# See: https://docs.github.com/en/rest/using-the-rest-api/using-pagination-in-the-rest-api
NEXT_LINK_PATTERN = re.compile(r'<([^>]+)>\s*;\s*rel="next"')


def find_next(header: str | None) -> str | None:
    """Extract the rel="next" URL from a Link header, if any."""
    match = NEXT_LINK_PATTERN.search(header or "")
    return match.group(1) if match else None


def with_per_page(url: str) -> str:
    """Add per_page=100 to url unless it already sets per_page."""
    parsed = httpx.URL(url)
    if "per_page" in parsed.params:
        return str(parsed)
    return str(parsed.copy_add_param("per_page", PER_PAGE))


async def fetch_all(
    url: str,
    headers: Mapping[str, str],
    output: list[Any] | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    max_pages: int | None = None,
) -> list[Any]:
    """Fetch every page of a GitHub list endpoint.

    Pages are requested one after another, following the rel="next" entry of
    each response's Link header until there is none. Requests bypass the
    response cache.

    Args:
        url: First page URL
        headers: Request headers, e.g. from github_request_headers(). Accept
            is always replaced with the JSON media type.
        output: Accumulator to extend; a new list when None
        client: HTTP client to use; a temporary one is opened when None
        max_pages: Stop after this many pages. None follows the chain to
            its end, however long the server makes it.

    Returns:
        The accumulator, holding the items of every page in page order.
        Pages whose body is not a JSON array contribute nothing.
    """
    if output is None:
        output = []

    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await fetch_all(
                url, headers, output, client=own_client, max_pages=max_pages
            )

    request_headers = httpx.Headers(headers)
    request_headers["Accept"] = LIST_MEDIA_TYPE

    next_url: str | None = url
    pages = 0
    while next_url:
        if max_pages is not None and pages >= max_pages:
            logger.warning(
                "Stopped after %d pages, %s not fetched", max_pages, next_url
            )
            break

        response = await client.get(with_per_page(next_url), headers=request_headers)
        pages += 1

        data = response.json()
        if isinstance(data, list):
            output.extend(data)
        else:
            logger.debug(
                "Page %s returned %s, not a list (HTTP %s)",
                next_url,
                type(data).__name__,
                response.status_code,
            )

        next_url = find_next(response.headers.get("Link"))

    return output
