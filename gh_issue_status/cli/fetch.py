"""CLI commands for fetching issue status and paginated collections."""

import asyncio
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from ..config import GitHubConfig
from ..github_client.headers import github_request_headers
from ..github_client.issues import fetch_and_store_github_issues
from ..github_client.models import IssueRecord
from ..github_client.pagination import fetch_all
from ..notifications import ERROR, WARNING, hub
from .options import (
    API_OPTION,
    CONCURRENCY_OPTION,
    DOCUMENT_ARGUMENT,
    JSON_OPTION,
    MAX_PAGES_OPTION,
    OUTPUT_OPTION,
    REPO_OPTION,
    TOKEN_OPTION,
    URL_ARGUMENT,
    USER_OPTION,
    VERBOSE_OPTION,
)

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _show_notifications() -> Iterator[None]:
    """Print hub warnings and errors to stderr while the block runs."""
    subscriptions = [
        hub.sub(WARNING, lambda msg: err_console.print(Text(f"⚠️  {msg}", "yellow"))),
        hub.sub(ERROR, lambda msg: err_console.print(Text(f"❌ {msg}", "red"))),
    ]
    try:
        yield
    finally:
        for subscription in subscriptions:
            hub.unsub(subscription)


def _label_text(issue: IssueRecord) -> Text:
    text = Text()
    for i, label in enumerate(issue.labels or []):
        if i:
            text.append(", ")
        text.append(label.name, style=f"#{label.color}")
    return text


def issues(
    document: Path = DOCUMENT_ARGUMENT,
    repo: str | None = REPO_OPTION,
    api: str | None = API_OPTION,
    user: str | None = USER_OPTION,
    token: str | None = TOKEN_OPTION,
    concurrency: int | None = CONCURRENCY_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the GitHub status of every issue referenced in an HTML document.

    Issues are referenced by elements like <div class="issue" data-number="42">.

    Examples:
        gh-issue-status issues spec.html --repo w3c/respec
        gh-issue-status issues spec.html --repo w3c/respec --json
    """
    _setup_logging(verbose)

    try:
        config = GitHubConfig.from_env(
            github_api=api,
            repo=repo,
            github_user=user,
            github_token=token,
            max_concurrency=concurrency,
        )
    except (ValueError, ValidationError) as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    try:
        html = document.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"❌ Could not read {document}: {e}")
        raise typer.Exit(1)

    with _show_notifications():
        results = asyncio.run(fetch_and_store_github_issues(config, html))

    if as_json:
        payload = {
            str(number): issue.model_dump(mode="json", exclude_none=True)
            for number, issue in sorted(results.items())
        }
        console.print_json(json.dumps(payload))
        return

    if not results:
        console.print("No issue references found.")
        return

    table = Table(title=f"Issues referenced in {document.name}")
    table.add_column("Number", style="cyan", justify="right")
    table.add_column("State", style="green")
    table.add_column("Title")
    table.add_column("Labels")
    table.add_column("Error", style="red")

    for number, issue in sorted(results.items()):
        table.add_row(
            f"#{number}",
            issue.state,
            Text(issue.title),
            _label_text(issue),
            Text(issue.error.message) if issue.error else "",
        )

    console.print(table)
    failed = sum(1 for issue in results.values() if not issue.ok)
    if failed:
        console.print(f"⚠️  {failed}/{len(results)} issues could not be fetched")


def fetch_all_command(
    url: str = URL_ARGUMENT,
    user: str | None = USER_OPTION,
    token: str | None = TOKEN_OPTION,
    max_pages: int | None = MAX_PAGES_OPTION,
    output: Path | None = OUTPUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Fetch every page of a GitHub list endpoint as one JSON array.

    Examples:
        gh-issue-status fetch-all https://api.github.com/repos/w3c/respec/contributors
        gh-issue-status fetch-all https://api.github.com/repos/w3c/respec/commits \\
            --max-pages 5 -o commits.json
    """
    _setup_logging(verbose)

    try:
        config = GitHubConfig.from_env(
            github_api=url, github_user=user, github_token=token, max_pages=max_pages
        )
    except (ValueError, ValidationError) as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)
    headers = github_request_headers(config)

    try:
        items = asyncio.run(fetch_all(url, headers, max_pages=config.max_pages))
    except (httpx.HTTPError, ValueError) as e:
        console.print(f"❌ Error fetching {url}: {e}")
        raise typer.Exit(1)

    text = json.dumps(items, indent=2)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        console.print(f"✅ Saved {len(items)} items to {output}")
    else:
        console.print_json(text)
