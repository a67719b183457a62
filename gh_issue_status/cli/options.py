"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

# Repository options
REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="GitHub repository as owner/repo or URL (defaults to GITHUB_REPO env var)",
)

API_OPTION = typer.Option(
    None,
    "--api",
    help="Repository API base URL, e.g. https://api.github.com/repos/owner/repo",
)

# Authentication options
USER_OPTION = typer.Option(
    None, "--user", "-u", help="GitHub username (defaults to GITHUB_USER env var)"
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

# Fetch behaviour options
CONCURRENCY_OPTION = typer.Option(
    None,
    "--concurrency",
    "-c",
    min=1,
    help="Maximum simultaneous issue requests (default: unlimited)",
)

MAX_PAGES_OPTION = typer.Option(
    None, "--max-pages", min=1, help="Stop after this many pages (default: unlimited)"
)

# Output options
JSON_OPTION = typer.Option(False, "--json", help="Print results as JSON")

OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Write JSON to this file instead of stdout"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

DOCUMENT_ARGUMENT = typer.Argument(
    ..., exists=True, dir_okay=False, readable=True, help="HTML document to scan"
)

URL_ARGUMENT = typer.Argument(..., help="First page URL of a GitHub list endpoint")

