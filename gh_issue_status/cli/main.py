"""Main CLI entry point."""

import typer
from rich.console import Console

from .fetch import fetch_all_command, issues

app = typer.Typer(
    name="gh-issue-status",
    help="Live GitHub issue status for specification documents",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="issues", context_settings={"help_option_names": ["-h", "--help"]})(
    issues
)
app.command(
    name="fetch-all", context_settings={"help_option_names": ["-h", "--help"]}
)(fetch_all_command)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_issue_status import __version__

    console.print(f"gh-issue-status v{__version__}")


if __name__ == "__main__":
    app()
