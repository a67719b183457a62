"""Command-line interface for gh-issue-status."""
