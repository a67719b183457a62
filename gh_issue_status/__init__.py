"""Live GitHub issue status for rendered specification documents."""

__version__ = "0.1.0"
