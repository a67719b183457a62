"""Pydantic models for GitHub issue data embedded in documents.

These models map to GitHub's REST API v3 issue responses.
API Reference: https://docs.github.com/en/rest/issues/issues
"""

from pydantic import BaseModel, ConfigDict, Field


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str = Field(
        ..., description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class FetchError(BaseModel):
    """Failure to retrieve a single issue.

    Custom model, not part of the GitHub API. Carries either the message
    GitHub returned (e.g. "Not Found") or a local parsing/network failure.
    """

    issue_number: int = Field(..., description="Issue number that failed")
    message: str = Field("", description="Error message, possibly empty")
    status: int | None = Field(
        None, description="HTTP status, None when no response was received"
    )


class IssueRecord(BaseModel):
    """Issue status as shown in a rendered document.

    Maps to the GitHub REST API Issue object. Fields this model does not
    declare are kept as extra attributes, so html_url, user, etc. remain
    available to callers.
    """

    model_config = ConfigDict(extra="allow")

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field("", description="Short description/title of the issue (string)")
    state: str = Field("", description="Current state: 'open', 'closed' (string)")
    message: str = Field(
        "", description="Error message from GitHub or local parsing, empty on success"
    )
    body_html: str | None = Field(
        None, description="Issue body rendered as HTML (string)"
    )
    labels: list[GitHubLabel] | None = Field(
        None, description="Array of labels attached to the issue"
    )
    error: FetchError | None = Field(
        None, description="Set when the issue could not be retrieved"
    )

    @property
    def ok(self) -> bool:
        """True when the issue was retrieved without error."""
        return self.error is None
