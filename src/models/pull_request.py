"""Pull Request data models for the GitHub GraphQL API and the dashboard."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PRStatus(str, Enum):
    """Dashboard status label enumeration."""
    DRAFT = "Draft"
    MERGED = "Merged"
    CLOSED = "Closed"
    APPROVED = "Approved"
    CHANGES_REQUESTED = "Changes Requested"
    OPEN = "Open"


def current_timestamp_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class ReviewAuthor(BaseModel):
    login: str = Field(..., description="GitHub login of the reviewer")


class Review(BaseModel):
    """A single pull request review."""

    state: str = Field(..., description="Review state (APPROVED, CHANGES_REQUESTED, COMMENTED)")
    author: Optional[ReviewAuthor] = Field(None, description="Review author, null for deleted accounts")


class Assignee(BaseModel):
    login: Optional[str] = None


class StatusCheckRollup(BaseModel):
    state: str = Field(..., description="Aggregated CI state (SUCCESS, FAILURE, PENDING, ERROR, EXPECTED)")


class Commit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_check_rollup: Optional[StatusCheckRollup] = Field(None, alias="statusCheckRollup")


class CommitNode(BaseModel):
    commit: Optional[Commit] = None


class AssigneeConnection(BaseModel):
    nodes: List[Optional[Assignee]] = Field(default_factory=list)


class ReviewConnection(BaseModel):
    nodes: List[Review] = Field(default_factory=list)


class CommitConnection(BaseModel):
    nodes: List[Optional[CommitNode]] = Field(default_factory=list)


class UpstreamPullRequest(BaseModel):
    """Pull request node as returned by the GitHub GraphQL API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="GraphQL node ID")
    title: str = Field(..., description="Pull request title")
    state: str = Field(..., description="Pull request state (OPEN, CLOSED, MERGED)")
    created_at: str = Field(..., alias="createdAt", description="Creation timestamp")
    closed_at: Optional[str] = Field(None, alias="closedAt", description="Closure timestamp")
    is_draft: bool = Field(False, alias="isDraft", description="Whether the pull request is a draft")
    merged_at: Optional[str] = Field(None, alias="mergedAt", description="Merge timestamp")
    url: str = Field(..., description="Canonical pull request URL")
    number: int = Field(..., description="Pull request number")
    assignees: AssigneeConnection = Field(default_factory=AssigneeConnection)
    reviews: ReviewConnection = Field(default_factory=ReviewConnection)
    commits: CommitConnection = Field(default_factory=CommitConnection)

    @field_validator('assignees', 'reviews', 'commits', mode='before')
    @classmethod
    def _null_connection_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class DashboardPullRequest(BaseModel):
    """Pull request record returned to the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    state: str
    created_at: str
    closed_at: Optional[str] = None
    is_draft: bool = Field(..., alias="isDraft")
    is_merged: bool = Field(..., alias="isMerged")
    url: str
    number: int
    assignee: Optional[str] = None
    reviews: List[Review] = Field(default_factory=list)
    ci_status: Optional[str] = Field(None, alias="ciStatus")
    status: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with dashboard keys, leaving out absent assignee and CI status."""
        data = self.model_dump(by_alias=True)
        # Reviews keep only the keys GitHub sent
        data['reviews'] = [review.model_dump(exclude_unset=True) for review in self.reviews]
        for key in ('assignee', 'ciStatus'):
            if data[key] is None:
                del data[key]
        return data


class PullRequestDashboardResponse(BaseModel):
    """Body of the GET /api/github/pr response."""

    model_config = ConfigDict(populate_by_name=True)

    pull_requests: List[DashboardPullRequest] = Field(default_factory=list, alias="pullRequests")
    timestamp: int = Field(default_factory=lambda: current_timestamp_ms(), description="Response time in epoch milliseconds")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pullRequests": [pr.to_dict() for pr in self.pull_requests],
            "timestamp": self.timestamp,
        }
