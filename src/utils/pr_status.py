"""Status derivation and dashboard mapping for GitHub pull requests."""

from typing import List, Dict, Any, Optional
from models.pull_request import (
    UpstreamPullRequest,
    DashboardPullRequest,
    PRStatus,
)


def get_pr_status(pr: UpstreamPullRequest) -> str:
    """
    Derive the dashboard status label for a pull request.

    Rules are checked in order and the first match wins. An approval
    outranks a changes-requested review no matter which came last.

    Args:
        pr: Upstream pull request node

    Returns:
        One of the PRStatus values
    """
    if pr.is_draft:
        return PRStatus.DRAFT.value
    if pr.merged_at is not None:
        return PRStatus.MERGED.value
    if pr.state == 'CLOSED':
        return PRStatus.CLOSED.value

    review_states = {review.state for review in pr.reviews.nodes}
    if 'APPROVED' in review_states:
        return PRStatus.APPROVED.value
    if 'CHANGES_REQUESTED' in review_states:
        return PRStatus.CHANGES_REQUESTED.value

    return PRStatus.OPEN.value


def _first_assignee(pr: UpstreamPullRequest) -> Optional[str]:
    if not pr.assignees.nodes or pr.assignees.nodes[0] is None:
        return None
    # Empty or null logins are reported as no assignee
    return pr.assignees.nodes[0].login or None


def _ci_status(pr: UpstreamPullRequest) -> Optional[str]:
    if not pr.commits.nodes or pr.commits.nodes[0] is None:
        return None
    commit = pr.commits.nodes[0].commit
    if commit is None or commit.status_check_rollup is None:
        return None
    return commit.status_check_rollup.state


def to_dashboard_pull_request(pr: UpstreamPullRequest) -> DashboardPullRequest:
    """Reshape one upstream pull request into its dashboard record."""
    return DashboardPullRequest(
        id=pr.id,
        title=pr.title,
        state=pr.state,
        created_at=pr.created_at,
        closed_at=pr.closed_at,
        is_draft=pr.is_draft,
        is_merged=pr.merged_at is not None,
        url=pr.url,
        number=pr.number,
        assignee=_first_assignee(pr),
        reviews=pr.reviews.nodes,
        ci_status=_ci_status(pr),
        status=get_pr_status(pr),
    )


def map_pull_requests(nodes: List[Dict[str, Any]]) -> List[DashboardPullRequest]:
    """
    Validate raw GraphQL nodes and map each one to a dashboard record.

    Args:
        nodes: Raw `pullRequests.nodes` list from the GraphQL response

    Returns:
        Dashboard records, one per node, in the same order

    Raises:
        pydantic.ValidationError: If a node does not match the expected shape
    """
    return [
        to_dashboard_pull_request(UpstreamPullRequest.model_validate(node))
        for node in nodes
    ]
