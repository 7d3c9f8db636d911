"""Tests for pull request models."""

import json
import pytest
from unittest.mock import patch
from pydantic import ValidationError
from models.pull_request import (
    UpstreamPullRequest,
    DashboardPullRequest,
    PullRequestDashboardResponse,
    PRStatus,
    Review,
    current_timestamp_ms,
)


class TestUpstreamPullRequest:
    """Test cases for UpstreamPullRequest."""

    def test_parses_graphql_node(self, make_pr_node):
        """Test parsing camelCase GraphQL fields."""
        node = make_pr_node(
            isDraft=True,
            mergedAt='2024-01-02T00:00:00Z',
            commits={'nodes': [{'commit': {'statusCheckRollup': {'state': 'PENDING'}}}]}
        )

        pr = UpstreamPullRequest.model_validate(node)

        assert pr.is_draft is True
        assert pr.merged_at == '2024-01-02T00:00:00Z'
        assert pr.created_at == '2024-01-01T00:00:00Z'
        assert pr.commits.nodes[0].commit.status_check_rollup.state == 'PENDING'

    def test_missing_required_fields(self):
        """Test that missing required fields raise ValidationError."""
        with pytest.raises(ValidationError):
            UpstreamPullRequest.model_validate({'id': 'PR_1'})

    def test_invalid_number_type(self, make_pr_node):
        """Test that a non-numeric number raises ValidationError."""
        with pytest.raises(ValidationError):
            UpstreamPullRequest.model_validate(make_pr_node(number='not-a-number'))

    def test_missing_connections_default_to_empty(self, make_pr_node):
        """Test that omitted connections parse as empty."""
        node = make_pr_node()
        for key in ('assignees', 'reviews', 'commits'):
            del node[key]

        pr = UpstreamPullRequest.model_validate(node)

        assert pr.assignees.nodes == []
        assert pr.reviews.nodes == []
        assert pr.commits.nodes == []

    def test_review_with_deleted_author(self):
        """Test that a review with a null author is accepted."""
        review = Review.model_validate({'state': 'APPROVED', 'author': None})

        assert review.author is None


class TestDashboardPullRequest:
    """Test cases for DashboardPullRequest."""

    def _record(self, **overrides):
        data = {
            'id': 'PR_1',
            'title': 'Test PR',
            'state': 'OPEN',
            'created_at': '2024-01-01T00:00:00Z',
            'is_draft': False,
            'is_merged': False,
            'url': 'https://github.com/owner/repo/pull/1',
            'number': 1,
            'status': PRStatus.OPEN.value,
        }
        data.update(overrides)
        return DashboardPullRequest(**data)

    def test_to_dict_uses_dashboard_keys(self):
        """Test serialized key names."""
        result = self._record(assignee='alice', ci_status='FAILURE').to_dict()

        assert set(result) == {
            'id', 'title', 'state', 'created_at', 'closed_at', 'isDraft',
            'isMerged', 'url', 'number', 'assignee', 'reviews', 'ciStatus', 'status'
        }
        assert result['assignee'] == 'alice'
        assert result['ciStatus'] == 'FAILURE'

    def test_to_dict_omits_absent_optionals(self):
        """Test that None assignee and CI status are left out."""
        result = self._record().to_dict()

        assert 'assignee' not in result
        assert 'ciStatus' not in result
        assert 'closed_at' in result
        assert result['closed_at'] is None


class TestPullRequestDashboardResponse:
    """Test cases for PullRequestDashboardResponse."""

    def test_empty_response(self):
        """Test default response has no pull requests and a timestamp."""
        response = PullRequestDashboardResponse()

        result = response.to_dict()

        assert result['pullRequests'] == []
        assert isinstance(result['timestamp'], int)
        assert result['timestamp'] > 0

    @patch('models.pull_request.current_timestamp_ms')
    def test_timestamp_from_clock(self, mock_now):
        """Test that the timestamp is taken when the response is built."""
        mock_now.return_value = 1700000000000

        response = PullRequestDashboardResponse()

        assert response.timestamp == 1700000000000

    def test_json_serializable(self):
        """Test that to_dict output can be dumped to JSON."""
        record = DashboardPullRequest(
            id='PR_1', title='t', state='OPEN', created_at='2024-01-01T00:00:00Z',
            is_draft=False, is_merged=False, url='u', number=1,
            reviews=[Review.model_validate({'state': 'APPROVED', 'author': {'login': 'bob'}})],
            status='Approved'
        )

        body = json.loads(json.dumps(PullRequestDashboardResponse(pull_requests=[record]).to_dict()))

        assert body['pullRequests'][0]['reviews'] == [{'state': 'APPROVED', 'author': {'login': 'bob'}}]

    def test_current_timestamp_is_milliseconds(self):
        """Test that the clock helper returns epoch milliseconds."""
        assert current_timestamp_ms() > 10 ** 12
