"""Shared fixtures for unit tests."""

import copy
import pytest


BASE_PR_NODE = {
    'id': 'PR_kwDOA1',
    'title': 'Add dashboard widget',
    'state': 'OPEN',
    'createdAt': '2024-01-01T00:00:00Z',
    'closedAt': None,
    'isDraft': False,
    'mergedAt': None,
    'url': 'https://github.com/owner/repo/pull/1',
    'number': 1,
    'assignees': {'nodes': []},
    'reviews': {'nodes': []},
    'commits': {'nodes': []}
}


@pytest.fixture
def make_pr_node():
    """Build a raw GraphQL pull request node with field overrides."""
    def _make(**overrides):
        node = copy.deepcopy(BASE_PR_NODE)
        node.update(overrides)
        return node
    return _make


@pytest.fixture
def graphql_body():
    """Wrap pull request nodes in the GraphQL response envelope."""
    def _wrap(nodes):
        return {'data': {'user': {'pullRequests': {'nodes': nodes}}}}
    return _wrap
