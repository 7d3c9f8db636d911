import logging
from typing import Optional, List, Dict, Any
import requests
from utils.config import ConfigurationError, DEFAULT_USERNAME, DEFAULT_TIMEOUT


logger = logging.getLogger(__name__)


PULL_REQUESTS_QUERY = """
query UserPullRequests($login: String!) {
  user(login: $login) {
    pullRequests(last: 50) {
      nodes {
        id
        title
        state
        createdAt
        closedAt
        isDraft
        mergedAt
        url
        number
        assignees(first: 1) {
          nodes {
            login
          }
        }
        reviews(first: 10, states: [APPROVED, CHANGES_REQUESTED]) {
          nodes {
            state
            author {
              login
            }
          }
        }
        commits(last: 1) {
          nodes {
            commit {
              statusCheckRollup {
                state
              }
            }
          }
        }
      }
    }
  }
}
"""


class GitHubAPIError(Exception):
    """Exception raised when the GitHub API call fails or returns an unexpected body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubService:
    """Client for the GitHub GraphQL pull request query."""

    graphql_endpoint = "https://api.github.com/graphql"
    user_agent = "PLDG-Dashboard"
    api_version = "2022-11-28"

    def __init__(self, access_token: str, username: str = DEFAULT_USERNAME, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize GitHub service.

        Args:
            access_token: GitHub token sent as bearer credential
            username: GitHub user whose pull requests are queried
            timeout: Request timeout in seconds

        Raises:
            ConfigurationError: If no access token is given
        """
        if not access_token:
            raise ConfigurationError("GitHub token not found")
        self.access_token = access_token
        self.username = username
        self.timeout = timeout

    def build_headers(self) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {self.access_token}',
            'Content-Type': 'application/json',
            'Accept': 'application/vnd.github.v3+json',
            'X-GitHub-Api-Version': self.api_version,
            'User-Agent': self.user_agent
        }

    def get_user_pull_requests(self) -> List[Dict[str, Any]]:
        """
        Fetch the user's 50 most recent pull requests from the GraphQL API.

        Returns:
            Raw pull request nodes from `data.user.pullRequests.nodes`

        Raises:
            GitHubAPIError: If the request fails, GitHub answers with a
                non-success status, or the body lacks the pull request list
        """
        payload = {
            'query': PULL_REQUESTS_QUERY,
            'variables': {'login': self.username}
        }

        try:
            response = requests.post(
                self.graphql_endpoint,
                headers=self.build_headers(),
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"GitHub API request failed: {e}")
            raise GitHubAPIError(f"GitHub API request failed: {e}")

        if not 200 <= response.status_code < 300:
            logger.error(f"GitHub API Error: status={response.status_code} reason={response.reason}")
            raise GitHubAPIError(f"GitHub API error: {response.reason}", status_code=response.status_code)

        try:
            raw_data = response.json()
        except ValueError as e:
            logger.error(f"GitHub API returned invalid JSON: {e}")
            raise GitHubAPIError("Invalid JSON in GitHub response", status_code=response.status_code)

        if isinstance(raw_data, dict) and raw_data.get('errors'):
            logger.warning(f"GitHub GraphQL errors: {raw_data['errors']}")

        nodes = _extract_pull_request_nodes(raw_data)
        if nodes is None:
            logger.error(f"Invalid GitHub PR response structure: {raw_data}")
            raise GitHubAPIError("Invalid response structure from GitHub", status_code=response.status_code)

        logger.info(f"Fetched {len(nodes)} pull requests for GitHub user: {self.username}")
        return nodes


def _extract_pull_request_nodes(raw_data: Any) -> Optional[List[Dict[str, Any]]]:
    """Walk data.user.pullRequests.nodes, returning None if any level is missing."""
    current = raw_data
    for key in ('data', 'user', 'pullRequests', 'nodes'):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    if not isinstance(current, list):
        return None
    return current
