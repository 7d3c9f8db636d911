"""Pull request dashboard API endpoint."""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from models.pull_request import PullRequestDashboardResponse
from services.github_service import GitHubService
from utils.config import DashboardConfig
from utils.pr_status import map_pull_requests

logger = logging.getLogger(__name__)


def get_pull_requests_handler(event: Dict[str, Any], context: Any,
                              config: Optional[DashboardConfig] = None) -> Dict[str, Any]:
    """
    Lambda handler for GET /api/github/pr - List the user's pull requests.

    Always answers 200. Any failure (missing token, upstream error,
    unexpected response shape) is logged and reported as an empty list.

    Args:
        event: API Gateway event
        context: Lambda context
        config: Configuration to use instead of reading the environment

    Returns:
        API Gateway response with a `{pullRequests, timestamp}` JSON body
    """
    logger.info("GitHub PR API route called")

    try:
        if config is None:
            config = DashboardConfig.from_env()

        github_service = GitHubService(
            config.require_token(),
            username=config.github_username,
            timeout=config.request_timeout
        )
        nodes = github_service.get_user_pull_requests()
        result = PullRequestDashboardResponse(pull_requests=map_pull_requests(nodes))

    except Exception as e:
        details = {
            'error': repr(e),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'message': str(e) or 'Unknown error'
        }
        logger.error(f"GitHub PR API error: {details}")
        result = PullRequestDashboardResponse()

    return {
        "statusCode": 200,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*"
        },
        "body": json.dumps(result.to_dict())
    }
