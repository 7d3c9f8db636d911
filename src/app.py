"""
Main Lambda handler for the PR dashboard API Gateway integration.
"""

import json
import logging
from typing import Dict, Any
from api.pull_requests import get_pull_requests_handler

# Configure structured logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

SERVICE_NAME = "pr-dashboard"
SERVICE_VERSION = "1.0.0"


def _json_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*"
        },
        "body": json.dumps(body),
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    AWS Lambda handler for API Gateway events.

    Args:
        event: API Gateway event
        context: Lambda context

    Returns:
        API Gateway response format
    """
    try:
        # Extract path and method from event
        path = event.get("path", "")
        method = event.get("httpMethod", "")

        logger.info(f"Processing {method} request to {path}")

        if path == "/health" and method == "GET":
            return handle_health_check()
        elif path == "/api/github/pr" and method == "GET":
            return get_pull_requests_handler(event, context)

        return _json_response(404, {"error": "Not Found", "message": f"Path {path} not found"})

    except Exception as e:
        logger.error(f"Unhandled error: {str(e)}")
        return _json_response(500, {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        })


def handle_health_check() -> Dict[str, Any]:
    """Produce an API Gateway-compatible health check response."""
    logger.info("Health check requested")
    return _json_response(200, {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    })
