"""Runtime configuration for the PR dashboard API."""

import os
import logging
from typing import Optional
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)

DEFAULT_USERNAME = 'AkashJana18'
DEFAULT_TIMEOUT = 30.0


class ConfigurationError(Exception):
    """Exception raised for missing or invalid configuration."""
    pass


class DashboardConfig(BaseModel):
    """Settings needed to query GitHub for the dashboard."""

    github_token: Optional[str] = Field(None, description="GitHub access token used as bearer credential")
    github_username: str = Field(default=DEFAULT_USERNAME, description="GitHub user whose pull requests are listed")
    request_timeout: float = Field(default=DEFAULT_TIMEOUT, description="Outbound request timeout in seconds")

    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """
        Build configuration from the process environment.

        The token comes from GITHUB_TOKEN, or from the SSM parameter named by
        GITHUB_TOKEN_PARAMETER when GITHUB_TOKEN is unset. A missing token is
        not an error here; callers check with require_token().

        Raises:
            ConfigurationError: If GITHUB_API_TIMEOUT is invalid or the SSM lookup fails
        """
        return cls(
            github_token=_get_github_token(),
            request_timeout=_get_request_timeout(),
        )

    def require_token(self) -> str:
        """Return the access token or raise ConfigurationError if absent."""
        if not self.github_token:
            raise ConfigurationError("GitHub token not found")
        return self.github_token


def _get_github_token() -> Optional[str]:
    """Get GitHub token from environment or Parameter Store."""
    token = os.getenv('GITHUB_TOKEN')
    if token:
        return token

    parameter_name = os.getenv('GITHUB_TOKEN_PARAMETER')
    if not parameter_name:
        return None

    import boto3
    ssm = boto3.client('ssm')
    try:
        response = ssm.get_parameter(Name=parameter_name, WithDecryption=True)
        logger.info(f"Loaded GitHub token from parameter: {parameter_name}")
        return response['Parameter']['Value']
    except Exception as e:
        raise ConfigurationError(f"Failed to retrieve GitHub token: {e}")


def _get_request_timeout() -> float:
    raw = os.getenv('GITHUB_API_TIMEOUT')
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid GITHUB_API_TIMEOUT: {raw}")
    if timeout <= 0:
        raise ConfigurationError(f"GITHUB_API_TIMEOUT must be positive: {raw}")
    return timeout
