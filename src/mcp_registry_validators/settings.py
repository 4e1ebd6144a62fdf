"""
Settings and configuration for the MCP registry package validators.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables when the caller does not inject them.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass

DEFAULT_USER_AGENT = "MCP-Registry-Validator/1.0"
DOCKER_AUTH_URL = "https://auth.docker.io/token"

__all__ = ["Settings", "create_settings_from_env", "DEFAULT_USER_AGENT", "DOCKER_AUTH_URL"]


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for OCI ownership validation.

    HTTP Settings:
        http_timeout_s: Per-request timeout in seconds
        http_retry: Retries for timed-out requests (0=no retry)
        user_agent: User-Agent sent to every registry

    Registry Settings:
        docker_auth_url: Docker Hub token endpoint
        skip_on_rate_limit: Treat HTTP 429 on the manifest as a pass
    """
    http_timeout_s: float = 10.0
    http_retry: int = 0
    user_agent: str = DEFAULT_USER_AGENT
    docker_auth_url: str = DOCKER_AUTH_URL
    skip_on_rate_limit: bool = True

    def __post_init__(self):
        """Validate settings on construction."""
        if self.http_timeout_s <= 0:
            raise ValueError(f"http_timeout_s must be positive, got {self.http_timeout_s}")

        if self.http_retry < 0:
            raise ValueError(f"http_retry must be non-negative, got {self.http_retry}")

        if not self.user_agent:
            raise ValueError("user_agent is required")

        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not self.docker_auth_url or not re.match(url_pattern, self.docker_auth_url):
            raise ValueError(f"Invalid docker_auth_url format: {self.docker_auth_url}")


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - MCP_REGISTRY_OCI_TIMEOUT (default: 10.0)
        - MCP_REGISTRY_OCI_RETRY (default: 0)
        - MCP_REGISTRY_OCI_USER_AGENT (default: MCP-Registry-Validator/1.0)
        - MCP_REGISTRY_DOCKER_AUTH_URL (default: https://auth.docker.io/token)
        - MCP_REGISTRY_OCI_SKIP_ON_RATE_LIMIT (default: true)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def str_to_bool(value: str) -> bool:
        return value.lower() in ('true', '1', 'yes', 'on')

    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        return int(value) if value else default

    return Settings(
        http_timeout_s=get_float("MCP_REGISTRY_OCI_TIMEOUT", 10.0),
        http_retry=get_int("MCP_REGISTRY_OCI_RETRY", 0),
        user_agent=os.getenv("MCP_REGISTRY_OCI_USER_AGENT") or DEFAULT_USER_AGENT,
        docker_auth_url=os.getenv("MCP_REGISTRY_DOCKER_AUTH_URL") or DOCKER_AUTH_URL,
        skip_on_rate_limit=str_to_bool(os.getenv("MCP_REGISTRY_OCI_SKIP_ON_RATE_LIMIT", "true")),
    )
