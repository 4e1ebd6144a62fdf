"""
Registry authentication strategies.

Only the default public registry needs a handshake: an anonymous pull-scoped
bearer token from its token service. Every other provider is called without
credentials since only public images are validated.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

import httpx

from ..settings import Settings
from .endpoints import DOCKER_API_ORIGIN
from .oci_errors import OciAuthError
from .oci_media_types import DOCKER_AUTH_SERVICE

logger = logging.getLogger(__name__)

# GET callable supplied by the HTTP client (applies timeout, retry, cancellation)
Getter = Callable[..., httpx.Response]


@runtime_checkable
class AuthStrategy(Protocol):
    """Obtains the optional bearer credential for one registry request."""

    def authenticate(self, get: Getter, namespace: str, repository: str) -> Optional[str]:
        """
        Return a bearer token, or None to send the request anonymously.

        Raises:
            OciAuthError: If a required token cannot be obtained
        """
        ...


class AnonymousAuth:
    """Public images on GHCR, GAR, GCR, Quay, GitLab, ECR Public and friends."""

    def authenticate(self, get: Getter, namespace: str, repository: str) -> Optional[str]:
        return None


class DockerHubTokenAuth:
    """Anonymous pull token from the Docker Hub token service."""

    def __init__(self, auth_url: str):
        self.auth_url = auth_url

    def authenticate(self, get: Getter, namespace: str, repository: str) -> Optional[str]:
        scope = f"repository:{namespace}/{repository}:pull"
        logger.debug(f"Requesting Docker Hub token for {scope}")

        try:
            response = get(self.auth_url, params={"service": DOCKER_AUTH_SERVICE, "scope": scope})
        except httpx.RequestError as e:
            raise OciAuthError(
                f"failed to authenticate with Docker registry: failed to request auth token: {e}"
            ) from e

        if response.status_code != 200:
            raise OciAuthError(
                "failed to authenticate with Docker registry: "
                f"auth request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            token_data = response.json()
        except ValueError as e:
            raise OciAuthError(
                f"failed to authenticate with Docker registry: failed to parse auth response: {e}"
            ) from e

        if not isinstance(token_data, dict):
            raise OciAuthError(
                "failed to authenticate with Docker registry: "
                "failed to parse auth response: expected a JSON object"
            )
        return token_data.get("token") or ""


def auth_strategy_for(api_origin: str, settings: Settings) -> AuthStrategy:
    """Pick the authentication strategy for a resolved API origin."""
    if api_origin == DOCKER_API_ORIGIN:
        return DockerHubTokenAuth(settings.docker_auth_url)
    return AnonymousAuth()


__all__ = ["AuthStrategy", "AnonymousAuth", "DockerHubTokenAuth", "auth_strategy_for"]
