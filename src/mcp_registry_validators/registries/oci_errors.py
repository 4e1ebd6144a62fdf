"""
OCI ownership validation error classes.

Provides a clear taxonomy of the ways an ownership check can fail. HTTP status
codes and transport failures are mapped onto these classes so callers (the
publish workflow, the CLI) can branch on the class while the message alone
stays readable for a human operator.
"""
from __future__ import annotations

from typing import Optional


class OciError(Exception):
    """
    Base class for all OCI validation errors.

    The message is self-sufficient: it names the stage that failed and the
    offending input (URL, image reference, status code) where one applies.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnsupportedRegistryType(OciError):
    """Package registry type has no ownership validator."""
    pass


class OciUnsupportedRegistry(OciError):
    """
    Registry base URL is unknown.

    Raised when the URL matches neither the provider table nor any of the
    open-ended hostname fallback rules.
    """

    def __init__(self, message: str, base_url: str):
        super().__init__(message)
        self.base_url = base_url


class OciInvalidReference(OciError):
    """Package identifier does not split into one or two path segments."""

    def __init__(self, message: str, identifier: str):
        super().__init__(message)
        self.identifier = identifier


class OciAuthError(OciError):
    """
    Token exchange failed for a registry that requires one.

    Raised when:
    - token endpoint answers with a non-200 status
    - token request fails at the transport level
    - token response body is not valid JSON
    """
    pass


class OciNotFound(OciError):
    """
    Image does not exist or is not visible to an anonymous caller.

    Raised when:
    - HTTP 404 Not Found on the tag manifest
    - HTTP 401 Unauthorized on the tag manifest
    """
    pass


class OciRateLimited(OciError):
    """
    Rate limit exceeded.

    Raised when:
    - HTTP 429 Too Many Requests on the tag manifest
    """
    pass


class OciManifestFetchFailed(OciError):
    """Manifest request failed (transport error or unexpected status)."""
    pass


class OciManifestParseFailed(OciError):
    """Manifest body could not be decoded."""
    pass


class OciConfigDigestMissing(OciError):
    """Manifest decoded but carried no config digest."""
    pass


class OciConfigFetchFailed(OciError):
    """Config blob request failed (transport error or unexpected status)."""
    pass


class OciConfigParseFailed(OciError):
    """Config blob body could not be decoded."""
    pass


class OciMissingAnnotation(OciError):
    """Image config carries no ownership label."""
    pass


class OciOwnershipMismatch(OciError):
    """
    Ownership label does not match the claimed server name.

    Carries both values so callers can render them separately.
    """

    def __init__(self, message: str, expected: str, actual: str):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class OciCancelled(OciError):
    """Caller cancelled the validation before an outbound request."""
    pass


__all__ = [
    "OciError",
    "UnsupportedRegistryType",
    "OciUnsupportedRegistry",
    "OciInvalidReference",
    "OciAuthError",
    "OciNotFound",
    "OciRateLimited",
    "OciManifestFetchFailed",
    "OciManifestParseFailed",
    "OciConfigDigestMissing",
    "OciConfigFetchFailed",
    "OciConfigParseFailed",
    "OciMissingAnnotation",
    "OciOwnershipMismatch",
    "OciCancelled",
]
