"""
Image reference helpers.

Splits package identifiers into the namespace and repository parts used to
build OCI Distribution API paths.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .oci_errors import OciInvalidReference

DEFAULT_NAMESPACE = "library"


@dataclass(frozen=True)
class ImageReference:
    """Resolved image coordinates for a single validation."""
    namespace: str
    repository: str
    tag: str

    @property
    def repo_path(self) -> str:
        return f"{self.namespace}/{self.repository}"

    def __str__(self) -> str:
        return f"{self.repo_path}:{self.tag}"


def parse_image_reference(identifier: str) -> Tuple[str, str]:
    """
    Parse a package identifier into namespace and repository.

    Args:
        identifier: Image name, e.g. "nginx" or "myorg/server"

    Returns:
        Tuple of (namespace, repository)

    Raises:
        OciInvalidReference: If identifier has more than two segments

    Examples:
        >>> parse_image_reference("nginx")
        ('library', 'nginx')

        >>> parse_image_reference("myorg/server")
        ('myorg', 'server')

    Note:
        An empty identifier yields ('library', '') rather than an error; the
        registry rejects the empty repository when it is fetched.
    """
    parts = identifier.split("/")
    if len(parts) == 1:
        return DEFAULT_NAMESPACE, parts[0]
    if len(parts) == 2:
        return parts[0], parts[1]

    raise OciInvalidReference(
        f"invalid OCI image reference: invalid image reference: {identifier}",
        identifier=identifier,
    )


__all__ = ["DEFAULT_NAMESPACE", "ImageReference", "parse_image_reference"]
