"""
OCI media types and constants.

Single source of truth for the media types, headers and label names the
ownership validator sends or inspects.
"""
from __future__ import annotations

# Manifest media types
DOCKER_MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
OCI_IMAGE_MANIFEST = "application/vnd.oci.image.manifest.v1+json"

# Accept header for the tag manifest (either single-arch format or an index)
TAG_MANIFEST_ACCEPT = f"{DOCKER_MANIFEST_V2},{OCI_IMAGE_MANIFEST}"

# Accept header for the per-platform manifest behind a manifest list
PLATFORM_MANIFEST_ACCEPT = OCI_IMAGE_MANIFEST

# Accept header for the config blob
CONFIG_BLOB_ACCEPT = DOCKER_MANIFEST_V2

# Label that binds an image to an MCP server name
SERVER_NAME_LABEL = "io.modelcontextprotocol.server.name"

# Docker Hub token service
DOCKER_AUTH_SERVICE = "registry.docker.io"


__all__ = [
    "DOCKER_MANIFEST_V2",
    "OCI_IMAGE_MANIFEST",
    "TAG_MANIFEST_ACCEPT",
    "PLATFORM_MANIFEST_ACCEPT",
    "CONFIG_BLOB_ACCEPT",
    "SERVER_NAME_LABEL",
    "DOCKER_AUTH_SERVICE",
]
