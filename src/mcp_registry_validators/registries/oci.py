"""
OCI image ownership validation.

Proves a container image belongs to the MCP server being published by
reading the ``io.modelcontextprotocol.server.name`` label from its config.
The check runs resolve -> parse -> manifest -> config -> verify and stops at
the first error. Nothing is cached or shared between calls.
"""
from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional

import httpx

from ..models import PackageDescriptor
from ..settings import Settings, create_settings_from_env
from .endpoints import DEFAULT_PROVIDERS, ProviderTable
from .oci_errors import OciCancelled, OciError, OciMissingAnnotation, OciOwnershipMismatch, OciRateLimited
from .oci_media_types import SERVER_NAME_LABEL
from .reference import ImageReference, parse_image_reference
from .registry_http import RegistryHTTP

logger = logging.getLogger(__name__)


def verify_ownership(labels: Mapping[str, str], claimed_owner: str, ref: ImageReference) -> None:
    """
    Check the ownership label against the claimed server name.

    Raises:
        OciMissingAnnotation: If the label is absent
        OciOwnershipMismatch: If the label differs (exact, case-sensitive)
    """
    actual = labels.get(SERVER_NAME_LABEL)
    if actual is None:
        raise OciMissingAnnotation(
            f"OCI image '{ref}' is missing required annotation. "
            f"Add this to your Dockerfile: LABEL {SERVER_NAME_LABEL}=\"{claimed_owner}\""
        )

    if actual != claimed_owner:
        raise OciOwnershipMismatch(
            "OCI image ownership validation failed. "
            f"Expected annotation '{SERVER_NAME_LABEL}' = '{claimed_owner}', got '{actual}'",
            expected=claimed_owner,
            actual=actual,
        )


def validate_ownership(
    descriptor: PackageDescriptor,
    claimed_owner: str,
    *,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
    providers: ProviderTable = DEFAULT_PROVIDERS,
    cancel: Optional[threading.Event] = None,
) -> None:
    """
    Validate that an OCI image carries the claimed MCP server name.

    Args:
        descriptor: Package entry from the publish request
        claimed_owner: Server name in ``namespace/name`` form
        settings: Configuration (loaded from the environment when omitted)
        client: Shared httpx client; one is created per call when omitted
        providers: Registry provider table
        cancel: Event the caller sets to abort outstanding work

    Returns:
        None when ownership is proven, or when the registry rate limits the
        manifest request and ``settings.skip_on_rate_limit`` is on

    Raises:
        OciError: Subclass identifying the failing stage
    """
    settings = settings or create_settings_from_env()

    api_origin = providers.resolve(descriptor.registry_base_url)
    namespace, repository = parse_image_reference(descriptor.identifier)
    ref = ImageReference(namespace=namespace, repository=repository, tag=descriptor.version)

    logger.debug(f"Validating ownership of {ref} via {api_origin} for {claimed_owner}")

    try:
        with RegistryHTTP(api_origin, settings, client=client, cancel=cancel) as registry:
            config_digest = registry.resolve_config_digest(ref)
            labels = registry.fetch_labels(ref, config_digest)
        if cancel is not None and cancel.is_set():
            raise OciCancelled(f"validation of {ref} cancelled")
        verify_ownership(labels, claimed_owner, ref)
    except OciRateLimited:
        if not settings.skip_on_rate_limit:
            raise
        logger.warning(f"Rate limited when accessing OCI image '{ref}'. Skipping validation.")
        return
    except OciError as e:
        logger.error(f"OCI ownership validation failed for {ref}: {e}")
        raise

    logger.info(f"Validated ownership of {ref} for {claimed_owner}")


__all__ = ["validate_ownership", "verify_ownership"]
