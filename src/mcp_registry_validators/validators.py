"""
Package validation dispatch.

Routes a package descriptor from a publish request to the ownership
validator for its registry type.
"""
from __future__ import annotations

from typing import Any

from .models import PackageDescriptor, RegistryType
from .registries.oci import validate_ownership
from .registries.oci_errors import UnsupportedRegistryType

__all__ = ["validate_package"]


def validate_package(descriptor: PackageDescriptor, server_name: str, **kwargs: Any) -> None:
    """
    Validate that ``descriptor`` belongs to ``server_name``.

    Keyword arguments are passed to the registry validator (settings, client,
    providers, cancel).

    Raises:
        UnsupportedRegistryType: If no validator exists for the registry type
        OciError: From the OCI validator
    """
    if descriptor.registry_type == RegistryType.OCI:
        validate_ownership(descriptor, server_name, **kwargs)
        return

    raise UnsupportedRegistryType(
        f"unsupported registry type: '{descriptor.registry_type.value}'"
    )
