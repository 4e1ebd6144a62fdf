"""MCP registry package ownership validators."""
from .models import PackageDescriptor, RegistryType
from .registries.oci import validate_ownership
from .settings import Settings, create_settings_from_env
from .validators import validate_package

__all__ = [
    "PackageDescriptor",
    "RegistryType",
    "Settings",
    "create_settings_from_env",
    "validate_ownership",
    "validate_package",
]
