"""
Data models for package ownership validation.

These Pydantic models describe the package descriptor handed over by the
publish workflow and the slices of OCI manifest and config JSON the
validator reads. Unknown fields in registry responses are ignored.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegistryType(str, Enum):
    """Package registry types accepted by the publish API."""
    NPM = "npm"
    PYPI = "pypi"
    OCI = "oci"
    NUGET = "nuget"
    MCPB = "mcpb"


class PackageDescriptor(BaseModel):
    """
    Package entry from a server publish request.

    An empty ``registry_base_url`` means the default public registry.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    registry_type: RegistryType = Field(..., alias="registryType", description="Package ecosystem")
    registry_base_url: str = Field(default="", alias="registryBaseUrl", description="Registry public base URL")
    identifier: str = Field(..., description="Package or image identifier")
    version: str = Field(..., description="Package version or image tag")


class Descriptor(BaseModel):
    """Content descriptor; only the digest is read."""
    model_config = ConfigDict(extra="ignore")

    digest: str = ""


class OciManifest(BaseModel):
    """
    Image manifest or manifest list.

    A manifest list carries ``manifests``; a concrete manifest carries
    ``config``. Both are optional so either shape decodes.
    """
    model_config = ConfigDict(extra="ignore")

    manifests: List[Descriptor] = Field(default_factory=list)
    config: Descriptor = Field(default_factory=Descriptor)

    # Registries may send explicit nulls for absent sections
    @field_validator("manifests", mode="before")
    @classmethod
    def null_manifests(cls, v):
        return [] if v is None else v

    @field_validator("config", mode="before")
    @classmethod
    def null_config(cls, v):
        return {} if v is None else v

    @property
    def is_index(self) -> bool:
        return len(self.manifests) > 0


class ContainerConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Null label values decode as empty strings
    labels: Optional[Dict[str, Optional[str]]] = Field(default=None, alias="Labels")


class OciImageConfig(BaseModel):
    """Image config blob; only ``config.Labels`` is read."""
    model_config = ConfigDict(extra="ignore")

    config: ContainerConfig = Field(default_factory=ContainerConfig)

    @field_validator("config", mode="before")
    @classmethod
    def null_config(cls, v):
        return {} if v is None else v

    @property
    def labels(self) -> Dict[str, str]:
        return {k: v or "" for k, v in (self.config.labels or {}).items()}


__all__ = [
    "RegistryType",
    "PackageDescriptor",
    "Descriptor",
    "OciManifest",
    "ContainerConfig",
    "OciImageConfig",
]
