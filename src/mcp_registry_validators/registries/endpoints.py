"""
Registry endpoint resolution.

Maps a registry's public base URL to the HTTP origin that serves the OCI
Distribution API. Known providers are looked up in an immutable table; the
open-ended hostname families cloud providers mint (regional, per-account,
vanity) are matched by an ordered list of rules.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Tuple

from .oci_errors import OciUnsupportedRegistry

# Public base URLs accepted in package descriptors
REGISTRY_URL_DOCKER = "https://docker.io"
REGISTRY_URL_DOCKER_HUB = "https://hub.docker.com"
REGISTRY_URL_GHCR = "https://ghcr.io"
REGISTRY_URL_GAR = "https://artifactregistry.googleapis.com"
REGISTRY_URL_GCR = "https://gcr.io"
REGISTRY_URL_ECR = "https://public.ecr.aws"
REGISTRY_URL_ACR = "https://azurecr.io"
REGISTRY_URL_QUAY = "https://quay.io"
REGISTRY_URL_GITLAB_CR = "https://registry.gitlab.com"
REGISTRY_URL_JFROG_CR = "https://jfrog.io"
REGISTRY_URL_HARBOR_CR = "https://goharbor.io"
REGISTRY_URL_ALIBABA_ACR = "https://cr.console.aliyun.com"
REGISTRY_URL_IBM_CR = "https://icr.io"
REGISTRY_URL_ORACLE_CR = "https://container-registry.oracle.com"
REGISTRY_URL_DIGITALOCEAN_CR = "https://registry.digitalocean.com"

DEFAULT_REGISTRY_URL = REGISTRY_URL_DOCKER
DOCKER_API_ORIGIN = "https://registry-1.docker.io"

# Shown in the unsupported-registry error, not the full table
SUPPORTED_EXAMPLES = ("docker.io", "ghcr.io", "gcr.io", "quay.io", "artifactregistry.googleapis.com")


@dataclass(frozen=True)
class FallbackRule:
    """Hostname family accepted without an exact table entry."""
    name: str
    matches: Callable[[str], bool]

    def __call__(self, base_url: str) -> bool:
        return self.matches(base_url)


DEFAULT_FALLBACK_RULES: Tuple[FallbackRule, ...] = (
    FallbackRule("artifact-registry-regional", lambda url: "-docker.pkg.dev" in url),
    FallbackRule("gcr-regional", lambda url: ".gcr.io" in url),
    FallbackRule("ecr-account", lambda url: ".amazonaws.com" in url),
    FallbackRule("acr-instance", lambda url: ".azurecr.io" in url),
    FallbackRule(
        "loopback",
        lambda url: url.startswith("http://127.0.0.1:") or url.startswith("http://localhost:"),
    ),
)


@dataclass(frozen=True)
class ProviderTable:
    """
    Immutable provider configuration.

    Attributes:
        origins: Exact public base URL -> API origin
        fallbacks: Ordered rules; the first match resolves to the input URL
        default_url: Substituted when a descriptor leaves the base URL empty
    """
    origins: Mapping[str, str]
    fallbacks: Tuple[FallbackRule, ...] = DEFAULT_FALLBACK_RULES
    default_url: str = DEFAULT_REGISTRY_URL
    examples: Tuple[str, ...] = field(default=SUPPORTED_EXAMPLES)

    def __post_init__(self):
        # Freeze a private copy so callers can't mutate the table afterwards
        object.__setattr__(self, "origins", MappingProxyType(dict(self.origins)))

    def resolve(self, base_url: str) -> str:
        """
        Resolve a public base URL to its API origin.

        Args:
            base_url: Registry base URL from the package descriptor ("" = default)

        Returns:
            API origin to issue ``/v2/...`` requests against

        Raises:
            OciUnsupportedRegistry: If no table entry or fallback rule matches
        """
        if not base_url:
            base_url = self.default_url

        origin = self.origins.get(base_url)
        if origin is not None:
            return origin

        for rule in self.fallbacks:
            if rule(base_url):
                return base_url

        raise OciUnsupportedRegistry(
            f"unsupported OCI registry: '{base_url}'. "
            f"Supported registries: {', '.join(self.examples)}",
            base_url=base_url,
        )


DEFAULT_PROVIDERS = ProviderTable(origins={
    REGISTRY_URL_DOCKER: DOCKER_API_ORIGIN,
    REGISTRY_URL_DOCKER_HUB: DOCKER_API_ORIGIN,
    REGISTRY_URL_GHCR: "https://ghcr.io",
    REGISTRY_URL_GAR: "https://artifactregistry.googleapis.com",
    REGISTRY_URL_GCR: "https://gcr.io",
    REGISTRY_URL_ECR: "https://public.ecr.aws",
    REGISTRY_URL_ACR: "https://azurecr.io",
    REGISTRY_URL_QUAY: "https://quay.io",
    REGISTRY_URL_GITLAB_CR: "https://registry.gitlab.com",
    REGISTRY_URL_JFROG_CR: "https://jfrog.io",
    REGISTRY_URL_HARBOR_CR: "https://goharbor.io",
    REGISTRY_URL_ALIBABA_ACR: "https://cr.console.aliyun.com",
    REGISTRY_URL_IBM_CR: "https://icr.io",
    REGISTRY_URL_ORACLE_CR: "https://container-registry.oracle.com",
    REGISTRY_URL_DIGITALOCEAN_CR: "https://registry.digitalocean.com",
})


def resolve_api_origin(base_url: str, providers: ProviderTable = DEFAULT_PROVIDERS) -> str:
    """Resolve ``base_url`` against ``providers`` (the built-in table by default)."""
    return providers.resolve(base_url)


__all__ = [
    "DEFAULT_REGISTRY_URL",
    "DOCKER_API_ORIGIN",
    "DEFAULT_FALLBACK_RULES",
    "DEFAULT_PROVIDERS",
    "FallbackRule",
    "ProviderTable",
    "resolve_api_origin",
]
