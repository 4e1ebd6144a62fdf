"""
Registry HTTP Client for OCI Distribution API.

Provides the read-only registry operations the ownership check needs:
resolving a tag to its image config digest (following manifest lists to the
first platform manifest) and fetching the config blob's labels.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

import httpx
from pydantic import ValidationError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..models import OciImageConfig, OciManifest
from ..settings import Settings
from .auth import AuthStrategy, auth_strategy_for
from .oci_errors import (
    OciCancelled,
    OciConfigDigestMissing,
    OciConfigFetchFailed,
    OciConfigParseFailed,
    OciManifestFetchFailed,
    OciManifestParseFailed,
    OciNotFound,
    OciRateLimited,
)
from .oci_media_types import CONFIG_BLOB_ACCEPT, PLATFORM_MANIFEST_ACCEPT, TAG_MANIFEST_ACCEPT
from .reference import ImageReference

logger = logging.getLogger(__name__)


class RegistryHTTP:
    """
    HTTP client for OCI Distribution API read operations.

    Every request is bound to the configured timeout and checks the caller's
    cancel event first. Bearer tokens are requested per request through the
    auth strategy for the origin; nothing is cached between requests.
    """

    def __init__(self, api_origin: str, settings: Settings, *,
                 client: Optional[httpx.Client] = None,
                 auth: Optional[AuthStrategy] = None,
                 cancel: Optional[threading.Event] = None):
        """
        Initialize registry HTTP client.

        Args:
            api_origin: Resolved API origin (e.g., "https://ghcr.io")
            settings: Timeouts, retry count, user agent, token endpoint
            client: Shared httpx client; created (and owned) when omitted
            auth: Auth strategy override (defaults to the origin's strategy)
            cancel: Set by the caller to abort; checked around every request
        """
        self.api_origin = api_origin.rstrip("/")
        self.settings = settings
        self.auth = auth or auth_strategy_for(api_origin, settings)
        self.cancel = cancel
        self.timeout = httpx.Timeout(settings.http_timeout_s)

        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    def resolve_config_digest(self, ref: ImageReference) -> str:
        """
        Resolve a tag to the digest of its image config blob.

        Args:
            ref: Image coordinates

        Returns:
            Config digest (sha256:...)

        Raises:
            OciNotFound: If the registry answers 404 or 401
            OciRateLimited: If the registry answers 429
            OciManifestFetchFailed: On other statuses or network errors
            OciManifestParseFailed: If the manifest is not valid JSON
            OciConfigDigestMissing: If no config digest can be determined
        """
        url = self._url(ref, f"manifests/{ref.tag}")
        logger.debug(f"Fetching manifest {url}")

        try:
            response = self._authed_get(ref, url, accept=TAG_MANIFEST_ACCEPT)
        except httpx.RequestError as e:
            raise OciManifestFetchFailed(f"failed to fetch OCI manifest: {e}") from e

        status = response.status_code
        if status in (404, 401):
            raise OciNotFound(f"OCI image '{ref}' not found (status: {status})", status_code=status)
        if status == 429:
            raise OciRateLimited(f"rate limited when accessing OCI image '{ref}'", status_code=status)
        if status != 200:
            raise OciManifestFetchFailed(f"failed to fetch OCI manifest (status: {status})", status_code=status)

        try:
            manifest = OciManifest.model_validate_json(response.content)
        except ValidationError as e:
            raise OciManifestParseFailed(f"failed to parse OCI manifest: {e}") from e

        if manifest.is_index:
            platform_digest = manifest.manifests[0].digest
            logger.debug(f"Manifest list for {ref}, using first platform manifest {platform_digest}")
            manifest = self._fetch_platform_manifest(ref, platform_digest)

        config_digest = manifest.config.digest
        if not config_digest:
            raise OciConfigDigestMissing(f"unable to determine image config digest for '{ref}'")

        logger.debug(f"Resolved {ref} to config {config_digest}")
        return config_digest

    def fetch_labels(self, ref: ImageReference, digest: str) -> Dict[str, str]:
        """
        Fetch the image config blob and return its labels.

        Args:
            ref: Image coordinates
            digest: Config digest (sha256:...)

        Returns:
            Label mapping (empty if the image declares none)

        Raises:
            OciConfigFetchFailed: On non-200 statuses or network errors
            OciConfigParseFailed: If the blob is not valid JSON
        """
        url = self._url(ref, f"blobs/{digest}")
        logger.debug(f"Fetching image config {url}")

        try:
            response = self._authed_get(ref, url, accept=CONFIG_BLOB_ACCEPT)
        except httpx.RequestError as e:
            raise OciConfigFetchFailed(
                f"failed to get image config: failed to fetch image config: {e}"
            ) from e

        if response.status_code != 200:
            raise OciConfigFetchFailed(
                f"failed to get image config: image config not found (status: {response.status_code})",
                status_code=response.status_code,
            )

        try:
            config = OciImageConfig.model_validate_json(response.content)
        except ValidationError as e:
            raise OciConfigParseFailed(
                f"failed to get image config: failed to parse image config: {e}"
            ) from e

        return config.labels

    def _fetch_platform_manifest(self, ref: ImageReference, digest: str) -> OciManifest:
        """Fetch the concrete manifest behind a manifest list entry."""
        url = self._url(ref, f"manifests/{digest}")

        try:
            response = self._authed_get(ref, url, accept=PLATFORM_MANIFEST_ACCEPT)
        except httpx.RequestError as e:
            raise OciManifestFetchFailed(
                f"failed to get specific manifest: failed to fetch specific manifest: {e}"
            ) from e

        if response.status_code != 200:
            raise OciManifestFetchFailed(
                f"failed to get specific manifest: specific manifest not found (status: {response.status_code})",
                status_code=response.status_code,
            )

        try:
            return OciManifest.model_validate_json(response.content)
        except ValidationError as e:
            raise OciManifestParseFailed(
                f"failed to get specific manifest: failed to parse specific manifest: {e}"
            ) from e

    def _authed_get(self, ref: ImageReference, url: str, accept: str) -> httpx.Response:
        headers = {"Accept": accept, "User-Agent": self.settings.user_agent}

        token = self.auth.authenticate(self._get, ref.namespace, ref.repository)
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        return self._get(url, headers=headers)

    def _get(self, url: str, headers: Optional[dict] = None, **kwargs) -> httpx.Response:
        """
        GET with timeout, cancellation and optional retry of timeouts.

        Retries only ``httpx.TimeoutException`` and only when
        ``settings.http_retry`` > 0. Cancellation is checked before each attempt
        and again once the response arrives. Redirects are always followed,
        including on an injected client.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.settings.http_retry + 1),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TimeoutException),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                if self.cancel is not None and self.cancel.is_set():
                    raise OciCancelled(f"validation cancelled before request to {url}")
                response = self.client.get(
                    url, headers=headers, timeout=self.timeout, follow_redirects=True, **kwargs
                )
                if self.cancel is not None and self.cancel.is_set():
                    raise OciCancelled(f"validation cancelled during request to {url}")
                return response

    def _url(self, ref: ImageReference, suffix: str) -> str:
        return f"{self.api_origin}/v2/{ref.repo_path}/{suffix}"

    def close(self):
        """Close HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__ = ["RegistryHTTP"]
