"""
In-memory OCI registry served through httpx.MockTransport.

Answers the Distribution API paths the ownership validator uses plus the
Docker Hub token endpoint, and records every request for assertions.
"""
from __future__ import annotations

import json
from typing import Dict, List, Optional, Tuple

import httpx

SERVER_NAME_LABEL = "io.modelcontextprotocol.server.name"


class FakeRegistry:
    """Fake registry keyed by (repo_path, reference)."""

    def __init__(self, origin: str = "http://localhost:5000",
                 auth_url: str = "https://auth.docker.io/token"):
        self.origin = origin.rstrip("/")
        self.auth_url = auth_url
        self.manifests: Dict[Tuple[str, str], bytes] = {}
        self.blobs: Dict[Tuple[str, str], bytes] = {}
        self.status_overrides: Dict[str, int] = {}
        self.token_status = 200
        self.token_body: bytes = json.dumps({"token": "mock-token"}).encode()
        self.requests: List[httpx.Request] = []
        # When set, blob GETs answer 307 to this host, which serves the blob
        self.blob_cdn: Optional[str] = None

    # Seeding helpers

    def add_image(self, repo: str, tag: str, labels: Optional[Dict[str, str]],
                  config_digest: str = "sha256:abc123") -> None:
        """Single-arch image whose config blob carries ``labels``."""
        self.manifests[(repo, tag)] = json.dumps({
            "schemaVersion": 2,
            "mediaType": "application/vnd.oci.image.manifest.v1+json",
            "config": {"mediaType": "application/vnd.oci.image.config.v1+json", "digest": config_digest},
            "layers": [],
        }).encode()
        self.add_config(repo, config_digest, labels)

    def add_index(self, repo: str, tag: str, platform_digests: List[str]) -> None:
        """Manifest list pointing at ``platform_digests``."""
        self.manifests[(repo, tag)] = json.dumps({
            "schemaVersion": 2,
            "mediaType": "application/vnd.oci.image.index.v1+json",
            "manifests": [
                {"mediaType": "application/vnd.oci.image.manifest.v1+json", "digest": d}
                for d in platform_digests
            ],
        }).encode()

    def add_platform_image(self, repo: str, digest: str, labels: Optional[Dict[str, str]],
                           config_digest: str = "sha256:platformconfig") -> None:
        self.add_image(repo, digest, labels, config_digest=config_digest)

    def add_config(self, repo: str, digest: str, labels: Optional[Dict[str, str]]) -> None:
        self.blobs[(repo, digest)] = json.dumps({
            "architecture": "amd64",
            "config": {"Labels": labels},
        }).encode()

    def fail(self, path: str, status: int) -> None:
        """Answer ``status`` for an exact URL path."""
        self.status_overrides[path] = status

    # Transport

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handle))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url.startswith(self.auth_url):
            return httpx.Response(self.token_status, content=self.token_body)

        path = request.url.path
        if path in self.status_overrides:
            return httpx.Response(self.status_overrides[path])

        if self.blob_cdn and "/blobs/" in path:
            if url.startswith(self.blob_cdn):
                repo, ref = path[len("/v2/"):].split("/blobs/", 1)
                body = self.blobs.get((repo, ref))
                return httpx.Response(200, content=body) if body is not None else httpx.Response(404)
            return httpx.Response(307, headers={"Location": f"{self.blob_cdn}{path}"})

        if not url.startswith(self.origin + "/v2/"):
            return httpx.Response(404)

        rest = path[len("/v2/"):]
        if "/manifests/" in rest:
            repo, ref = rest.split("/manifests/", 1)
            body = self.manifests.get((repo, ref))
        elif "/blobs/" in rest:
            repo, ref = rest.split("/blobs/", 1)
            body = self.blobs.get((repo, ref))
        else:
            body = None

        if body is None:
            return httpx.Response(404)
        return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


__all__ = ["FakeRegistry", "SERVER_NAME_LABEL"]
