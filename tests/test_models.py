"""Tests for package descriptor and OCI document models."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from mcp_registry_validators.models import OciImageConfig, OciManifest, PackageDescriptor, RegistryType


class TestPackageDescriptor:
    def test_from_publish_payload(self):
        """Descriptors decode from the camelCase publish API payload."""
        descriptor = PackageDescriptor.model_validate_json(
            '{"registryType": "oci", "registryBaseUrl": "https://ghcr.io",'
            ' "identifier": "myorg/server", "version": "1.0.0"}'
        )
        assert descriptor.registry_type == RegistryType.OCI
        assert descriptor.registry_base_url == "https://ghcr.io"
        assert descriptor.identifier == "myorg/server"

    def test_base_url_defaults_to_empty(self):
        descriptor = PackageDescriptor(registry_type="oci", identifier="nginx", version="latest")
        assert descriptor.registry_base_url == ""

    def test_unknown_registry_type_rejected(self):
        with pytest.raises(ValidationError):
            PackageDescriptor(registry_type="cargo", identifier="x", version="1")


class TestOciManifest:
    def test_concrete_manifest(self):
        manifest = OciManifest.model_validate_json('{"config": {"digest": "sha256:abc", "size": 10}}')
        assert not manifest.is_index
        assert manifest.config.digest == "sha256:abc"

    def test_manifest_list(self):
        manifest = OciManifest.model_validate_json(
            '{"manifests": [{"digest": "sha256:a", "platform": {"os": "linux"}}, {"digest": "sha256:b"}]}'
        )
        assert manifest.is_index
        assert [m.digest for m in manifest.manifests] == ["sha256:a", "sha256:b"]

    def test_empty_document(self):
        manifest = OciManifest.model_validate_json("{}")
        assert not manifest.is_index
        assert manifest.config.digest == ""

    def test_non_object_rejected(self):
        with pytest.raises(ValidationError):
            OciManifest.model_validate_json("[]")


class TestOciImageConfig:
    def test_labels(self):
        config = OciImageConfig.model_validate_json('{"config": {"Labels": {"a": "b"}, "Env": []}}')
        assert config.labels == {"a": "b"}

    @pytest.mark.parametrize("body", ['{}', '{"config": null}', '{"config": {}}', '{"config": {"Labels": null}}'])
    def test_missing_labels_are_empty(self, body):
        assert OciImageConfig.model_validate_json(body).labels == {}

    def test_null_label_value_decodes_as_empty_string(self):
        config = OciImageConfig.model_validate_json('{"config": {"Labels": {"a": null, "b": "c"}}}')
        assert config.labels == {"a": "", "b": "c"}
