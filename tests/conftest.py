"""Root pytest configuration for mcp-registry-validators tests."""
import pytest

from mcp_registry_validators.models import PackageDescriptor, RegistryType
from mcp_registry_validators.settings import Settings

from .fakes.fake_registry import FakeRegistry

REGISTRY_URL = "http://localhost:5000"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires network)"
    )


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Keep host environment out of settings loaded by the code under test."""
    for key in (
        "MCP_REGISTRY_OCI_TIMEOUT",
        "MCP_REGISTRY_OCI_RETRY",
        "MCP_REGISTRY_OCI_USER_AGENT",
        "MCP_REGISTRY_DOCKER_AUTH_URL",
        "MCP_REGISTRY_OCI_SKIP_ON_RATE_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(http_timeout_s=10.0)


@pytest.fixture
def fake_registry():
    """Fake registry on the loopback fallback origin."""
    return FakeRegistry(origin=REGISTRY_URL)


@pytest.fixture
def client(fake_registry):
    with fake_registry.client() as c:
        yield c


@pytest.fixture
def descriptor():
    """Descriptor pointing at the fake registry."""
    return PackageDescriptor(
        registry_type=RegistryType.OCI,
        registry_base_url=REGISTRY_URL,
        identifier="test-namespace/test-repo",
        version="latest",
    )
