import pytest

from scm_generator import bootstrap
from scm_generator.bootstrap import get_generator, get_secret_repository
from scm_generator.entities import ServiceConfig
from scm_generator.repositories import LocalSecretRepository
from scm_generator.services import ProviderSelector, SCMProviderGenerator


@pytest.mark.unit
def test__get_secret_repository_development() -> None:
    """Test that development config returns LocalSecretRepository."""
    repo = get_secret_repository(ServiceConfig(environment="development"))

    assert isinstance(repo, LocalSecretRepository)


@pytest.mark.unit
def test__get_secret_repository_production(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that production config returns GCPSecretRepository."""

    # Patch the GCPSecretRepository to avoid actual GCP calls
    class MockGCPSecretRepository:
        def __init__(self, project_id):
            self.project_id = project_id

    monkeypatch.setattr(bootstrap, "GCPSecretRepository", MockGCPSecretRepository)

    repo = get_secret_repository(ServiceConfig(environment="production", project_id="test-project"))

    assert isinstance(repo, MockGCPSecretRepository)
    assert repo.project_id == "test-project"


@pytest.mark.unit
def test__get_secret_repository_production_without_project(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that production without a project id never builds a GCP client."""

    def fail(project_id):
        raise AssertionError("GCP client must not be created")

    monkeypatch.setattr(bootstrap, "GCPSecretRepository", fail)

    repo = get_secret_repository(ServiceConfig(environment="production", project_id=""))

    assert isinstance(repo, LocalSecretRepository)


@pytest.mark.unit
def test__get_generator_uses_configured_timeout() -> None:
    generator = get_generator(ServiceConfig(environment="development", http_timeout_seconds=5))

    assert isinstance(generator, SCMProviderGenerator)
    assert isinstance(generator._provider_factory, ProviderSelector)
    assert generator._provider_factory._timeout == 5


@pytest.mark.unit
def test__service_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("PROJECT_ID", "p")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "12.5")

    config = ServiceConfig()

    assert config.is_production
    assert config.http_timeout_seconds == 12.5
