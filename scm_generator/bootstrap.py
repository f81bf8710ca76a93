"""Factory functions for creating and configuring application components with dependency injection."""

from .entities import ServiceConfig
from .repositories import BaseSecretRepository, GCPSecretRepository, LocalSecretRepository
from .services import ProviderSelector, SCMProviderGenerator, SecretResolver
from .structured_logging import get_logger

logger = get_logger("BOOTSTRAP")


def get_secret_repository(config: ServiceConfig) -> BaseSecretRepository:
    """Create development or production secret repository based on environment."""
    if config.is_production:
        logger.info("Using GCP secret repository for production")
        return GCPSecretRepository(
            project_id=config.project_id,
        )

    if config.environment == "production":
        logger.warning("PROJECT_ID is not set, falling back to local secret repository")
    else:
        logger.info("Using local secret repository for development")
    return LocalSecretRepository()


def get_generator(config: ServiceConfig) -> SCMProviderGenerator:
    secret_repository = get_secret_repository(config)
    selector = ProviderSelector(SecretResolver(secret_repository), timeout=config.http_timeout_seconds)
    logger.info("Creating SCM provider generator", http_timeout_seconds=config.http_timeout_seconds)
    return SCMProviderGenerator(provider_factory=selector)
