"""SCM provider generator: configuration in, parameter bundles out."""

from datetime import timedelta
from typing import Any, Optional

from ..entities import (
    ApplicationSetGenerator,
    GeneratorError,
    ListError,
    MissingConfigError,
    NoProviderConfiguredError,
    ParameterBundle,
    ParentResource,
    ProviderInitError,
    SCMProviderGeneratorConfig,
)
from ..repositories import BaseSecretRepository
from ..structured_logging import get_logger
from .normalizer import normalize
from .provider_selector import ProviderFactory, ProviderSelector
from .secret_resolver import SecretResolver

logger = get_logger("GENERATOR")

DEFAULT_REQUEUE_AFTER = timedelta(minutes=30)


class SCMProviderGenerator:
    """Generates one parameter bundle per repository branch found on an SCM provider.

    Args:
        secret_repository: Store the provider credentials are read from.
            Required unless ``provider_factory`` is given.
        provider_factory: Builds the repository lister for a configuration and
            namespace. Defaults to a ``ProviderSelector`` over
            ``secret_repository``; tests pass a factory returning a fake.
    """

    def __init__(
        self,
        secret_repository: Optional[BaseSecretRepository] = None,
        provider_factory: Optional[ProviderFactory] = None,
    ) -> None:
        if provider_factory is None:
            if secret_repository is None:
                raise ValueError("Either secret_repository or provider_factory is required")
            provider_factory = ProviderSelector(SecretResolver(secret_repository))
        self._provider_factory = provider_factory

    def get_requeue_after(self, generator: ApplicationSetGenerator) -> timedelta:
        """Return how long the scheduler should wait before generating again."""
        config = generator.scm_provider
        if config is None or config.requeue_after_seconds is None:
            return DEFAULT_REQUEUE_AFTER

        if config.requeue_after_seconds <= 0:
            logger.warning(
                "Non-positive requeue interval configured",
                requeue_after_seconds=config.requeue_after_seconds,
            )
        return timedelta(seconds=config.requeue_after_seconds)

    def get_template(self, generator: ApplicationSetGenerator) -> dict[str, Any]:
        if generator.scm_provider is None:
            raise MissingConfigError()
        return generator.scm_provider.template

    def generate_params(
        self, generator: Optional[ApplicationSetGenerator], parent: Optional[ParentResource]
    ) -> list[ParameterBundle]:
        """List matching repository branches and flatten them into parameter bundles.

        Raises:
            MissingConfigError: No generator entry, SCM provider section or parent resource.
            NoProviderConfiguredError: The SCM provider section names no provider.
            SecretFetchError, SecretKeyMissingError: A credential could not be read.
            ProviderInitError: The provider client could not be built.
            ListError: Listing failed at the provider.
        """
        if generator is None or generator.scm_provider is None:
            raise MissingConfigError()
        if parent is None:
            raise MissingConfigError("parent resource is required to resolve secrets")

        config = generator.scm_provider
        return self._generate(config, parent.namespace)

    def _generate(self, config: SCMProviderGeneratorConfig, namespace: str) -> list[ParameterBundle]:
        if config.provider is None:
            raise NoProviderConfiguredError()
        kind = config.provider.kind
        try:
            provider = self._provider_factory(config, namespace)
        except GeneratorError as err:
            err.add_context(stage="select", provider=kind)
            raise
        except Exception as err:  # noqa: BLE001
            raise ProviderInitError(kind, err).add_context(stage="select") from err

        try:
            with provider:
                records = provider.list_repositories(config.filters, config.clone_protocol)
        except GeneratorError as err:
            err.add_context(stage="list", provider=kind)
            raise
        except Exception as err:  # noqa: BLE001
            raise ListError(kind, str(err)) from err

        params = normalize(records)
        logger.info("Generated parameters", provider=kind, namespace=namespace, parameter_count=len(params))
        return params
