"""Builds the repository lister for the active provider section."""

from collections.abc import Callable
from typing import Optional

from ..entities import (
    AzureDevOpsConfig,
    BitbucketServerConfig,
    GeneratorError,
    GiteaConfig,
    GithubConfig,
    GitlabConfig,
    NoProviderConfiguredError,
    ProviderConfig,
    ProviderInitError,
    SCMProviderGeneratorConfig,
)
from ..providers import (
    DEFAULT_TIMEOUT_SECONDS,
    AzureDevOpsProvider,
    BitbucketServerProvider,
    GiteaProvider,
    GithubProvider,
    GitlabProvider,
    RepositoryLister,
)
from ..structured_logging import get_logger
from .secret_resolver import SecretResolver

logger = get_logger("PROVIDER_SELECTOR")

ProviderFactory = Callable[[SCMProviderGeneratorConfig, str], RepositoryLister]


class ProviderSelector:
    """Turns an SCM provider configuration into a ready-to-use repository lister.

    A new lister is built on every call; credentials are resolved each time
    and never kept.
    """

    def __init__(self, resolver: SecretResolver, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._resolver = resolver
        self._timeout = timeout

    def __call__(self, config: SCMProviderGeneratorConfig, namespace: str) -> RepositoryLister:
        return self.select(config, namespace)

    def select(self, config: SCMProviderGeneratorConfig, namespace: str) -> RepositoryLister:
        provider_config = config.provider
        if provider_config is None:
            raise NoProviderConfiguredError()

        kind = provider_config.kind
        try:
            provider = self._build(provider_config, namespace)
        except GeneratorError as err:
            err.add_context(stage="select", provider=kind)
            raise
        except Exception as err:  # noqa: BLE001
            raise ProviderInitError(kind, err).add_context(stage="select") from err

        logger.info("Initialized SCM provider", provider=kind, namespace=namespace)
        return provider

    def _build(self, provider_config: ProviderConfig, namespace: str) -> RepositoryLister:
        resolve = self._resolver.resolve

        if isinstance(provider_config, GithubConfig):
            return GithubProvider(
                provider_config.organization,
                resolve(provider_config.token_ref, namespace),
                provider_config.api,
                provider_config.all_branches,
                timeout=self._timeout,
            )
        if isinstance(provider_config, GitlabConfig):
            return GitlabProvider(
                provider_config.group,
                resolve(provider_config.token_ref, namespace),
                provider_config.api,
                provider_config.all_branches,
                provider_config.include_subgroups,
                timeout=self._timeout,
            )
        if isinstance(provider_config, GiteaConfig):
            return GiteaProvider(
                provider_config.owner,
                resolve(provider_config.token_ref, namespace),
                provider_config.api,
                provider_config.all_branches,
                provider_config.insecure,
                timeout=self._timeout,
            )
        if isinstance(provider_config, BitbucketServerConfig):
            basic_auth = provider_config.basic_auth
            username: Optional[str] = None
            password = ""
            if basic_auth is not None:
                username = basic_auth.username
                password = resolve(basic_auth.password_ref, namespace)
            return BitbucketServerProvider(
                provider_config.api,
                provider_config.project,
                provider_config.all_branches,
                username=username,
                password=password,
                timeout=self._timeout,
            )
        if isinstance(provider_config, AzureDevOpsConfig):
            return AzureDevOpsProvider(
                resolve(provider_config.access_token_ref, namespace),
                provider_config.organization,
                provider_config.api,
                provider_config.team_project,
                provider_config.all_branches,
                timeout=self._timeout,
            )

        # Unreachable while ProviderConfig and this chain list the same kinds.
        raise TypeError(f"Unsupported provider configuration: {type(provider_config).__name__}")
