"""Data entities for the SCM provider generator."""

from .config import (
    PROVIDER_FIELDS,
    ApplicationSetGenerator,
    AzureDevOpsConfig,
    BasicAuth,
    BitbucketServerConfig,
    GiteaConfig,
    GithubConfig,
    GitlabConfig,
    ParentResource,
    ProviderConfig,
    SCMProviderFilter,
    SCMProviderGeneratorConfig,
    SecretRef,
    ServiceConfig,
)
from .errors import (
    GeneratorError,
    ListError,
    MissingConfigError,
    NoProviderConfiguredError,
    ProviderInitError,
    SecretFetchError,
    SecretKeyMissingError,
    UnsupportedCloneProtocolError,
)
from .repository import PARAMETER_KEYS, ParameterBundle, RepositoryRecord

__all__ = [
    "ApplicationSetGenerator",
    "AzureDevOpsConfig",
    "BasicAuth",
    "BitbucketServerConfig",
    "GiteaConfig",
    "GithubConfig",
    "GitlabConfig",
    "ParentResource",
    "ProviderConfig",
    "PROVIDER_FIELDS",
    "SCMProviderFilter",
    "SCMProviderGeneratorConfig",
    "SecretRef",
    "ServiceConfig",
    "GeneratorError",
    "ListError",
    "MissingConfigError",
    "NoProviderConfiguredError",
    "ProviderInitError",
    "SecretFetchError",
    "SecretKeyMissingError",
    "UnsupportedCloneProtocolError",
    "PARAMETER_KEYS",
    "ParameterBundle",
    "RepositoryRecord",
]
