"""SCM provider repository listers."""

from .azure_devops import AzureDevOpsProvider
from .base import RepositoryLister
from .bitbucket_server import BitbucketServerProvider
from .filters import CompiledFilter, compile_filters
from .gitea import GiteaProvider
from .github import GithubProvider
from .gitlab import GitlabProvider
from .http import DEFAULT_TIMEOUT_SECONDS, HTTPRepositoryLister

__all__ = [
    "AzureDevOpsProvider",
    "BitbucketServerProvider",
    "CompiledFilter",
    "DEFAULT_TIMEOUT_SECONDS",
    "GiteaProvider",
    "GithubProvider",
    "GitlabProvider",
    "HTTPRepositoryLister",
    "RepositoryLister",
    "compile_filters",
]
