"""Abstract repository lister shared by every SCM provider."""

import abc
from collections.abc import Sequence
from typing import Any, ClassVar, Optional

from ..entities import RepositoryRecord, SCMProviderFilter
from ..structured_logging import get_logger
from .filters import compile_filters

logger = get_logger("PROVIDERS")


class RepositoryLister(abc.ABC):
    """Lists repositories and branches of one SCM provider.

    Implementations supply the three primitives; ``list_repositories`` applies
    the provider-agnostic filters on top of them.
    """

    provider_name: ClassVar[str] = "SCM"

    @abc.abstractmethod
    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        """Return one record per repository, on its default branch."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_branches(self, repo: RepositoryRecord) -> list[RepositoryRecord]:
        """Expand ``repo`` into one record per branch in scope, each with its head sha."""
        raise NotImplementedError

    @abc.abstractmethod
    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self) -> "RepositoryLister":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def list_repositories(
        self, filters: Sequence[SCMProviderFilter], clone_protocol: Optional[str]
    ) -> list[RepositoryRecord]:
        """List every (repository, branch) pair matching ``filters``.

        Repository filters (repositoryMatch/labelMatch only) prune the
        repository list before branches are fetched; the remaining filters are
        evaluated per branch. A record is kept when any filter matches it.
        """
        compiled = compile_filters(filters, self.provider_name)
        repo_filters = [f for f in compiled if not f.is_branch_filter]
        branch_filters = [f for f in compiled if f.is_branch_filter]

        repos = self.list_repos(clone_protocol)
        if repo_filters:
            repos = [repo for repo in repos if any(f.matches(self, repo) for f in repo_filters)]

        results: list[RepositoryRecord] = []
        for repo in repos:
            branches = self.get_branches(repo)
            if branch_filters:
                branches = [branch for branch in branches if any(f.matches(self, branch) for f in branch_filters)]
            results.extend(branches)

        logger.debug(
            "Listed repositories",
            provider=self.provider_name,
            repository_count=len(repos),
            result_count=len(results),
        )
        return results
