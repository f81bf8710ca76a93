"""Compiled repository/branch filters."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..entities import ListError, RepositoryRecord, SCMProviderFilter

if TYPE_CHECKING:
    from .base import RepositoryLister


@dataclass
class CompiledFilter:
    repository_match: Optional[re.Pattern[str]] = None
    label_match: Optional[re.Pattern[str]] = None
    branch_match: Optional[re.Pattern[str]] = None
    paths_exist: Optional[list[str]] = None
    paths_do_not_exist: Optional[list[str]] = None

    @property
    def is_branch_filter(self) -> bool:
        """Branch filters can only be evaluated once a repository is expanded into branches."""
        return self.branch_match is not None or self.paths_exist is not None or self.paths_do_not_exist is not None

    def matches(self, lister: "RepositoryLister", repo: RepositoryRecord) -> bool:
        """Return True when every criterion set on this filter holds for ``repo``."""
        if self.repository_match and not self.repository_match.search(repo.repository):
            return False
        if self.branch_match and not self.branch_match.search(repo.branch):
            return False
        if self.label_match and not any(self.label_match.search(label) for label in repo.labels):
            return False
        for path in self.paths_exist or []:
            if not lister.repo_has_path(repo, path):
                return False
        for path in self.paths_do_not_exist or []:
            if lister.repo_has_path(repo, path):
                return False
        return True


def _compile(pattern: Optional[str], field_name: str, provider: str) -> Optional[re.Pattern[str]]:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as err:
        raise ListError(provider, f"invalid {field_name} regexp {pattern!r}: {err}") from err


def compile_filters(filters: Sequence[SCMProviderFilter], provider: str) -> list[CompiledFilter]:
    return [
        CompiledFilter(
            repository_match=_compile(f.repository_match, "repositoryMatch", provider),
            label_match=_compile(f.label_match, "labelMatch", provider),
            branch_match=_compile(f.branch_match, "branchMatch", provider),
            paths_exist=list(f.paths_exist) if f.paths_exist is not None else None,
            paths_do_not_exist=list(f.paths_do_not_exist) if f.paths_do_not_exist is not None else None,
        )
        for f in filters
    ]
