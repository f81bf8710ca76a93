"""Shared test fixtures for the entire test suite."""

from collections.abc import Callable
from typing import Any, Optional

import httpx
import pytest

from scm_generator.entities import (
    ApplicationSetGenerator,
    ParentResource,
    RepositoryRecord,
    SCMProviderGeneratorConfig,
)
from scm_generator.providers import RepositoryLister
from scm_generator.repositories import LocalSecretRepository


class FakeRepositoryLister(RepositoryLister):
    """In-memory lister for testing."""

    provider_name = "Fake"

    def __init__(
        self,
        repos: list[RepositoryRecord],
        branches: Optional[dict[str, list[tuple[str, str]]]] = None,
        paths: Optional[set[tuple[str, str, str]]] = None,
    ) -> None:
        self.repos = repos
        self.branches = branches or {}
        self.paths = paths or set()
        self.closed = False
        self.clone_protocols: list[Optional[str]] = []

    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        self.clone_protocols.append(clone_protocol)
        return list(self.repos)

    def get_branches(self, repo: RepositoryRecord) -> list[RepositoryRecord]:
        if repo.repository not in self.branches:
            return [repo]
        return [repo.for_branch(name, sha) for name, sha in self.branches[repo.repository]]

    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        return (repo.repository, repo.branch, path) in self.paths

    def close(self) -> None:
        self.closed = True


def make_record(repository: str, branch: str = "main", **kwargs: Any) -> RepositoryRecord:
    """Build a repository record with sensible defaults."""
    kwargs.setdefault("organization", "acme")
    kwargs.setdefault("url", f"git@github.com:acme/{repository}.git")
    return RepositoryRecord(repository=repository, branch=branch, **kwargs)


def make_generator(**scm_provider: Any) -> ApplicationSetGenerator:
    """Build a generator entry from camelCase SCM provider settings."""
    return ApplicationSetGenerator(scm_provider=SCMProviderGeneratorConfig.model_validate(scm_provider))


def mock_http_client(handler: Callable[[httpx.Request], httpx.Response], base_url: str) -> httpx.Client:
    """Return an httpx client whose requests are answered by ``handler``."""
    return httpx.Client(base_url=base_url, transport=httpx.MockTransport(handler))


@pytest.fixture
def secret_repo() -> LocalSecretRepository:
    """Provide a secret repository holding a GitHub token in ns1/tok."""
    return LocalSecretRepository({("ns1", "tok"): {"token": "abc123"}})


@pytest.fixture
def parent() -> ParentResource:
    return ParentResource(name="my-appset", namespace="ns1")


@pytest.fixture
def github_generator() -> ApplicationSetGenerator:
    """Provide a GitHub generator entry reading its token from ns1/tok."""
    return make_generator(github={"organization": "acme", "tokenRef": {"secretName": "tok", "key": "token"}})
