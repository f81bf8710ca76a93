"""Repository records produced by providers and the bundles emitted from them."""

from dataclasses import dataclass, field, replace

ParameterBundle = dict[str, str]

PARAMETER_KEYS = ("organization", "repository", "url", "branch", "sha", "labels", "branchNormalized")


@dataclass
class RepositoryRecord:
    """One matched (repository, branch) pair as seen by a provider.

    Attributes:
        organization: Organization, owner, group or project the repository lives in.
        repository: Repository name (or slug).
        url: Clone URL in the requested protocol.
        branch: Branch name.
        sha: Head commit of the branch; empty until branches are expanded.
        labels: Topics/labels attached to the repository.
        repository_id: Provider-internal identifier, never emitted.
    """

    organization: str
    repository: str
    url: str
    branch: str
    sha: str = ""
    labels: list[str] = field(default_factory=list)
    repository_id: str = ""

    def for_branch(self, branch: str, sha: str) -> "RepositoryRecord":
        return replace(self, branch=branch, sha=sha, labels=list(self.labels))
