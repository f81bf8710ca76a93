"""GitHub (and GitHub Enterprise) repository lister."""

from typing import Optional
from urllib.parse import quote

import httpx

from ..entities import RepositoryRecord, UnsupportedCloneProtocolError
from .http import DEFAULT_TIMEOUT_SECONDS, HTTPRepositoryLister

GITHUB_API_URL = "https://api.github.com"


class GithubProvider(HTTPRepositoryLister):
    provider_name = "Github"

    def __init__(
        self,
        organization: str,
        token: str,
        api: Optional[str] = None,
        all_branches: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not organization:
            raise ValueError("organization is required")
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"token {token}"
        super().__init__(api or GITHUB_API_URL, headers=headers, timeout=timeout, http_client=http_client)
        self._organization = organization
        self._all_branches = all_branches

    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        if clone_protocol in (None, "", "ssh"):
            url_field = "ssh_url"
        elif clone_protocol == "https":
            url_field = "clone_url"
        else:
            raise UnsupportedCloneProtocolError(self.provider_name, clone_protocol)

        items = self._paginate(f"/orgs/{quote(self._organization, safe='')}/repos", {"per_page": 100}) or []
        return [
            RepositoryRecord(
                organization=item["owner"]["login"],
                repository=item["name"],
                url=item[url_field],
                branch=item.get("default_branch") or "",
                labels=list(item.get("topics") or []),
                repository_id=str(item["id"]),
            )
            for item in items
        ]

    def get_branches(self, repo: RepositoryRecord) -> list[RepositoryRecord]:
        base = f"/repos/{quote(repo.organization, safe='')}/{quote(repo.repository, safe='')}/branches"
        if not self._all_branches:
            # Empty repositories have no default branch to report.
            branch = self._get_json(f"{base}/{quote(repo.branch, safe='')}", allow_missing=True)
            if branch is None:
                return []
            return [repo.for_branch(branch["name"], branch["commit"]["sha"])]

        branches = self._paginate(base, {"per_page": 100}) or []
        return [repo.for_branch(branch["name"], branch["commit"]["sha"]) for branch in branches]

    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        response = self._get(
            f"/repos/{quote(repo.organization, safe='')}/{quote(repo.repository, safe='')}"
            f"/contents/{quote(path.strip('/'))}",
            {"ref": repo.branch},
            allow_missing=True,
        )
        return response is not None
