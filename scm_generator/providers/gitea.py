"""Gitea repository lister."""

from typing import Optional
from urllib.parse import quote

import httpx

from ..entities import RepositoryRecord, UnsupportedCloneProtocolError
from .http import DEFAULT_TIMEOUT_SECONDS, HTTPRepositoryLister


class GiteaProvider(HTTPRepositoryLister):
    provider_name = "Gitea"

    def __init__(
        self,
        owner: str,
        token: str,
        api: str,
        all_branches: bool = False,
        insecure: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not owner:
            raise ValueError("owner is required")
        if not api:
            raise ValueError("API URL is required")
        headers = {"Authorization": f"token {token}"} if token else None
        super().__init__(
            api.rstrip("/") + "/api/v1",
            headers=headers,
            verify=not insecure,
            timeout=timeout,
            http_client=http_client,
        )
        self._owner = owner
        self._all_branches = all_branches

    def _repo_path(self, repo: RepositoryRecord) -> str:
        return f"/repos/{quote(repo.organization, safe='')}/{quote(repo.repository, safe='')}"

    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        if clone_protocol in (None, "", "ssh"):
            url_field = "ssh_url"
        elif clone_protocol == "https":
            url_field = "clone_url"
        else:
            raise UnsupportedCloneProtocolError(self.provider_name, clone_protocol)

        items = self._paginate(f"/orgs/{quote(self._owner, safe='')}/repos", {"limit": 50}) or []
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
        base = f"{self._repo_path(repo)}/branches"
        if not self._all_branches:
            branch = self._get_json(f"{base}/{quote(repo.branch, safe='')}", allow_missing=True)
            if branch is None:
                return []
            return [repo.for_branch(branch["name"], branch["commit"]["id"])]

        branches = self._paginate(base, {"limit": 50}) or []
        return [repo.for_branch(branch["name"], branch["commit"]["id"]) for branch in branches]

    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        response = self._get(
            f"{self._repo_path(repo)}/contents/{quote(path.strip('/'))}",
            {"ref": repo.branch},
            allow_missing=True,
        )
        return response is not None
