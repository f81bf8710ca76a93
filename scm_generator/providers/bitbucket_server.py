"""Bitbucket Server (Data Center) repository lister."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..entities import ListError, RepositoryRecord, UnsupportedCloneProtocolError
from .http import DEFAULT_TIMEOUT_SECONDS, HTTPRepositoryLister

PAGE_LIMIT = 100


def _clone_link(repo: dict[str, Any], name: str) -> str:
    for link in repo.get("links", {}).get("clone", []):
        if link.get("name") == name:
            return link.get("href", "")
    return ""


class BitbucketServerProvider(HTTPRepositoryLister):
    """Lists the repositories of one Bitbucket Server project, anonymously or with basic auth."""

    provider_name = "Bitbucket Server"

    def __init__(
        self,
        api: str,
        project: str,
        all_branches: bool = False,
        username: Optional[str] = None,
        password: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not project:
            raise ValueError("project is required")
        auth = httpx.BasicAuth(username, password) if username else None
        super().__init__(api, auth=auth, timeout=timeout, http_client=http_client)
        self._project = project
        self._all_branches = all_branches

    def _paginate_pages(self, path: str, params: Optional[dict[str, Any]] = None) -> list[Any]:
        """Collect every page of a ``{values, isLastPage, nextPageStart}`` endpoint."""
        params = dict(params or {}, limit=PAGE_LIMIT, start=0)
        values: list[Any] = []
        while True:
            page = self._get_json(path, params)
            if not isinstance(page, dict):
                raise ListError(self.provider_name, f"expected a page object from {path}")
            values.extend(page.get("values", []))
            if page.get("isLastPage", True):
                return values
            params["start"] = page["nextPageStart"]

    def _repo_path(self, repo: RepositoryRecord) -> str:
        return f"/rest/api/1.0/projects/{quote(repo.organization, safe='')}/repos/{quote(repo.repository, safe='')}"

    def _clone_url(self, repo: dict[str, Any], clone_protocol: Optional[str]) -> str:
        if clone_protocol == "ssh":
            url = _clone_link(repo, "ssh")
            if not url:
                raise UnsupportedCloneProtocolError(
                    self.provider_name, clone_protocol, f"ssh clone url not found for {repo.get('slug')}"
                )
            return url
        if clone_protocol == "https":
            return _clone_link(repo, "http")
        # No preference: ssh when the server exposes it.
        return _clone_link(repo, "ssh") or _clone_link(repo, "http")

    def _default_branch(self, repo: RepositoryRecord) -> Optional[dict[str, Any]]:
        """The default branch, or None for an empty repository (404, or 204 with no body)."""
        response = self._get(f"{self._repo_path(repo)}/branches/default", allow_missing=True)
        if response is None or response.status_code == 204 or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as err:
            raise ListError(self.provider_name, f"invalid JSON from {response.request.url}: {err}") from err

    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        if clone_protocol not in (None, "", "ssh", "https"):
            raise UnsupportedCloneProtocolError(self.provider_name, clone_protocol)

        repos = []
        for item in self._paginate_pages(f"/rest/api/1.0/projects/{quote(self._project, safe='')}/repos"):
            record = RepositoryRecord(
                organization=item["project"]["key"],
                repository=item["slug"],
                url=self._clone_url(item, clone_protocol),
                branch="",
                repository_id=str(item["id"]),
            )
            default_branch = self._default_branch(record)
            if default_branch is None:
                continue
            repos.append(record.for_branch(default_branch["displayId"], default_branch.get("latestCommit", "")))
        return repos

    def get_branches(self, repo: RepositoryRecord) -> list[RepositoryRecord]:
        if not self._all_branches:
            return [repo]
        branches = self._paginate_pages(f"{self._repo_path(repo)}/branches")
        return [repo.for_branch(branch["displayId"], branch.get("latestCommit", "")) for branch in branches]

    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        response = self._get(
            f"{self._repo_path(repo)}/browse/{quote(path.strip('/'))}",
            {"at": repo.branch, "type": "true"},
            allow_missing=True,
        )
        return response is not None
