"""GitLab repository lister (groups and, optionally, their subgroups)."""

import posixpath
from typing import Optional
from urllib.parse import quote

import httpx

from ..entities import RepositoryRecord, UnsupportedCloneProtocolError
from .http import DEFAULT_TIMEOUT_SECONDS, HTTPRepositoryLister

GITLAB_URL = "https://gitlab.com"


def _api_url(api: Optional[str]) -> str:
    url = (api or GITLAB_URL).rstrip("/")
    return url if url.endswith("/api/v4") else url + "/api/v4"


class GitlabProvider(HTTPRepositoryLister):
    provider_name = "Gitlab"

    def __init__(
        self,
        group: str,
        token: str,
        api: Optional[str] = None,
        all_branches: bool = False,
        include_subgroups: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not group:
            raise ValueError("group is required")
        headers = {"PRIVATE-TOKEN": token} if token else None
        super().__init__(_api_url(api), headers=headers, timeout=timeout, http_client=http_client)
        self._group = group
        self._all_branches = all_branches
        self._include_subgroups = include_subgroups

    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        if clone_protocol in (None, "", "ssh"):
            url_field = "ssh_url_to_repo"
        elif clone_protocol == "https":
            url_field = "http_url_to_repo"
        else:
            raise UnsupportedCloneProtocolError(self.provider_name, clone_protocol)

        params = {"include_subgroups": str(self._include_subgroups).lower(), "per_page": 100}
        items = self._paginate(f"/groups/{quote(self._group, safe='')}/projects", params) or []
        return [
            RepositoryRecord(
                organization=item["namespace"]["full_path"],
                repository=item["path"],
                url=item[url_field],
                branch=item.get("default_branch") or "",
                labels=list(item.get("topics") or item.get("tag_list") or []),
                repository_id=str(item["id"]),
            )
            for item in items
        ]

    def get_branches(self, repo: RepositoryRecord) -> list[RepositoryRecord]:
        base = f"/projects/{repo.repository_id}/repository/branches"
        if not self._all_branches:
            branch = self._get_json(f"{base}/{quote(repo.branch, safe='')}", allow_missing=True)
            if branch is None:
                return []
            return [repo.for_branch(branch["name"], branch["commit"]["id"])]

        branches = self._paginate(base, {"per_page": 100}) or []
        return [repo.for_branch(branch["name"], branch["commit"]["id"]) for branch in branches]

    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        # The tree API lists a directory, so look the entry up in its parent.
        path = path.strip("/")
        directory = posixpath.dirname(path)
        entries = self._paginate(
            f"/projects/{repo.repository_id}/repository/tree",
            {"path": directory, "ref": repo.branch, "per_page": 100},
            allow_missing=True,
        )
        if entries is None:
            return False
        return any(entry.get("path") == path for entry in entries)
