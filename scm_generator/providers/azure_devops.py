"""Azure DevOps Repos lister."""

from typing import Optional
from urllib.parse import quote

import httpx

from ..entities import ListError, RepositoryRecord, UnsupportedCloneProtocolError
from .http import DEFAULT_TIMEOUT_SECONDS, HTTPRepositoryLister

AZURE_DEVOPS_URL = "https://dev.azure.com"
API_VERSION = "7.0"
HEADS_PREFIX = "refs/heads/"


class AzureDevOpsProvider(HTTPRepositoryLister):
    provider_name = "Azure DevOps"

    def __init__(
        self,
        access_token: str,
        organization: str,
        api: Optional[str],
        team_project: str,
        all_branches: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not access_token:
            raise ValueError("no access token provided")
        if not organization:
            raise ValueError("organization is required")
        if not team_project:
            raise ValueError("team project is required")
        # Personal access tokens go in the password slot with an empty user name.
        super().__init__(
            api or AZURE_DEVOPS_URL,
            auth=httpx.BasicAuth("", access_token),
            timeout=timeout,
            http_client=http_client,
        )
        self._organization = organization
        self._team_project = team_project
        self._all_branches = all_branches

    @property
    def _git_path(self) -> str:
        return f"/{quote(self._organization, safe='')}/{quote(self._team_project, safe='')}/_apis/git"

    def _values(self, path: str, params: dict[str, str]) -> list[dict]:
        data = self._get_json(path, dict(params, **{"api-version": API_VERSION}))
        if not isinstance(data, dict):
            raise ListError(self.provider_name, f"expected an object from {path}")
        return data.get("value", [])

    def list_repos(self, clone_protocol: Optional[str]) -> list[RepositoryRecord]:
        if clone_protocol in (None, "", "https"):
            url_field = "remoteUrl"
        elif clone_protocol == "ssh":
            url_field = "sshUrl"
        else:
            raise UnsupportedCloneProtocolError(self.provider_name, clone_protocol)

        repos = []
        for item in self._values(f"{self._git_path}/repositories", {}):
            default_branch = item.get("defaultBranch")
            if not default_branch:
                # Empty repository.
                continue
            url = item.get(url_field)
            if not url:
                raise UnsupportedCloneProtocolError(
                    self.provider_name, clone_protocol, f"{url_field} not found for {item.get('name')}"
                )
            repos.append(
                RepositoryRecord(
                    organization=self._organization,
                    repository=item["name"],
                    url=url,
                    branch=default_branch.removeprefix(HEADS_PREFIX),
                    repository_id=item["id"],
                )
            )
        return repos

    def get_branches(self, repo: RepositoryRecord) -> list[RepositoryRecord]:
        ref_filter = "heads/" if self._all_branches else f"heads/{repo.branch}"
        refs = self._values(f"{self._git_path}/repositories/{repo.repository_id}/refs", {"filter": ref_filter})
        branches = []
        for ref in refs:
            name = ref["name"].removeprefix(HEADS_PREFIX)
            # The ref filter is a prefix match.
            if not self._all_branches and name != repo.branch:
                continue
            branches.append(repo.for_branch(name, ref["objectId"]))
        return branches

    def repo_has_path(self, repo: RepositoryRecord, path: str) -> bool:
        response = self._get(
            f"{self._git_path}/repositories/{repo.repository_id}/items",
            {
                "path": path,
                "versionDescriptor.version": repo.branch,
                "versionDescriptor.versionType": "branch",
                "api-version": API_VERSION,
            },
            allow_missing=True,
        )
        return response is not None
