"""HTTP plumbing shared by the REST-based providers."""

from typing import Any, Optional

import httpx

from ..entities import ListError
from .base import RepositoryLister

DEFAULT_TIMEOUT_SECONDS = 30.0


class HTTPRepositoryLister(RepositoryLister):
    """Repository lister backed by one ``httpx.Client`` owned for the duration of a call."""

    def __init__(
        self,
        base_url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        auth: Optional[httpx.Auth] = None,
        verify: bool = True,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if not base_url:
            raise ValueError("API URL is required")
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            auth=auth,
            verify=verify,
            timeout=timeout,
        )
        if http_client is not None:
            if headers:
                self._client.headers.update(headers)
            if auth is not None:
                self._client.auth = auth

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(
        self, path: str, params: Optional[dict[str, Any]] = None, *, allow_missing: bool = False
    ) -> Optional[httpx.Response]:
        """GET ``path``; None on 404 when ``allow_missing``, ListError on any other failure."""
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as err:
            raise ListError(self.provider_name, f"request to {path} failed: {err}") from err
        if response.status_code == 404 and allow_missing:
            return None
        if response.is_error:
            raise ListError(
                self.provider_name, f"GET {response.request.url} returned HTTP {response.status_code}"
            )
        return response

    def _get_json(self, path: str, params: Optional[dict[str, Any]] = None, *, allow_missing: bool = False) -> Any:
        response = self._get(path, params, allow_missing=allow_missing)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError as err:
            raise ListError(self.provider_name, f"invalid JSON from {path}: {err}") from err

    def _paginate(
        self, path: str, params: Optional[dict[str, Any]] = None, *, allow_missing: bool = False
    ) -> Optional[list[Any]]:
        """Collect every page of a list endpoint that advertises pages through ``Link: rel="next"``."""
        response = self._get(path, params, allow_missing=allow_missing)
        if response is None:
            return None
        items: list[Any] = []
        while True:
            try:
                page = response.json()
            except ValueError as err:
                raise ListError(self.provider_name, f"invalid JSON from {path}: {err}") from err
            if not isinstance(page, list):
                raise ListError(self.provider_name, f"expected a list from {path}")
            items.extend(page)
            next_url = response.links.get("next", {}).get("url")
            if not next_url:
                return items
            response = self._get(next_url)
