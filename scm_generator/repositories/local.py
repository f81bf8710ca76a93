"""In-memory secret store for development and tests."""

from collections.abc import Mapping
from typing import Optional

from .base import BaseSecretRepository


class LocalSecretRepository(BaseSecretRepository):
    """Local implementation of secret repository for development."""

    def __init__(self, secrets: Optional[Mapping[tuple[str, str], Mapping[str, str]]] = None) -> None:
        self._secrets: dict[tuple[str, str], dict[str, bytes]] = {}
        for (namespace, name), data in (secrets or {}).items():
            self.write_secret(namespace, name, data)

    def write_secret(self, namespace: str, name: str, data: Mapping[str, str]) -> None:
        self._secrets[(namespace, name)] = {key: value.encode("UTF-8") for key, value in data.items()}

    def get_secret(self, namespace: str, name: str) -> dict[str, bytes]:
        try:
            return dict(self._secrets[(namespace, name)])
        except KeyError:
            raise LookupError(f"secret {namespace}/{name} not found") from None
