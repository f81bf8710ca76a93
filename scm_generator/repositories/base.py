"""Abstract secret store interface."""

import abc
from collections.abc import Mapping


class BaseSecretRepository(abc.ABC):
    """A namespaced store of named secrets, each holding key/value data."""

    @abc.abstractmethod
    def write_secret(self, namespace: str, name: str, data: Mapping[str, str]) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_secret(self, namespace: str, name: str) -> dict[str, bytes]:
        """Return the data of secret ``name`` in ``namespace``.

        Raises whatever the backend raises when the secret is missing or
        unreachable; callers translate that into their own errors.
        """
        raise NotImplementedError
