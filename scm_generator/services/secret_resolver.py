"""Resolves credential references against the secret store."""

from typing import Optional

from ..entities import SecretFetchError, SecretKeyMissingError, SecretRef
from ..repositories import BaseSecretRepository
from ..structured_logging import get_logger

logger = get_logger("SECRET_RESOLVER")


class SecretResolver:
    def __init__(self, secret_repository: BaseSecretRepository) -> None:
        self._secret_repository = secret_repository

    def resolve(self, ref: Optional[SecretRef], namespace: str) -> str:
        """Return the value ``ref`` points to in ``namespace``, or "" when there is no reference."""
        if ref is None:
            return ""

        try:
            data = self._secret_repository.get_secret(namespace, ref.secret_name)
        except Exception as err:  # noqa: BLE001
            raise SecretFetchError(namespace, ref.secret_name, err) from err

        if ref.key not in data:
            raise SecretKeyMissingError(namespace, ref.secret_name, ref.key)

        try:
            value = data[ref.key].decode("UTF-8")
        except UnicodeDecodeError as err:
            raise SecretFetchError(namespace, ref.secret_name, err) from err

        logger.debug("Resolved secret reference", namespace=namespace, secret_name=ref.secret_name, key=ref.key)
        return value
