"""Google Cloud Secret Manager implementation of the secret store."""

import json
from collections.abc import Mapping

from google.cloud import secretmanager  # type: ignore[attr-defined]

from ..structured_logging import get_logger
from .base import BaseSecretRepository

logger = get_logger("GCP_SECRETS")


class GCPSecretRepository(BaseSecretRepository):
    """Stores each secret as a JSON object payload named ``<namespace>-<name>``."""

    def __init__(self, project_id: str):
        self._client = secretmanager.SecretManagerServiceClient()
        self._project_id = project_id

    def write_secret(self, namespace: str, name: str, data: Mapping[str, str]) -> None:
        parent = self._client.secret_path(self._project_id, self.build_secret_name(namespace, name))
        self._client.add_secret_version(
            request={"parent": parent, "payload": {"data": json.dumps(dict(data)).encode("UTF-8")}}
        )

    def get_secret(self, namespace: str, name: str) -> dict[str, bytes]:
        path = self._client.secret_version_path(
            project=self._project_id, secret=self.build_secret_name(namespace, name), secret_version="latest"
        )

        response = self._client.access_secret_version(name=path)
        logger.debug("Retrieved secret", path=path)
        payload = json.loads(response.payload.data.decode("UTF-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"secret {namespace}/{name} payload is not a JSON object")
        return {key: str(value).encode("UTF-8") for key, value in payload.items()}

    def build_secret_name(self, namespace: str, name: str) -> str:
        return namespace + "-" + name
