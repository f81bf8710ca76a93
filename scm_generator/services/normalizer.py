"""Flattens repository records into parameter bundles."""

import re
from collections.abc import Iterable

from ..entities import ParameterBundle, RepositoryRecord

_NOT_DNS_SAFE = re.compile(r"[^a-zA-Z0-9-]")


def normalize_branch(branch: str) -> str:
    """Replace everything but ASCII letters, digits and hyphens with a hyphen, then lower-case."""
    return _NOT_DNS_SAFE.sub("-", branch).lower()


def to_parameters(record: RepositoryRecord) -> ParameterBundle:
    return {
        "organization": record.organization,
        "repository": record.repository,
        "url": record.url,
        "branch": record.branch,
        "sha": record.sha,
        # Commas inside labels are not escaped.
        "labels": ",".join(record.labels),
        "branchNormalized": normalize_branch(record.branch),
    }


def normalize(records: Iterable[RepositoryRecord]) -> list[ParameterBundle]:
    return [to_parameters(record) for record in records]
