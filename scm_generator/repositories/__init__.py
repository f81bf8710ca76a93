"""Secret store implementations."""

from .base import BaseSecretRepository
from .gcp import GCPSecretRepository
from .local import LocalSecretRepository

__all__ = [
    "BaseSecretRepository",
    "GCPSecretRepository",
    "LocalSecretRepository",
]
