"""Parameter generation services."""

from .generator import DEFAULT_REQUEUE_AFTER, SCMProviderGenerator
from .normalizer import normalize, normalize_branch, to_parameters
from .provider_selector import ProviderFactory, ProviderSelector
from .secret_resolver import SecretResolver

__all__ = [
    "DEFAULT_REQUEUE_AFTER",
    "ProviderFactory",
    "ProviderSelector",
    "SCMProviderGenerator",
    "SecretResolver",
    "normalize",
    "normalize_branch",
    "to_parameters",
]
