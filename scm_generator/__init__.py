"""Generates template parameters from the repositories and branches of an SCM provider."""

from .entities import ApplicationSetGenerator, ParentResource, SCMProviderGeneratorConfig
from .services import SCMProviderGenerator

__all__ = ["ApplicationSetGenerator", "ParentResource", "SCMProviderGenerator", "SCMProviderGeneratorConfig"]
