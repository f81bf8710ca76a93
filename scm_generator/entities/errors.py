"""Error taxonomy for parameter generation."""

from typing import Optional


class GeneratorError(Exception):
    """Base class for every error raised while generating parameters.

    ``stage`` and ``provider`` are filled in as the error travels up the call
    chain so the final message says where generation failed.
    """

    def __init__(self, message: str, *, stage: Optional[str] = None, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.provider = provider

    def add_context(self, *, stage: Optional[str] = None, provider: Optional[str] = None) -> "GeneratorError":
        """Fill in missing context without overwriting what is already known."""
        self.stage = self.stage or stage
        self.provider = self.provider or provider
        return self

    def __str__(self) -> str:
        context = []
        if self.stage:
            context.append(f"stage={self.stage}")
        if self.provider:
            context.append(f"provider={self.provider}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class MissingConfigError(GeneratorError):
    """The generator entry or its SCM provider section is missing."""

    def __init__(self, message: str = "SCM provider generator configuration is empty") -> None:
        super().__init__(message)


class NoProviderConfiguredError(GeneratorError):
    def __init__(self) -> None:
        super().__init__("no SCM provider implementation configured")


class SecretFetchError(GeneratorError):
    def __init__(self, namespace: str, name: str, cause: Exception) -> None:
        super().__init__(f"error fetching secret {namespace}/{name}: {cause}")
        self.namespace = namespace
        self.name = name
        self.cause = cause


class SecretKeyMissingError(GeneratorError):
    def __init__(self, namespace: str, name: str, key: str) -> None:
        super().__init__(f"key {key!r} in secret {namespace}/{name} not found")
        self.namespace = namespace
        self.name = name
        self.key = key


class ProviderInitError(GeneratorError):
    def __init__(self, provider: str, cause: Exception) -> None:
        super().__init__(f"error initializing {provider} service: {cause}", provider=provider)
        self.cause = cause


class ListError(GeneratorError):
    """Listing repositories or branches failed at the provider boundary."""

    def __init__(self, provider: str, detail: str) -> None:
        super().__init__(f"error listing repos: {detail}", stage="list", provider=provider)
        self.detail = detail


class UnsupportedCloneProtocolError(ListError):
    def __init__(self, provider: str, clone_protocol: Optional[str], detail: Optional[str] = None) -> None:
        super().__init__(provider, detail or f"unknown clone protocol for {provider}: {clone_protocol!r}")
        self.clone_protocol = clone_protocol
