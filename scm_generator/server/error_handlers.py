"""Centralized error handling for the generator service."""

from typing import Any

from fastapi import HTTPException

from ..entities import (
    GeneratorError,
    ListError,
    MissingConfigError,
    NoProviderConfiguredError,
    ProviderInitError,
    SecretFetchError,
    SecretKeyMissingError,
)
from ..structured_logging import get_logger

logger = get_logger("ERROR_HANDLERS")

# Checked in order; the first matching class decides the status code.
STATUS_CODES: tuple[tuple[type[GeneratorError], int], ...] = (
    (MissingConfigError, 400),
    (NoProviderConfiguredError, 400),
    (SecretFetchError, 422),
    (SecretKeyMissingError, 422),
    (ProviderInitError, 422),
    (ListError, 502),
)


class ErrorHandler:
    """Centralized error handling utilities."""

    @staticmethod
    def handle_generator_error(
        err: GeneratorError, operation: str, correlation_id: str, **context: Any
    ) -> HTTPException:
        """Convert generator errors to HTTP exceptions with consistent logging."""
        status_code = next((code for cls, code in STATUS_CODES if isinstance(err, cls)), 500)
        logger.error(
            f"{operation} failed",
            correlation_id=correlation_id,
            error_type=type(err).__name__,
            error=str(err),
            stage=err.stage,
            provider=err.provider,
            **context,
        )
        return HTTPException(status_code=status_code, detail=f"{err} (correlation_id: {correlation_id[:8]})")

    @staticmethod
    def handle_unexpected_error(err: Exception, operation: str, correlation_id: str, **context: Any) -> HTTPException:
        """Convert unexpected errors to HTTP exceptions with consistent logging."""
        logger.error(
            f"Unexpected error during {operation}",
            correlation_id=correlation_id,
            error_type=type(err).__name__,
            error=str(err),
            **context,
        )
        return HTTPException(status_code=500, detail=f"Internal server error (correlation_id: {correlation_id[:8]})")
