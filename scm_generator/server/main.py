"""Main application module for the SCM provider generator service.

This module bootstraps the FastAPI application with all necessary components.
"""

from typing import Optional

from fastapi import FastAPI

from ..bootstrap import get_generator
from ..entities import GeneratorError, ServiceConfig
from ..services import SCMProviderGenerator
from ..structured_logging import CorrelationContext, configure_structlog, get_logger
from .error_handlers import ErrorHandler
from .schemas import GenerateRequest, GenerateResponse, GeneratorRequest, RequeueAfterResponse, TemplateResponse

logger = get_logger("MAIN")


class SCMGeneratorAPI:
    """HTTP surface over the SCM provider generator."""

    def __init__(
        self, service_config: Optional[ServiceConfig] = None, generator: Optional[SCMProviderGenerator] = None
    ) -> None:
        """Initialize the service with configuration.

        Args:
            service_config: Optional service configuration. If not provided, will be loaded from environment.
            generator: Optional pre-built generator, used instead of the one built from ``service_config``.
        """
        self.service_config = service_config or ServiceConfig()
        self.generator = generator or get_generator(self.service_config)

        logger.info(
            "Booting with config",
            environment=self.service_config.environment,
            project_id=self.service_config.project_id,
            http_timeout_seconds=self.service_config.http_timeout_seconds,
        )

        self.app = FastAPI(title="SCM Provider Generator")
        self._setup_routes()

    def _setup_routes(self) -> None:
        # Handlers are sync so the blocking provider calls run in the threadpool.

        @self.app.get("/")
        def root() -> dict[str, str]:
            return {"message": "SCM provider generator is running"}

        @self.app.post("/requeue-after")
        def requeue_after(request: GeneratorRequest) -> RequeueAfterResponse:
            interval = self.generator.get_requeue_after(request.generator)
            return RequeueAfterResponse(requeue_after_seconds=int(interval.total_seconds()))

        @self.app.post("/template")
        def template(request: GeneratorRequest) -> TemplateResponse:
            with CorrelationContext() as correlation_id:
                try:
                    return TemplateResponse(template=self.generator.get_template(request.generator))
                except GeneratorError as err:
                    raise ErrorHandler.handle_generator_error(err, "Template lookup", correlation_id)

        @self.app.post("/generate")
        def generate(request: GenerateRequest) -> GenerateResponse:
            """Generate the parameter bundles for one SCM provider generator."""
            with CorrelationContext() as correlation_id:
                namespace = request.parent.namespace if request.parent else None
                try:
                    parameters = self.generator.generate_params(request.generator, request.parent)
                except GeneratorError as err:
                    raise ErrorHandler.handle_generator_error(err, "Generation", correlation_id, namespace=namespace)
                except Exception as err:  # noqa: BLE001
                    raise ErrorHandler.handle_unexpected_error(err, "generation", correlation_id, namespace=namespace)

                logger.info("Generation completed", namespace=namespace, parameter_count=len(parameters))
                return GenerateResponse(parameters=parameters, correlation_id=correlation_id)


def get_app() -> FastAPI:
    """Return a fully configured FastAPI application."""
    configure_structlog()
    return SCMGeneratorAPI().app


__all__ = ["SCMGeneratorAPI", "get_app"]
