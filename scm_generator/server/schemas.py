"""Request and response schemas for the API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel

from ..entities import ApplicationSetGenerator, ParameterBundle, ParentResource


class GeneratorRequest(BaseModel):
    """Schema for requeue/template requests."""

    generator: ApplicationSetGenerator


class GenerateRequest(BaseModel):
    """Schema for generate requests."""

    generator: Optional[ApplicationSetGenerator] = None
    parent: Optional[ParentResource] = None


class GenerateResponse(BaseModel):
    parameters: list[ParameterBundle]
    correlation_id: str


class RequeueAfterResponse(BaseModel):
    requeue_after_seconds: int


class TemplateResponse(BaseModel):
    template: dict[str, Any]
