"""
Standard Response Models

HAL-FORMS response wrapper shared by all routers, plus the error body and API index
models published in the OpenAPI schema.
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from models.hateoas import HAL_FORMS_MEDIA_TYPE, CollectionRepresentation, Link, Representation


class HalFormsResponse(JSONResponse):
    media_type = HAL_FORMS_MEDIA_TYPE


def hal_response(
    representation: Representation | CollectionRepresentation, status_code: int = 200
) -> HalFormsResponse:
    return HalFormsResponse(status_code=status_code, content=representation.to_hal())


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error message")
    status_code: int = Field(description="HTTP status code")
    correlation_id: str = Field(description="Identifier to find the error in the logs")
    timestamp: str = Field(description="ISO-8601 time of the error")
    path: str = Field(description="Request path")
    details: dict[str, Any] | None = Field(default=None, description="Additional context")


class ErrorResponse(BaseModel):
    """Standard error body"""

    error: ErrorDetail

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "message": "Hall with resource ID '42' not found",
                    "status_code": 404,
                    "correlation_id": "uuid",
                    "timestamp": "2025-01-22T10:00:00",
                    "path": "/api/halls/42",
                    "details": {"resource_type": "Hall", "resource_id": "42"},
                }
            }
        }
    )


class ApiIndex(BaseModel):
    """Entry point of the API: links to every paged and full collection"""

    title: str = "Club Training API"
    version: str = "1.0.0"
    links: list[Link] = Field(default_factory=list)

    def to_hal(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "version": self.version,
            "_links": {link.rel: link.to_hal() for link in self.links},
        }
