"""Common schemas shared across API endpoints.

Every response body is wrapped in the same envelope:
``{"success": bool, "message": str, "data": ...}``. JSON keys are camelCase;
request bodies also accept the snake_case field names.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serializing to camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Standard success envelope."""

    success: bool = True
    message: str
    data: T | None = None


class FieldError(CamelModel):
    field: str = Field(..., description="Dotted path of the offending field")
    message: str


class ErrorResponse(CamelModel):
    """Standard error envelope."""

    success: bool = False
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    errors: list[FieldError] | None = Field(
        None,
        description="Per-field problems (validation errors only)",
    )
    error: str | None = Field(None, description="Exception text (development only)")
    stack: str | None = Field(None, description="Traceback (development only)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Invalid or expired session",
                "code": "INVALID_SESSION",
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    pages: int
