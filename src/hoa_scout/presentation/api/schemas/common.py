"""Schemas used by more than one router."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every error raised through the exception handlers."""

    detail: str = Field(..., description="Message safe to show to users")
    code: str | None = Field(None, description="Value of ErrorCode, if any")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "HOA not found", "code": "HOA_NOT_FOUND"},
        },
    )


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'healthy' while serving")
    version: str = Field(..., description="API version")
