from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    code: str = Field(description="Stable machine-readable error code", examples=["not_found"])
    message: str = Field(description="Human-readable message", examples=["Resource not found"])
    details: Any | None = None


class ErrorResponse(BaseModel):
    error: ErrorBody
