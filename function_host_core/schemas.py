"""Pydantic schemas for API responses."""
from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Exception type, e.g. FunctionNotFoundError")
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    functions_path: str
