"""HTTP API request / response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str


class OsqueryHealthResponse(BaseModel):
    available: bool
    version: Optional[str] = None
    error: Optional[str] = None


class ToolInfo(BaseModel):
    name: str
    description: str
    parameter: Optional[str] = None


class ToolCallRequest(BaseModel):
    argument: Optional[str] = None


class ToolCallResponse(BaseModel):
    """Result of one tool call.

    ``is_error`` flags a result that is itself a single query failure
    (``Error: ...``).  Composite reports always return normally and carry
    failures inline per section, so for them it stays false.
    """

    tool: str
    result: str
    is_error: bool = False


class ErrorResponse(BaseModel):
    detail: str
