"""
Pydantic models for fitplan API requests and responses.
This module defines the request and response schemas used by the plan endpoints.
"""

from typing import List

from pydantic import (
    BaseModel,
    Field,
)


# ---------------------------------------------------------------------------
# Pydantic request / response schema
# ---------------------------------------------------------------------------
class PlanRequest(BaseModel):
    """Request to generate a new weekly plan."""

    goal: str = Field(..., description="Free-text training goal")
    days: int = Field(..., description="Maximum training days per week")


class EditRequest(BaseModel):
    """Request to change an existing plan held by the client."""

    csv: str = Field(..., description="Current plan, verbatim")
    instructions: str = Field(..., description="Free-text description of the changes")


class PlanResponse(BaseModel):
    """API response returned by both plan endpoints."""

    csv: str = Field(..., description="Raw agent output, including any code fence")
    log: List[str] = Field(default_factory=list, description="Request/response transcript")


class ErrorResponse(BaseModel):
    """Body of 4xx/5xx responses raised by the plan endpoints."""

    detail: str
    errors: List[dict] | None = None
