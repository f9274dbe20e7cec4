"""Workflow proxy and upload result models."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class WorkflowResponse(BaseModel):
    """Response relayed from the external workflow service."""

    status_code: int
    data: dict[str, Any] | list[Any] = Field(default_factory=dict)


class UploadResult(BaseModel):
    """Outcome of forwarding an inspection export for ingestion."""

    filename: str
    company_detected: Optional[str] = None
    detected_by: Optional[Literal["hint", "fingerprint"]] = None
    workflow: WorkflowResponse


class AuthenticatedUser(BaseModel):
    """Signed-in user resolved from a bearer token."""

    id: str
    email: Optional[str] = None
