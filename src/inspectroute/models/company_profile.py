"""Company profile models: stored export-format templates per inspection company."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class AppointmentType(StrEnum):
    NONE = "none"
    CALL_AHEAD = "call_ahead"
    DATE_ONLY = "date_only"
    DATETIME = "datetime"


class CompanyProfile(BaseModel):
    """A row of the company_profiles table."""

    id: Optional[str] = None
    code: str
    name: str
    default_duration_minutes: Optional[int] = None
    high_value_duration_minutes: Optional[int] = None
    appointment_type: Optional[AppointmentType] = None
    column_mappings: Optional[dict[str, str]] = None  # source header -> canonical field
    column_fingerprint: Optional[list[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_fingerprint(self) -> bool:
        """Only profiles with a non-empty fingerprint take part in matching."""
        return bool(self.column_fingerprint)


class CompanyProfileUpsert(BaseModel):
    """Parameters for creating or replacing a profile, keyed on code."""

    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    column_fingerprint: list[str] = Field(default_factory=list)
    column_mappings: dict[str, Optional[str]] = Field(default_factory=dict)
    default_duration_minutes: int = Field(default=30, gt=0)
    high_value_duration_minutes: int = Field(default=60, gt=0)
    appointment_type: AppointmentType = AppointmentType.NONE

    model_config = {"str_strip_whitespace": True}

    @field_validator("code")
    @classmethod
    def _uppercase_code(cls, value: str) -> str:
        return value.upper()

    @field_validator("column_mappings")
    @classmethod
    def _drop_null_mappings(cls, value: dict[str, Optional[str]]) -> dict[str, Optional[str]]:
        return {k: v for k, v in value.items() if v is not None}

    def to_row(self, updated_at: datetime) -> dict[str, Any]:
        """Row payload for the hosted store."""
        row = self.model_dump(mode="json")
        row["updated_at"] = updated_at.isoformat()
        return row
