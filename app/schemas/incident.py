"""Incident schemas."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

from app.core.timeutils import to_storage_time

IncidentStatus = Literal["open", "resolved"]


class IncidentCreate(BaseModel):
    """Schema for opening an incident."""

    environment_id: int
    start_time: datetime
    description: str = Field(..., min_length=3)

    @field_validator("start_time")
    @classmethod
    def normalize_start_time(cls, value: datetime) -> datetime:
        return to_storage_time(value)


class IncidentInDB(BaseModel):
    """Schema for incident from database."""

    id: int
    environment_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    description: str
    status: IncidentStatus
    recovery_time: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
