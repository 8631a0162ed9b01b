"""Metric and daily status schemas."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

from app.core.timeutils import to_storage_time, utcnow

DailyStatusValue = Literal["healthy", "issues", "down"]


class MetricBase(BaseModel):
    """Base metric schema."""

    environment_id: int
    uptime: float = Field(..., ge=0, le=100)
    mttr: int = Field(..., ge=0)
    mtbf: int = Field(..., ge=0)
    resource_utilization: float = Field(..., ge=0, le=100)
    occupancy: float = Field(..., ge=0, le=100)


class MetricCreate(MetricBase):
    """Schema for recording a metric. Date defaults to now."""

    date: datetime = Field(default_factory=utcnow)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_storage_time(value)


class MetricInDB(MetricBase):
    """Schema for metric from database."""

    id: int
    date: datetime

    model_config = ConfigDict(from_attributes=True)


class DailyStatusBase(BaseModel):
    """Base daily status schema."""

    environment_id: int
    status: DailyStatusValue
    uptime_percentage: float = Field(..., ge=0, le=100)
    has_incident: bool = False
    incident_count: int = Field(default=0, ge=0)
    recovery_time: Optional[int] = Field(default=None, ge=0)


class DailyStatusCreate(DailyStatusBase):
    """Schema for recording a daily status. Date defaults to now."""

    date: datetime = Field(default_factory=utcnow)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_storage_time(value)


class DailyStatusInDB(DailyStatusBase):
    """Schema for daily status from database."""

    id: int
    date: datetime

    model_config = ConfigDict(from_attributes=True)
