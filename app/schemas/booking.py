"""Booking schemas."""
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import datetime

from app.core.timeutils import to_storage_time
from app.schemas.environment import EnvironmentInDB
from app.schemas.team import TeamInDB

BookingStatus = Literal["scheduled", "active", "completed", "cancelled"]


class BookingCreate(BaseModel):
    """Schema for requesting a new booking. New bookings start as scheduled."""

    environment_id: int
    team_id: int
    user_id: int
    start_date: datetime
    end_date: datetime
    configuration: str
    purpose: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return to_storage_time(value)

    @model_validator(mode="after")
    def check_interval(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class BookingUpdate(BaseModel):
    """Schema for updating a booking. The interval itself is not editable."""

    status: Optional[BookingStatus] = None
    configuration: Optional[str] = None
    purpose: Optional[str] = None

    @field_validator("status", "configuration")
    @classmethod
    def reject_null(cls, value):
        # Omit the field to leave it unchanged; these columns are NOT NULL
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class BookingInDB(BaseModel):
    """Schema for booking from database."""

    id: int
    environment_id: int
    team_id: int
    user_id: int
    start_date: datetime
    end_date: datetime
    configuration: str
    purpose: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BookingDetail(BookingInDB):
    """Booking with its team and environment."""

    team: TeamInDB
    environment: EnvironmentInDB


class BookingConflictResponse(BaseModel):
    """Result of a conflict check for a proposed interval."""

    environment_id: int
    start_date: datetime
    end_date: datetime
    has_conflicts: bool
    conflicts: List[BookingInDB]
