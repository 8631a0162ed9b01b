"""Team and user schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class TeamBase(BaseModel):
    """Base team schema."""

    name: str = Field(..., min_length=2)
    description: Optional[str] = None
    abbreviation: Optional[str] = Field(default=None, max_length=3)


class TeamCreate(TeamBase):
    """Schema for creating a team."""

    pass


class TeamInDB(TeamBase):
    """Schema for team from database."""

    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: str = Field(..., min_length=1)


class UserInDB(UserCreate):
    """Schema for user from database."""

    id: int

    model_config = ConfigDict(from_attributes=True)
