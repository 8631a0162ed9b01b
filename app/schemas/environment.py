"""Environment schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class EnvironmentBase(BaseModel):
    """Base environment schema."""

    name: str = Field(..., min_length=2)
    description: Optional[str] = None


class EnvironmentCreate(EnvironmentBase):
    """Schema for creating an environment."""

    pass


class EnvironmentInDB(EnvironmentBase):
    """Schema for environment from database."""

    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
