"""Incident model."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base

INCIDENT_STATUSES = ("open", "resolved")


class Incident(Base):
    """An outage or degradation of an environment."""

    __tablename__ = "incidents"

    id = Column(Integer, primary_key=True, index=True)
    environment_id = Column(Integer, ForeignKey("environments.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)  # naive UTC
    end_time = Column(DateTime, nullable=True)
    description = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="open")  # open, resolved
    recovery_time = Column(Integer, nullable=True)  # minutes, set on resolve
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    environment = relationship("Environment", back_populates="incidents")
