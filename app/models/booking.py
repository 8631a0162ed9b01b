"""Booking model."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base

BOOKING_STATUSES = ("scheduled", "active", "completed", "cancelled")


class Booking(Base):
    """A reservation of an environment by a team for a closed time interval."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    environment_id = Column(Integer, ForeignKey("environments.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    start_date = Column(DateTime, nullable=False)  # naive UTC
    end_date = Column(DateTime, nullable=False)    # naive UTC, inclusive
    purpose = Column(Text, nullable=True)
    configuration = Column(String, nullable=False)
    status = Column(String, nullable=False, default="scheduled")  # scheduled, active, completed, cancelled
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    environment = relationship("Environment", back_populates="bookings")
    team = relationship("Team", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    __table_args__ = (
        Index("ix_bookings_environment_status", "environment_id", "status"),
        Index("ix_bookings_environment_start", "environment_id", "start_date"),
    )
