"""Environment model."""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Environment(Base):
    """Represents a shared test environment that can be booked and monitored."""

    __tablename__ = "environments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    bookings = relationship("Booking", back_populates="environment", cascade="all, delete-orphan")
    metrics = relationship("Metric", back_populates="environment", cascade="all, delete-orphan")
    daily_statuses = relationship("DailyStatus", back_populates="environment", cascade="all, delete-orphan")
    incidents = relationship("Incident", back_populates="environment", cascade="all, delete-orphan")
