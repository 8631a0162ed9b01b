"""Metric model."""
from sqlalchemy import Column, Integer, ForeignKey, DateTime, Numeric, Index
from sqlalchemy.orm import relationship
from app.core.database import Base


class Metric(Base):
    """A point-in-time health observation for an environment. Append-only."""

    __tablename__ = "metrics"

    id = Column(Integer, primary_key=True, index=True)
    environment_id = Column(Integer, ForeignKey("environments.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)  # naive UTC
    uptime = Column(Numeric(5, 2), nullable=False)  # percentage
    mttr = Column(Integer, nullable=False)  # mean time to recover (minutes)
    mtbf = Column(Integer, nullable=False)  # mean time between failures (minutes)
    resource_utilization = Column(Numeric(5, 2), nullable=False)  # percentage
    occupancy = Column(Numeric(5, 2), nullable=False)  # percentage

    environment = relationship("Environment", back_populates="metrics")

    __table_args__ = (
        Index("ix_metrics_environment_date", "environment_id", "date"),
    )
