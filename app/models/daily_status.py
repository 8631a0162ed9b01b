"""Daily status model."""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Numeric, Index
from sqlalchemy.orm import relationship
from app.core.database import Base

DAILY_STATUSES = ("healthy", "issues", "down")


class DailyStatus(Base):
    """Health classification of an environment for one calendar day."""

    __tablename__ = "daily_status"

    id = Column(Integer, primary_key=True, index=True)
    environment_id = Column(Integer, ForeignKey("environments.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)  # naive UTC
    status = Column(String, nullable=False)  # healthy, issues, down
    uptime_percentage = Column(Numeric(5, 2), nullable=False)
    has_incident = Column(Boolean, default=False, nullable=False)
    incident_count = Column(Integer, default=0, nullable=False)
    recovery_time = Column(Integer, nullable=True)  # minutes, None without an incident

    environment = relationship("Environment", back_populates="daily_statuses")

    __table_args__ = (
        Index("ix_daily_status_environment_date", "environment_id", "date"),
    )
