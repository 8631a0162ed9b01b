"""Database models."""
from app.models.environment import Environment
from app.models.team import Team
from app.models.user import User
from app.models.booking import Booking
from app.models.metric import Metric
from app.models.daily_status import DailyStatus
from app.models.incident import Incident

__all__ = ["Environment", "Team", "User", "Booking", "Metric", "DailyStatus", "Incident"]
