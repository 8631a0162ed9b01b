"""API schemas."""
from app.schemas.environment import (
    EnvironmentCreate,
    EnvironmentInDB,
)
from app.schemas.team import (
    TeamCreate,
    TeamInDB,
    UserCreate,
    UserInDB,
)
from app.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingInDB,
    BookingDetail,
    BookingConflictResponse,
)
from app.schemas.metric import (
    MetricCreate,
    MetricInDB,
    DailyStatusCreate,
    DailyStatusInDB,
)
from app.schemas.incident import (
    IncidentCreate,
    IncidentInDB,
)
from app.schemas.analytics import (
    HealthAnalytics,
    GreenDaysAnalytics,
)

__all__ = [
    "EnvironmentCreate",
    "EnvironmentInDB",
    "TeamCreate",
    "TeamInDB",
    "UserCreate",
    "UserInDB",
    "BookingCreate",
    "BookingUpdate",
    "BookingInDB",
    "BookingDetail",
    "BookingConflictResponse",
    "MetricCreate",
    "MetricInDB",
    "DailyStatusCreate",
    "DailyStatusInDB",
    "IncidentCreate",
    "IncidentInDB",
    "HealthAnalytics",
    "GreenDaysAnalytics",
]
