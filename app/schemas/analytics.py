"""Analytics schemas."""
from pydantic import BaseModel


class HealthAnalytics(BaseModel):
    """Averages over a set of metric records. All zero when there is no data."""

    average_uptime: float = 0.0
    average_mttr: float = 0.0
    average_mtbf: float = 0.0
    average_resource_utilization: float = 0.0
    average_occupancy: float = 0.0


class GreenDaysAnalytics(BaseModel):
    """Day counts by status. All zero when there is no data."""

    total_days: int = 0
    green_days: int = 0
    yellow_days: int = 0
    red_days: int = 0
    green_days_percentage: float = 0.0
