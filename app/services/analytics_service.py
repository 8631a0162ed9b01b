"""Analytics service for environment health dashboards."""
import logging
import math
from collections import Counter
from datetime import datetime
from typing import Iterable, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.daily_status import DailyStatus
from app.models.metric import Metric
from app.schemas.analytics import GreenDaysAnalytics, HealthAnalytics
from app.services.metrics_service import metrics_service

logger = logging.getLogger(__name__)


def _mean(values: Iterable[float], count: int) -> float:
    # fsum is exact, so the result is the same for any ordering of values
    return math.fsum(values) / count


def summarize_health(records: Sequence[Metric], precision: int = 2) -> HealthAnalytics:
    """
    Average each health field over a set of metric records.

    Args:
        records: Metric records, already filtered by environment and window
        precision: Decimal places to round each average to

    Returns:
        HealthAnalytics; every field is zero when records is empty
    """
    count = len(records)
    if count == 0:
        return HealthAnalytics()

    return HealthAnalytics(
        average_uptime=round(_mean((float(r.uptime) for r in records), count), precision),
        average_mttr=round(_mean((float(r.mttr) for r in records), count), precision),
        average_mtbf=round(_mean((float(r.mtbf) for r in records), count), precision),
        average_resource_utilization=round(
            _mean((float(r.resource_utilization) for r in records), count), precision
        ),
        average_occupancy=round(_mean((float(r.occupancy) for r in records), count), precision),
    )


def summarize_green_days(records: Sequence[DailyStatus], precision: int = 2) -> GreenDaysAnalytics:
    """
    Count days by status and the share of healthy days.

    Args:
        records: Daily status records, already filtered by environment and window
        precision: Decimal places to round the percentage to

    Returns:
        GreenDaysAnalytics; every field is zero when records is empty
    """
    total_days = len(records)
    if total_days == 0:
        return GreenDaysAnalytics()

    counts = Counter(r.status for r in records)
    green_days = counts["healthy"]

    return GreenDaysAnalytics(
        total_days=total_days,
        green_days=green_days,
        yellow_days=counts["issues"],
        red_days=counts["down"],
        green_days_percentage=round(green_days / total_days * 100, precision),
    )


class AnalyticsService:
    """Service for dashboard analytics."""

    async def get_environment_health_analytics(
        self,
        db: AsyncSession,
        environment_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> HealthAnalytics:
        """
        Summarize metric records for an environment and window.

        Args:
            db: Database session
            environment_id: Environment to restrict to; all environments if None
            start_date: Inclusive lower bound on record date; unbounded if None
            end_date: Inclusive upper bound on record date; unbounded if None

        Returns:
            Health averages
        """
        records = await metrics_service.get_metrics(db, environment_id, start_date, end_date)
        summary = summarize_health(records, settings.ANALYTICS_PRECISION)

        logger.debug(
            f"Health analytics over {len(records)} metric records "
            f"(environment={environment_id}, start={start_date}, end={end_date})"
        )
        return summary

    async def get_green_days_analytics(
        self,
        db: AsyncSession,
        environment_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> GreenDaysAnalytics:
        """Summarize daily status records for an environment and window."""
        records = await metrics_service.get_daily_status(db, environment_id, start_date, end_date)
        summary = summarize_green_days(records, settings.ANALYTICS_PRECISION)

        logger.debug(
            f"Green-days analytics over {len(records)} days "
            f"(environment={environment_id}, start={start_date}, end={end_date})"
        )
        return summary


# Singleton instance
analytics_service = AnalyticsService()
