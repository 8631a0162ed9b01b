"""Metric and daily status storage."""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.daily_status import DailyStatus
from app.models.metric import Metric
from app.schemas.metric import DailyStatusCreate, MetricCreate
from app.services.environment_service import environment_service

logger = logging.getLogger(__name__)


def _window_conditions(column, environment_column, environment_id, start_date, end_date):
    """Build filters for an optional environment and an optional inclusive window."""
    conditions = []
    if environment_id is not None:
        conditions.append(environment_column == environment_id)
    if start_date is not None:
        conditions.append(column >= start_date)
    if end_date is not None:
        conditions.append(column <= end_date)
    return conditions


class MetricsService:
    """Service for environment health records."""

    async def get_metrics(
        self,
        db: AsyncSession,
        environment_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Metric]:
        """
        Get metric records, newest first.

        Args:
            db: Database session
            environment_id: Environment to restrict to; all environments if None
            start_date: Inclusive lower bound on record date; unbounded if None
            end_date: Inclusive upper bound on record date; unbounded if None

        Returns:
            Matching metric records
        """
        conditions = _window_conditions(
            Metric.date, Metric.environment_id, environment_id, start_date, end_date
        )
        query = select(Metric)
        if conditions:
            query = query.where(and_(*conditions))

        result = await db.execute(query.order_by(Metric.date.desc()))
        return list(result.scalars().all())

    async def get_latest_metrics(
        self, db: AsyncSession, environment_id: Optional[int] = None
    ) -> List[Metric]:
        """
        Get the most recent metric record per environment.

        Args:
            db: Database session
            environment_id: Restrict to one environment if given

        Returns:
            At most one record per environment
        """
        if environment_id is not None:
            result = await db.execute(
                select(Metric)
                .where(Metric.environment_id == environment_id)
                .order_by(Metric.date.desc(), Metric.id.desc())
                .limit(1)
            )
            return list(result.scalars().all())

        subquery = (
            select(
                Metric.environment_id,
                func.max(Metric.date).label("max_date"),
            )
            .group_by(Metric.environment_id)
            .subquery()
        )

        result = await db.execute(
            select(Metric)
            .join(
                subquery,
                and_(
                    Metric.environment_id == subquery.c.environment_id,
                    Metric.date == subquery.c.max_date,
                ),
            )
            .order_by(Metric.environment_id, Metric.id.desc())
        )

        # Two records can share the latest timestamp; keep the newest row
        latest = {}
        for metric in result.scalars().all():
            latest.setdefault(metric.environment_id, metric)
        return list(latest.values())

    async def create_metric(self, db: AsyncSession, data: MetricCreate) -> Metric:
        """
        Record a metric observation.

        Raises:
            ValueError: If the environment does not exist
        """
        await environment_service.require_environment(db, data.environment_id)

        metric = Metric(**data.model_dump())
        db.add(metric)
        await db.commit()
        await db.refresh(metric)

        logger.info(f"Recorded metric {metric.id} for environment {metric.environment_id}")
        return metric

    async def get_daily_status(
        self,
        db: AsyncSession,
        environment_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[DailyStatus]:
        """Get daily status records, oldest first. Filters as in get_metrics."""
        conditions = _window_conditions(
            DailyStatus.date, DailyStatus.environment_id, environment_id, start_date, end_date
        )
        query = select(DailyStatus)
        if conditions:
            query = query.where(and_(*conditions))

        result = await db.execute(query.order_by(DailyStatus.date.asc()))
        return list(result.scalars().all())

    async def create_daily_status(self, db: AsyncSession, data: DailyStatusCreate) -> DailyStatus:
        """
        Record the status of an environment for a day.

        Raises:
            ValueError: If the environment does not exist
        """
        await environment_service.require_environment(db, data.environment_id)

        daily_status = DailyStatus(**data.model_dump())
        db.add(daily_status)
        await db.commit()
        await db.refresh(daily_status)

        logger.info(
            f"Recorded daily status '{daily_status.status}' for environment "
            f"{daily_status.environment_id} on {daily_status.date.date()}"
        )
        return daily_status


# Singleton instance
metrics_service = MetricsService()
