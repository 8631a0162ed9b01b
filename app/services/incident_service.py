"""Incident tracking."""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timeutils import utcnow
from app.models.incident import Incident
from app.schemas.incident import IncidentCreate
from app.services.environment_service import environment_service

logger = logging.getLogger(__name__)


class IncidentAlreadyResolvedError(Exception):
    """Raised when resolving an incident that is already resolved."""


def recovery_minutes(start_time: datetime, end_time: datetime) -> int:
    """Minutes from start to end, rounded to the nearest minute."""
    return round((end_time - start_time).total_seconds() / 60)


class IncidentService:
    """Service for environment incidents."""

    async def list_incidents(
        self,
        db: AsyncSession,
        environment_id: Optional[int] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Incident]:
        """
        List incidents, most recent start first.

        Args:
            db: Database session
            environment_id: Filter by environment
            status: Filter by status (open, resolved)
            start_date: Inclusive lower bound on start_time
            end_date: Inclusive upper bound on start_time

        Returns:
            List of incidents
        """
        conditions = []
        if environment_id is not None:
            conditions.append(Incident.environment_id == environment_id)
        if status is not None:
            conditions.append(Incident.status == status)
        if start_date is not None:
            conditions.append(Incident.start_time >= start_date)
        if end_date is not None:
            conditions.append(Incident.start_time <= end_date)

        query = select(Incident)
        if conditions:
            query = query.where(and_(*conditions))

        result = await db.execute(query.order_by(Incident.start_time.desc()))
        return list(result.scalars().all())

    async def get_incident(self, db: AsyncSession, incident_id: int) -> Optional[Incident]:
        return await db.get(Incident, incident_id)

    async def create_incident(self, db: AsyncSession, data: IncidentCreate) -> Incident:
        """
        Open an incident.

        Raises:
            ValueError: If the environment does not exist
        """
        await environment_service.require_environment(db, data.environment_id)

        incident = Incident(**data.model_dump(), status="open")
        db.add(incident)
        await db.commit()
        await db.refresh(incident)

        logger.info(f"Opened incident {incident.id} on environment {incident.environment_id}")
        return incident

    async def resolve_incident(
        self,
        db: AsyncSession,
        incident_id: int,
        end_time: Optional[datetime] = None,
    ) -> Incident:
        """
        Resolve an open incident and record its recovery time.

        Args:
            db: Database session
            incident_id: Incident ID
            end_time: Resolution time (naive UTC); defaults to now

        Returns:
            The resolved incident

        Raises:
            ValueError: If the incident does not exist
            IncidentAlreadyResolvedError: If it was already resolved
        """
        incident = await self.get_incident(db, incident_id)
        if not incident:
            raise ValueError(f"Incident {incident_id} not found")

        if incident.status == "resolved":
            raise IncidentAlreadyResolvedError(f"Incident {incident_id} is already resolved")

        end_time = end_time or utcnow()
        incident.status = "resolved"
        incident.end_time = end_time
        incident.recovery_time = recovery_minutes(incident.start_time, end_time)

        await db.commit()
        await db.refresh(incident)

        logger.info(
            f"Resolved incident {incident.id} on environment {incident.environment_id} "
            f"after {incident.recovery_time} minutes"
        )
        return incident


# Singleton instance
incident_service = IncidentService()
