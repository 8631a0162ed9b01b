"""Incident endpoints."""
import logging
from datetime import datetime
from typing import List, Optional, Literal
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.timeutils import to_storage_time
from app.schemas.incident import IncidentCreate, IncidentInDB
from app.services.incident_service import incident_service, IncidentAlreadyResolvedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/incidents", tags=["incidents"])


@router.get("", response_model=List[IncidentInDB])
async def list_incidents(
    environment_id: Optional[int] = Query(default=None),
    status: Optional[Literal["open", "resolved"]] = Query(default=None),
    start_date: Optional[datetime] = Query(default=None, description="Earliest incident start"),
    end_date: Optional[datetime] = Query(default=None, description="Latest incident start"),
    db: AsyncSession = Depends(get_db),
):
    """List incidents, most recent first."""
    try:
        return await incident_service.list_incidents(
            db, environment_id, status, to_storage_time(start_date), to_storage_time(end_date)
        )
    except Exception as e:
        logger.error(f"Failed to fetch incidents: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch incidents: {str(e)}")


@router.post("", response_model=IncidentInDB, status_code=201)
async def create_incident(
    incident: IncidentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Open an incident on an environment."""
    try:
        return await incident_service.create_incident(db, incident)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{incident_id}/resolve", response_model=IncidentInDB)
async def resolve_incident(
    incident_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Resolve an incident now.

    The recovery time is the number of minutes since the incident started.

    Args:
        incident_id: Incident ID
        db: Database session

    Returns:
        Resolved incident
    """
    try:
        return await incident_service.resolve_incident(db, incident_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IncidentAlreadyResolvedError as e:
        raise HTTPException(status_code=400, detail=str(e))
