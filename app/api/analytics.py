"""Analytics endpoints."""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.timeutils import to_storage_time
from app.schemas.analytics import HealthAnalytics, GreenDaysAnalytics
from app.services.analytics_service import analytics_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/environment-health", response_model=HealthAnalytics)
async def get_environment_health_analytics(
    environment_id: Optional[int] = Query(default=None, description="Environment ID (all if omitted)"),
    start_date: Optional[datetime] = Query(default=None, description="Inclusive start of the window"),
    end_date: Optional[datetime] = Query(default=None, description="Inclusive end of the window"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get average uptime, MTTR, MTBF, resource utilization and occupancy.

    Every average is zero when no metric falls in the window.

    Args:
        environment_id: Environment ID (all environments if omitted)
        start_date: Window start (unbounded if omitted)
        end_date: Window end (unbounded if omitted)
        db: Database session

    Returns:
        Health analytics summary
    """
    try:
        return await analytics_service.get_environment_health_analytics(
            db, environment_id, to_storage_time(start_date), to_storage_time(end_date)
        )
    except Exception as e:
        logger.error(f"Failed to compute health analytics: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch environment health analytics: {str(e)}",
        )


@router.get("/green-days", response_model=GreenDaysAnalytics)
async def get_green_days_analytics(
    environment_id: Optional[int] = Query(default=None, description="Environment ID (all if omitted)"),
    start_date: Optional[datetime] = Query(default=None, description="Inclusive start of the window"),
    end_date: Optional[datetime] = Query(default=None, description="Inclusive end of the window"),
    db: AsyncSession = Depends(get_db),
):
    """Get healthy / issues / down day counts and the healthy-day percentage."""
    try:
        return await analytics_service.get_green_days_analytics(
            db, environment_id, to_storage_time(start_date), to_storage_time(end_date)
        )
    except Exception as e:
        logger.error(f"Failed to compute green-days analytics: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch green days analytics: {str(e)}",
        )
