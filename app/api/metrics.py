"""Metric and daily status endpoints."""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.timeutils import to_storage_time
from app.schemas.metric import (
    MetricCreate,
    MetricInDB,
    DailyStatusCreate,
    DailyStatusInDB,
)
from app.services.metrics_service import metrics_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_model=List[MetricInDB])
async def get_metrics(
    environment_id: Optional[int] = Query(default=None, description="Environment ID (all if omitted)"),
    start_date: Optional[datetime] = Query(default=None, description="Inclusive start of the window"),
    end_date: Optional[datetime] = Query(default=None, description="Inclusive end of the window"),
    db: AsyncSession = Depends(get_db),
):
    """Get metric records, newest first."""
    try:
        return await metrics_service.get_metrics(
            db, environment_id, to_storage_time(start_date), to_storage_time(end_date)
        )
    except Exception as e:
        logger.error(f"Failed to fetch metrics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch metrics: {str(e)}")


@router.get("/metrics/latest", response_model=List[MetricInDB])
async def get_latest_metrics(
    environment_id: Optional[int] = Query(default=None, description="Environment ID (all if omitted)"),
    db: AsyncSession = Depends(get_db),
):
    """Get the most recent metric record of each environment."""
    try:
        return await metrics_service.get_latest_metrics(db, environment_id)
    except Exception as e:
        logger.error(f"Failed to fetch latest metrics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch latest metrics: {str(e)}")


@router.post("/metrics", response_model=MetricInDB, status_code=201)
async def create_metric(
    metric: MetricCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a health metric observation for an environment."""
    try:
        return await metrics_service.create_metric(db, metric)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/daily-status", response_model=List[DailyStatusInDB])
async def get_daily_status(
    environment_id: Optional[int] = Query(default=None, description="Environment ID (all if omitted)"),
    start_date: Optional[datetime] = Query(default=None, description="Inclusive start of the window"),
    end_date: Optional[datetime] = Query(default=None, description="Inclusive end of the window"),
    db: AsyncSession = Depends(get_db),
):
    """Get daily status records, oldest first."""
    try:
        return await metrics_service.get_daily_status(
            db, environment_id, to_storage_time(start_date), to_storage_time(end_date)
        )
    except Exception as e:
        logger.error(f"Failed to fetch daily status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch daily status: {str(e)}")


@router.post("/daily-status", response_model=DailyStatusInDB, status_code=201)
async def create_daily_status(
    daily_status: DailyStatusCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record the health status of an environment for a day."""
    try:
        return await metrics_service.create_daily_status(db, daily_status)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
