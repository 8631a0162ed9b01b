"""Booking endpoints."""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.timeutils import to_storage_time
from app.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingInDB,
    BookingDetail,
    BookingConflictResponse,
    BookingStatus,
)
from app.services.booking_service import booking_service, BookingConflictError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _conflict_exception(error: BookingConflictError) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "message": "Booking conflict detected",
            "conflicts": [c.model_dump(mode="json") for c in error.conflicts],
        },
    )


@router.get("", response_model=List[BookingDetail])
async def list_bookings(
    environment_id: Optional[int] = Query(default=None),
    team_id: Optional[int] = Query(default=None),
    status: Optional[BookingStatus] = Query(default=None),
    start_date: Optional[datetime] = Query(default=None, description="Window start"),
    end_date: Optional[datetime] = Query(default=None, description="Window end"),
    db: AsyncSession = Depends(get_db),
):
    """
    List bookings with their team and environment.

    When both start_date and end_date are given, returns every booking that
    overlaps the window.
    """
    try:
        return await booking_service.list_bookings(
            db,
            environment_id=environment_id,
            team_id=team_id,
            status=status,
            start_date=to_storage_time(start_date),
            end_date=to_storage_time(end_date),
        )
    except Exception as e:
        logger.error(f"Failed to fetch bookings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch bookings: {str(e)}")


@router.get("/conflicts", response_model=BookingConflictResponse)
async def check_booking_conflicts(
    environment_id: int = Query(..., description="Environment to check"),
    start_date: datetime = Query(..., description="Proposed start"),
    end_date: datetime = Query(..., description="Proposed end"),
    db: AsyncSession = Depends(get_db),
):
    """
    Check whether a proposed interval is free on an environment.

    Args:
        environment_id: Environment ID
        start_date: Proposed start
        end_date: Proposed end (must be after start_date)
        db: Database session

    Returns:
        The conflicting bookings, if any
    """
    start = to_storage_time(start_date)
    end = to_storage_time(end_date)

    if end <= start:
        raise HTTPException(status_code=400, detail="end_date must be after start_date")

    try:
        conflicts = await booking_service.check_booking_conflicts(db, environment_id, start, end)
    except Exception as e:
        logger.error(f"Failed to check booking conflicts: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to check booking conflicts: {str(e)}")

    return BookingConflictResponse(
        environment_id=environment_id,
        start_date=start,
        end_date=end,
        has_conflicts=bool(conflicts),
        conflicts=[BookingInDB.model_validate(b) for b in conflicts],
    )


@router.get("/{booking_id}", response_model=BookingDetail)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a booking by ID."""
    booking = await booking_service.get_booking(db, booking_id)

    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    return booking


@router.post("", response_model=BookingInDB, status_code=201)
async def create_booking(
    booking: BookingCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Reserve an environment for a time interval.

    Rejected with 409 when the interval overlaps a scheduled booking on the
    same environment; the response lists the conflicting bookings.

    Args:
        booking: Booking request
        db: Database session

    Returns:
        Created booking
    """
    try:
        return await booking_service.create_booking(db, booking)
    except BookingConflictError as e:
        raise _conflict_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create booking: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create booking: {str(e)}")


@router.patch("/{booking_id}", response_model=BookingInDB)
async def update_booking(
    booking_id: int,
    booking_update: BookingUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a booking's status, configuration or purpose.

    Args:
        booking_id: Booking ID
        booking_update: Fields to update
        db: Database session

    Returns:
        Updated booking
    """
    try:
        return await booking_service.update_booking(db, booking_id, booking_update)
    except BookingConflictError as e:
        raise _conflict_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update booking: {str(e)}")


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a booking."""
    try:
        await booking_service.delete_booking(db, booking_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
