"""Booking service for reserving test environments."""
import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models.booking import Booking
from app.models.team import Team
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingInDB, BookingUpdate
from app.services.conflicts import find_conflicts
from app.services.environment_service import environment_service

logger = logging.getLogger(__name__)


class BookingConflictError(Exception):
    """A requested interval overlaps existing bookings on the same environment."""

    def __init__(self, conflicts: List[BookingInDB]):
        self.conflicts = conflicts
        super().__init__(f"Booking overlaps {len(conflicts)} existing booking(s)")


class BookingService:
    """Service for managing bookings."""

    def __init__(self):
        """Initialize the service."""
        # Serializes check-and-insert per environment within this process.
        # Across processes the environment row lock taken in the same
        # transaction does the same job (PostgreSQL only).
        self._locks: Dict[int, asyncio.Lock] = {}

    def _environment_lock(self, environment_id: int) -> asyncio.Lock:
        return self._locks.setdefault(environment_id, asyncio.Lock())

    @property
    def blocking_statuses(self) -> List[str]:
        return list(settings.BLOCKING_BOOKING_STATUSES)

    async def list_bookings(
        self,
        db: AsyncSession,
        environment_id: Optional[int] = None,
        team_id: Optional[int] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Booking]:
        """
        List bookings with their team and environment, latest start first.

        With both bounds, returns bookings overlapping the window. With only
        start_date, bookings starting on or after it. With only end_date,
        bookings ending on or before it.

        Args:
            db: Database session
            environment_id: Filter by environment
            team_id: Filter by team
            status: Filter by status
            start_date: Window start
            end_date: Window end

        Returns:
            List of bookings
        """
        conditions = []
        if environment_id is not None:
            conditions.append(Booking.environment_id == environment_id)
        if team_id is not None:
            conditions.append(Booking.team_id == team_id)
        if status is not None:
            conditions.append(Booking.status == status)

        if start_date is not None and end_date is not None:
            conditions.append(
                and_(Booking.start_date <= end_date, Booking.end_date >= start_date)
            )
        elif start_date is not None:
            conditions.append(Booking.start_date >= start_date)
        elif end_date is not None:
            conditions.append(Booking.end_date <= end_date)

        query = select(Booking).options(
            selectinload(Booking.team),
            selectinload(Booking.environment),
        )
        if conditions:
            query = query.where(and_(*conditions))

        result = await db.execute(query.order_by(Booking.start_date.desc()))
        return list(result.scalars().all())

    async def get_booking(self, db: AsyncSession, booking_id: int) -> Optional[Booking]:
        """Get a booking with its team and environment."""
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.team), selectinload(Booking.environment))
            .where(Booking.id == booking_id)
        )
        return result.scalar_one_or_none()

    async def check_booking_conflicts(
        self,
        db: AsyncSession,
        environment_id: int,
        start_date: datetime,
        end_date: datetime,
        exclude_booking_id: Optional[int] = None,
    ) -> List[Booking]:
        """
        Find bookings that would collide with a proposed interval.

        Args:
            db: Database session
            environment_id: Environment ID
            start_date: Proposed start (caller guarantees start < end)
            end_date: Proposed end
            exclude_booking_id: Booking to leave out of the comparison

        Returns:
            Conflicting bookings; empty if the interval is free
        """
        blocking = self.blocking_statuses
        result = await db.execute(
            select(Booking).where(
                and_(
                    Booking.environment_id == environment_id,
                    Booking.status.in_(blocking),
                )
            )
        )
        candidates = result.scalars().all()

        return find_conflicts(
            start_date,
            end_date,
            candidates,
            blocking_statuses=blocking,
            exclude_booking_id=exclude_booking_id,
        )

    async def _require(self, db: AsyncSession, model, row_id: int, label: str):
        row = await db.get(model, row_id)
        if row is None:
            raise ValueError(f"{label} {row_id} not found")
        return row

    async def _raise_if_conflicting(
        self,
        db: AsyncSession,
        environment_id: int,
        start_date: datetime,
        end_date: datetime,
        exclude_booking_id: Optional[int] = None,
    ):
        conflicts = await self.check_booking_conflicts(
            db, environment_id, start_date, end_date, exclude_booking_id
        )
        if conflicts:
            logger.warning(
                f"Booking conflict on environment {environment_id} for "
                f"{start_date} - {end_date}: bookings {[b.id for b in conflicts]}"
            )
            # Snapshot before the rollback expires the rows
            raise BookingConflictError([BookingInDB.model_validate(b) for b in conflicts])

    async def create_booking(self, db: AsyncSession, data: BookingCreate) -> Booking:
        """
        Create a scheduled booking if its interval is free.

        The conflict check and the insert run in one transaction while
        holding the environment lock, so two overlapping requests cannot
        both succeed.

        On rejection the session is rolled back, which expires every ORM
        instance the caller holds in it. Read ids before calling if they are
        needed afterwards.

        Args:
            db: Database session
            data: Validated booking request

        Returns:
            The created booking

        Raises:
            ValueError: If the environment, team or user does not exist
            BookingConflictError: If the interval overlaps a blocking booking
        """
        # Only environments that exist get a lock
        await environment_service.require_environment(db, data.environment_id)

        async with self._environment_lock(data.environment_id):
            try:
                await environment_service.require_environment(
                    db, data.environment_id, for_update=True
                )
                await self._require(db, Team, data.team_id, "Team")
                await self._require(db, User, data.user_id, "User")

                await self._raise_if_conflicting(
                    db, data.environment_id, data.start_date, data.end_date
                )

                booking = Booking(**data.model_dump(), status="scheduled")
                db.add(booking)
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        await db.refresh(booking)
        logger.info(
            f"Created booking {booking.id} on environment {booking.environment_id} "
            f"for team {booking.team_id} ({booking.start_date} - {booking.end_date})"
        )
        return booking

    async def update_booking(
        self, db: AsyncSession, booking_id: int, data: BookingUpdate
    ) -> Booking:
        """
        Update status, configuration or purpose of a booking.

        Moving a booking back into a blocking status re-runs the conflict
        check against every other booking on the environment.

        Raises:
            ValueError: If the booking does not exist
            BookingConflictError: If reactivation would overlap another booking
        """
        booking = await self._require(db, Booking, booking_id, "Booking")
        update_data = data.model_dump(exclude_unset=True)

        new_status = update_data.get("status")
        blocking = self.blocking_statuses
        reactivating = new_status in blocking and booking.status not in blocking

        if reactivating:
            async with self._environment_lock(booking.environment_id):
                try:
                    await environment_service.require_environment(
                        db, booking.environment_id, for_update=True
                    )
                    await self._raise_if_conflicting(
                        db,
                        booking.environment_id,
                        booking.start_date,
                        booking.end_date,
                        exclude_booking_id=booking.id,
                    )
                    for field, value in update_data.items():
                        setattr(booking, field, value)
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise
        else:
            try:
                for field, value in update_data.items():
                    setattr(booking, field, value)
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        await db.refresh(booking)
        logger.info(f"Updated booking {booking.id}: {update_data}")
        return booking

    async def delete_booking(self, db: AsyncSession, booking_id: int):
        """
        Delete a booking.

        Raises:
            ValueError: If the booking does not exist
        """
        booking = await self._require(db, Booking, booking_id, "Booking")
        await db.delete(booking)
        await db.commit()
        logger.info(f"Deleted booking {booking_id}")


# Singleton instance
booking_service = BookingService()
