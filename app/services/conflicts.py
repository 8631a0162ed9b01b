"""Booking conflict detection.

Bookings occupy closed intervals: a booking from Monday to Friday holds both
Monday and Friday. Two bookings on the same environment conflict when their
intervals share at least one instant.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from app.models.booking import Booking

DEFAULT_BLOCKING_STATUSES = ("scheduled",)


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """Return True if closed intervals [a_start, a_end] and [b_start, b_end] intersect."""
    return a_start <= b_end and a_end >= b_start


def find_conflicts(
    proposed_start: datetime,
    proposed_end: datetime,
    existing: Iterable[Booking],
    blocking_statuses: Sequence[str] = DEFAULT_BLOCKING_STATUSES,
    exclude_booking_id: Optional[int] = None,
) -> List[Booking]:
    """
    Find existing bookings that a proposed interval would collide with.

    A proposed interval that starts inside a booking, ends inside one, or
    surrounds one all satisfy the same overlap test.

    Args:
        proposed_start: Start of the requested interval
        proposed_end: End of the requested interval (after proposed_start)
        existing: Bookings on the same environment
        blocking_statuses: Statuses whose bookings block new reservations
        exclude_booking_id: Booking to ignore, so a booking never conflicts with itself

    Returns:
        Conflicting bookings, in input order. Empty means the interval is free.
    """
    return [
        booking
        for booking in existing
        if booking.status in blocking_statuses
        and (exclude_booking_id is None or booking.id != exclude_booking_id)
        and intervals_overlap(proposed_start, proposed_end, booking.start_date, booking.end_date)
    ]
