"""Timestamp normalization.

Timestamps are stored as naive UTC. Client input is normalized here before
it reaches a query or an insert.
"""
from datetime import datetime
from typing import Optional

import pytz

from app.core.config import settings


def dashboard_timezone():
    """Timezone used to read naive client timestamps."""
    return pytz.timezone(settings.TIMEZONE or "UTC")


def to_storage_time(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a client timestamp to naive UTC.

    Aware values are converted to UTC. Naive values are taken to be local to
    the dashboard timezone.

    Args:
        value: Timestamp from a request, or None

    Returns:
        Naive UTC timestamp, or None
    """
    if value is None:
        return None

    if value.tzinfo is None:
        value = dashboard_timezone().localize(value)

    return value.astimezone(pytz.UTC).replace(tzinfo=None)


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(pytz.UTC).replace(tzinfo=None)
