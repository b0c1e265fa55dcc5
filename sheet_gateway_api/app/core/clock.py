"""
Local calendar helpers.

Contact dates and call timestamps are recorded in a fixed UTC offset
(KST by default) regardless of the timezone of the host running the
gateway.
"""

from datetime import datetime, timedelta, timezone

from .config import settings

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def local_now(offset_hours: int | None = None) -> datetime:
    """Return the current time in the configured fixed offset."""
    hours = settings.local_utc_offset_hours if offset_hours is None else offset_hours
    return datetime.now(timezone(timedelta(hours=hours)))


def format_datetime(moment: datetime) -> str:
    return moment.strftime(DATETIME_FORMAT)


def format_date(moment: datetime) -> str:
    return moment.strftime(DATE_FORMAT)
