# capital_marketplace/utils/datetime_utils.py
"""
Strict UTC datetime handling to prevent timezone drift.
Datetimes are stored naive (already UTC) and rendered as ISO strings with 'Z'.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any


def get_utc_now() -> datetime:
    """
    Get current UTC time as naive datetime.
    Use this instead of datetime.utcnow().
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def days_ago(days: int) -> datetime:
    """Naive UTC datetime `days` days before now."""
    return get_utc_now() - timedelta(days=days)


def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to ISO string with UTC timezone.

    Args:
        dt: datetime object (assumed UTC if naive)

    Returns:
        ISO format string with 'Z' suffix (UTC)
    """
    if dt is None:
        return None

    # If naive, assume it's UTC; if aware, convert to UTC
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)

    return dt.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'


def serialize_datetime_fields(obj: Any) -> Any:
    """
    Recursively convert all datetime objects in a dict/list to ISO strings with 'Z' suffix.

    Example:
        serialize_datetime_fields({
            "created_at": datetime(2026, 1, 21, 4, 28),
            "history": [{"date": datetime(2026, 2, 4, 8, 45)}]
        })
        # {"created_at": "2026-01-21T04:28:00.000Z", "history": [{"date": "2026-02-04T08:45:00.000Z"}]}
    """
    if isinstance(obj, dict):
        return {key: serialize_datetime_fields(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [serialize_datetime_fields(item) for item in obj]
    elif isinstance(obj, datetime):
        return to_iso_string(obj)
    else:
        return obj
