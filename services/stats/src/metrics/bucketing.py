from datetime import datetime, timezone
from typing import Dict


def to_utc(at: datetime) -> datetime:
    """Naive datetimes are taken to already be UTC."""
    if at.tzinfo is None:
        return at.replace(tzinfo=timezone.utc)
    return at.astimezone(timezone.utc)


def day_bucket(at: datetime) -> str:
    u = to_utc(at)
    return f"{u.year:04d}-{u.month:02d}-{u.day:02d}"


def month_bucket(at: datetime) -> str:
    u = to_utc(at)
    return f"{u.year:04d}-{u.month:02d}"


def year_bucket(at: datetime) -> str:
    return f"{to_utc(at).year:04d}"


def calendar_buckets(at: datetime) -> Dict[str, str]:
    """Rollup bucket per period for an instant, truncated on UTC boundaries."""
    return {
        "daily": day_bucket(at),
        "monthly": month_bucket(at),
        "yearly": year_bucket(at),
    }
