"""Helpers de dates: tout est stocké en UTC naïf"""

from datetime import date, datetime, time, timezone
from typing import Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc(value: datetime) -> datetime:
    """Convertit en UTC naïf. Une date sans fuseau est lue en heure locale du serveur."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def local_day_bounds(day: date) -> Tuple[datetime, datetime]:
    # [00:00:00.000, 23:59:59.999] du jour, heure locale, ramené en UTC
    start = datetime.combine(day, time.min)
    end = datetime.combine(day, time(23, 59, 59, 999000))
    return to_utc(start), to_utc(end)
