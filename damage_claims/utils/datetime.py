"""Calendar helpers bound to the application timezone.

Every "today"/"tomorrow" decision and every datetime written to the database
goes through this module. The database holds naive wall-clock values in the
application timezone; the domain works with aware values.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from damage_claims.config import get_settings

logger = logging.getLogger(__name__)

_FALLBACK_TIMEZONE: Final[tzinfo] = timezone.utc
_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE``.

    IANA names (``Europe/Lisbon``) and fixed offsets (``UTC-05:00``) are
    accepted. An empty or unknown value means UTC.
    """

    name = (get_settings().app_timezone or "").strip()
    if not name:
        return _FALLBACK_TIMEZONE
    return _resolve_timezone(name)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current wall-clock time in the application timezone, as stored in the database."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the application timezone.

    Naive values are read as wall-clock times in that zone, which is how the
    database stores them.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` to the naive form used by ``DateTime`` columns."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def start_of_app_day(value: datetime) -> datetime:
    """Return midnight of the calendar day containing ``value`` in the app timezone."""

    localized = ensure_app_timezone(value)
    return datetime.combine(localized.date(), datetime.min.time(), tzinfo=localized.tzinfo)


def _fixed_offset(name: str) -> tzinfo | None:
    match = _FIXED_OFFSET.match(name)
    if match is None:
        return None
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-offset if match.group("sign") == "-" else offset)


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    offset = _fixed_offset(name)
    if offset is not None:
        return offset

    logger.warning("Unknown APP_TIMEZONE %r; using UTC", name)
    return _FALLBACK_TIMEZONE


__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "start_of_app_day",
]
