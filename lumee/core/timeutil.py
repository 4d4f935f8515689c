from __future__ import annotations

import re
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from .config import settings

# Python 3.10 fromisoformat only takes 3 or 6 fraction digits
_FRACTION = re.compile(r"(?<=\d{2}:\d{2}:\d{2})[.,](\d+)")


def local_zone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    return now_utc().astimezone(local_zone())


def _six_digit_fraction(match: re.Match) -> str:
    return "." + (match.group(1) + "000000")[:6]


def to_local_date(value: object, tz: Optional[tzinfo] = None) -> Optional[date]:
    """Reduce a date, datetime or ISO-8601 string to a local calendar date.

    Aware datetimes are converted into ``tz`` (the configured zone by
    default) before the date is taken; naive datetimes and bare dates are
    treated as already local. Returns None for anything unparseable.
    """
    zone = tz or local_zone()

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(zone).date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if "T" not in text and " " not in text:
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None

    # fromisoformat only learned "Z" in 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_six_digit_fraction, text, count=1)
    try:
        return to_local_date(datetime.fromisoformat(text), zone)
    except ValueError:
        return None
