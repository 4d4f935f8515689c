from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Optional, Sequence

from .models import CalendarEntry, DateLike, UserSensitivityProfile
from ..core.timeutil import to_local_date

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class ScheduledLocation:
    title: str
    location: str
    start: Optional[DateLike]


def _schedule(profile: Optional[UserSensitivityProfile]) -> Optional[Sequence[CalendarEntry]]:
    if profile is None:
        logger.info("No profile given, nothing to match")
        return None
    schedule = profile.schedule
    if not isinstance(schedule, (list, tuple)):
        logger.warning("Schedule for %s is not a list: %r", profile.name, type(schedule).__name__)
        return None
    return schedule


def _matching(profile: Optional[UserSensitivityProfile], requested: object) -> Optional[list[CalendarEntry]]:
    schedule = _schedule(profile)
    if schedule is None:
        return None

    target = to_local_date(requested)
    if target is None:
        logger.warning("Invalid requested date: %r", requested)
        return None

    logger.debug("Matching schedule entries for %s", target.isoformat())
    return [e for e in schedule if _entry_date(e) == target]


def _entry_date(entry: CalendarEntry) -> Optional[date]:
    if entry.start is None:
        return None
    return to_local_date(entry.start)


def find_entry_for_date(
    profile: Optional[UserSensitivityProfile],
    requested: object,
) -> Optional[CalendarEntry]:
    """First schedule entry falling on the requested local calendar date."""
    matches = _matching(profile, requested)
    if not matches:
        return None
    return matches[0]


def find_all_entries_for_date(
    profile: Optional[UserSensitivityProfile],
    requested: object,
) -> list[ScheduledLocation]:
    """Every entry on the requested date that has a usable location."""
    out: list[ScheduledLocation] = []
    for entry in _matching(profile, requested) or []:
        location = entry.best_location
        if location is None:
            continue
        out.append(ScheduledLocation(title=entry.title, location=location, start=entry.start))
    return out


def location_for_date(
    profile: Optional[UserSensitivityProfile],
    requested: object,
) -> Optional[str]:
    entry = find_entry_for_date(profile, requested)
    if entry is None:
        logger.info("No schedule entry for %r", requested)
        return None

    location = entry.best_location
    if location:
        logger.info("Schedule entry %r on %r at %s", entry.title, requested, location)
    else:
        logger.info("Schedule entry %r has no location", entry.title)
    return location


def parse_inferred_locations(text: Optional[str]) -> dict[int, str]:
    """Parse ``[{"index": 0, "weatherLocation": "..."}]`` from a model reply.

    Markdown code fences around the JSON are tolerated.
    """
    if not text:
        return {}

    cleaned = _FENCE.sub("", text).strip()
    try:
        data: Any = json.loads(cleaned)
    except ValueError:
        logger.warning("Location inference reply is not JSON: %.200s", text)
        return {}

    if not isinstance(data, list):
        logger.warning("Location inference reply is not a list")
        return {}

    out: dict[int, str] = {}
    for item in data:
        if not isinstance(item, dict):
            continue
        index, location = item.get("index"), item.get("weatherLocation")
        if isinstance(index, int) and not isinstance(index, bool) and isinstance(location, str) and location.strip():
            out[index] = location.strip()
    return out


def merge_inferred_locations(
    entries: Sequence[CalendarEntry],
    inferred: dict[int, str],
) -> list[CalendarEntry]:
    """Attach inferred regions to entries by position, falling back to the raw location."""
    merged = []
    for index, entry in enumerate(entries):
        resolved = inferred.get(index) or entry.raw_location or None
        merged.append(replace(entry, resolved_location=resolved))
    return merged
