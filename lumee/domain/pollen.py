from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from .models import PollenObservation
from ..core.timeutil import now_utc

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Very low"


def _severity(pollen: dict[str, Any]) -> float:
    info = pollen.get("indexInfo")
    if not isinstance(info, dict):
        return 0
    value = info.get("value")
    return value if isinstance(value, (int, float)) else 0


def select_dominant_pollen(
    raw: Any,
    observed_at: Optional[datetime] = None,
) -> Optional[PollenObservation]:
    """Reduce a pollen forecast to its single most severe pollen type.

    Only the first daily entry is considered. Missing severities count as 0,
    ties keep the first type in provider order, and a type without
    ``indexInfo`` gets the "Very low" / 0 defaults.
    """
    if not isinstance(raw, dict):
        logger.warning("Pollen response is not an object: %r", type(raw).__name__)
        return None

    daily = raw.get("dailyInfo")
    if not isinstance(daily, list) or not daily or not isinstance(daily[0], dict):
        logger.warning("Pollen response has no dailyInfo")
        return None

    types = daily[0].get("pollenTypeInfo")
    if isinstance(types, list):
        types = [p for p in types if isinstance(p, dict)]
    if not types or not isinstance(types, list):
        logger.warning("Pollen response has no pollenTypeInfo for the first day")
        return None

    top = types[0]
    for pollen in types[1:]:
        if _severity(pollen) > _severity(top):
            top = pollen

    info = top.get("indexInfo") if isinstance(top.get("indexInfo"), dict) else None
    if info is None:
        logger.warning(
            "indexInfo missing for %s (%s), using defaults",
            top.get("code"), top.get("displayName"),
        )

    in_season = top.get("inSeason")
    return PollenObservation(
        type=str(top.get("code", "")),
        value=int(_severity(top)),
        category=(info or {}).get("category") or DEFAULT_CATEGORY,
        in_season=in_season if isinstance(in_season, bool) else True,
        observed_at=observed_at or now_utc(),
        display_name=top.get("displayName"),
    )
