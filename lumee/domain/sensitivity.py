from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .models import ActuationSignal, SensitivityFactor, SignalCategory, UserSensitivityProfile
from ..core.config import settings

logger = logging.getLogger(__name__)


FACTOR_CATEGORIES: dict[SensitivityFactor, frozenset[SignalCategory]] = {
    SensitivityFactor.RESPIRATORY: frozenset({SignalCategory.FINE_DUST, SignalCategory.DUST, SignalCategory.OZONE}),
    SensitivityFactor.SKIN: frozenset({SignalCategory.UV}),
    SensitivityFactor.ALLERGY: frozenset({SignalCategory.POLLEN}),
    SensitivityFactor.COLD: frozenset({SignalCategory.COLD}),
}


def _factors(profile: UserSensitivityProfile) -> list[SensitivityFactor]:
    out: list[SensitivityFactor] = []
    for raw in profile.sensitive_factors:
        try:
            out.append(SensitivityFactor(str(raw).strip().lower()))
        except ValueError:
            logger.debug("Ignoring unknown sensitivity factor %r", raw)
    return out


def adjust_for_user(
    signal: ActuationSignal,
    profile: Optional[UserSensitivityProfile],
) -> ActuationSignal:
    """Boost brightness when the signal concerns one of the user's sensitivities.

    A single fixed increment is applied however many factors match.
    """
    if profile is None or not profile.sensitive_factors:
        return signal

    matched = [f for f in _factors(profile) if signal.category in FACTOR_CATEGORIES[f]]
    boost = settings.brightness_boost if matched else 0

    if matched:
        logger.info(
            "Sensitivity match for %s: factors=%s category=%s boost=%d",
            profile.name, sorted(f.value for f in matched), signal.category.value, boost,
        )
    return replace(signal, brightness_boost=boost)
