from __future__ import annotations
import logging
from typing import Any, Optional

from ..domain.frame import to_indicator_frame
from ..domain.models import ActuationSignal

logger = logging.getLogger(__name__)


class SimulatedIndicator:
    indicator_id = "led_sim_01"

    def __init__(self) -> None:
        self._last_frame: Optional[dict[str, Any]] = None
        self._pushes = 0

    @property
    def last_frame(self) -> Optional[dict[str, Any]]:
        return self._last_frame

    @property
    def pushes(self) -> int:
        return self._pushes

    async def push(self, signal: ActuationSignal) -> bool:
        self._last_frame = to_indicator_frame(signal)
        self._pushes += 1
        logger.info("LED frame=%s boost=%d message=%s", self._last_frame, signal.brightness_boost, signal.message)
        return True
