from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..core.config import settings
from ..domain.frame import encode_frame
from ..domain.models import ActuationSignal
from ..domain.interfaces import Indicator
from .indicator_sim import SimulatedIndicator

logger = logging.getLogger(__name__)


class HttpIndicator:
    """LED indicator reached through its HTTP-to-Bluetooth bridge.

    Delivery is best effort: failures are logged and reported as False.
    """

    indicator_id = "led_http"

    def __init__(
        self,
        ip: str = "192.168.4.1",
        port: int = 80,
        path: str = "/led",
        timeout: float = 3.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = f"http://{ip}:{port}{path}"
        self._timeout = timeout
        self._transport = transport

    async def push(self, signal: ActuationSignal) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(
                    self._url,
                    content=encode_frame(signal),
                    headers={"Content-Type": "application/json"},
                )
                resp.raise_for_status()
                logger.info("LED push ok priority=%d effect=%s", signal.priority, signal.effect.value)
                return True
        except Exception:
            logger.warning(
                "LED push to %s failed, message=%s",
                self._url,
                signal.message,
                exc_info=True,
            )
            return False


def build_indicator() -> Indicator:
    if settings.indicator_mode.lower() == "http":
        return HttpIndicator(
            ip=settings.indicator_ip,
            port=settings.indicator_port,
            path=settings.indicator_path,
            timeout=settings.indicator_timeout_seconds,
        )
    return SimulatedIndicator()
