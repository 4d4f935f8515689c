from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .base import HttpSource, SourceError
from ..core.config import settings

logger = logging.getLogger(__name__)


class GooglePollenSource(HttpSource):
    """Google Pollen forecast lookup; returns the raw forecast payload."""

    def __init__(
        self,
        url: Optional[str] = None,
        source_id: str = "google_pollen",
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(url or settings.pollen_url, source_id, timeout=timeout, transport=transport)
        self._api_key = api_key if api_key is not None else settings.google_maps_api_key

    async def fetch(self, lat: float, lon: float) -> dict[str, Any]:
        data = await self._get_json({
            "key": self._api_key,
            "location.latitude": lat,
            "location.longitude": lon,
            "days": settings.pollen_days,
            "languageCode": settings.pollen_language_code,
        })
        if not isinstance(data, dict):
            raise SourceError(self.source_id, "payload is not an object")

        logger.debug("%s response: %s", self.source_id, data)
        return data
