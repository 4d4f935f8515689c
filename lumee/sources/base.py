from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from ..core.config import settings

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """A provider call failed: transport, status, or payload shape."""

    def __init__(self, source_id: str, message: str) -> None:
        super().__init__(f"{source_id}: {message}")
        self.source_id = source_id
        self.message = message


class HttpSource(ABC):
    """One versioned provider endpoint, one GET per fetch."""

    def __init__(
        self,
        url: str,
        source_id: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self.source_id = source_id
        self._timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def _get_json(self, params: dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self._url, params=params)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            raise SourceError(self.source_id, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise SourceError(self.source_id, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise SourceError(self.source_id, f"invalid JSON: {e}") from e

    @abstractmethod
    async def fetch(self, lat: float, lon: float) -> Any:
        """Return the parsed reading. Raise SourceError on failure."""
        ...
