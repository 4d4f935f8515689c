from __future__ import annotations
from typing import Any, Protocol, runtime_checkable
from .models import ActuationSignal, AirQuality, WeatherSnapshot


@runtime_checkable
class AirQualitySource(Protocol):
    source_id: str

    async def fetch(self, lat: float, lon: float) -> AirQuality:
        ...


@runtime_checkable
class WeatherSource(Protocol):
    source_id: str

    async def fetch(self, lat: float, lon: float) -> WeatherSnapshot:
        ...


@runtime_checkable
class PollenSource(Protocol):
    source_id: str

    async def fetch(self, lat: float, lon: float) -> dict[str, Any]:
        ...


@runtime_checkable
class Indicator(Protocol):
    indicator_id: str

    async def push(self, signal: ActuationSignal) -> bool:
        ...
