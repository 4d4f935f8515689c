from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.timeutil import now_utc
from ..domain.interfaces import Indicator, PollenSource, WeatherSource
from ..domain.models import (
    ActuationSignal,
    AirQuality,
    EnvironmentalReading,
    FetchOutcome,
    PollenObservation,
    UserSensitivityProfile,
    WeatherSnapshot,
)
from ..domain.rules import classify
from ..domain.sensitivity import adjust_for_user
from .acquisition import AirQualityAggregator, fetch_pollen_outcome, fetch_weather_outcome


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assessment:
    reading: EnvironmentalReading
    signal: ActuationSignal
    weather: FetchOutcome[WeatherSnapshot]
    air: FetchOutcome[AirQuality]
    pollen: FetchOutcome[PollenObservation]
    delivered: bool
    ts_utc: datetime


@dataclass
class LiveState:
    last_reading: Optional[EnvironmentalReading] = None
    last_signal: Optional[ActuationSignal] = None
    last_delivered: Optional[bool] = None
    last_updated_utc: Optional[datetime] = None
    source_status: dict[str, str] = field(default_factory=dict)


def build_reading(
    weather: Optional[WeatherSnapshot],
    air: Optional[AirQuality],
    pollen: Optional[PollenObservation],
) -> EnvironmentalReading:
    """Merge whatever sources answered; missing ones keep the neutral defaults."""
    neutral = EnvironmentalReading()
    return EnvironmentalReading(
        temperature=weather.temperature if weather else neutral.temperature,
        feels_like=weather.feels_like if weather else neutral.feels_like,
        pm10=air.pm10 if air else neutral.pm10,
        pm25=air.pm25 if air else neutral.pm25,
        ozone=air.ozone if air else neutral.ozone,
        uv_index=weather.uv_index if weather else neutral.uv_index,
        pollen_index=float(pollen.value) if pollen else neutral.pollen_index,
        precipitation_rate=weather.precipitation_rate if weather else neutral.precipitation_rate,
        weather_condition=weather.weather_condition if weather else neutral.weather_condition,
        cloud_cover_percent=weather.cloud_cover_percent if weather else neutral.cloud_cover_percent,
        humidity_percent=weather.humidity_percent if weather else neutral.humidity_percent,
    )


def evaluate(
    reading: EnvironmentalReading,
    profile: Optional[UserSensitivityProfile] = None,
) -> ActuationSignal:
    signal = classify(reading)
    return adjust_for_user(signal, profile)


class EnvironmentService:
    def __init__(
        self,
        air: AirQualityAggregator,
        indicator: Indicator,
        weather_source: Optional[WeatherSource] = None,
        pollen_source: Optional[PollenSource] = None,
    ) -> None:
        self._air = air
        self._indicator = indicator
        self._weather_source = weather_source
        self._pollen_source = pollen_source

        self.live = LiveState()

    @property
    def indicator(self) -> Indicator:
        return self._indicator

    async def air_quality(self, lat: float, lon: float) -> Optional[AirQuality]:
        return await self._air.fetch(lat, lon)

    async def pollen(self, lat: float, lon: float) -> Optional[PollenObservation]:
        return (await fetch_pollen_outcome(lat, lon, self._pollen_source)).value

    async def assess(
        self,
        lat: float,
        lon: float,
        profile: Optional[UserSensitivityProfile] = None,
        push: bool = True,
    ) -> Assessment:
        # Independent capabilities: fetch them side by side
        weather, air, pollen = await asyncio.gather(
            fetch_weather_outcome(lat, lon, self._weather_source),
            self._air.fetch_outcome(lat, lon),
            fetch_pollen_outcome(lat, lon, self._pollen_source),
        )

        reading = build_reading(weather.value, air.value, pollen.value)
        signal = evaluate(reading, profile)
        logger.info(
            "assess (%.4f, %.4f): weather=%s air=%s pollen=%s -> priority=%d %s",
            lat, lon, weather.status.value, air.status.value, pollen.status.value,
            signal.priority, signal.message,
        )

        delivered = False
        if push:
            delivered = await self.deliver(signal)

        ts = now_utc()
        self.live.last_reading = reading
        self.live.last_signal = signal
        self.live.last_delivered = delivered
        self.live.last_updated_utc = ts
        self.live.source_status = {
            "weather": weather.status.value,
            "air": air.status.value,
            "pollen": pollen.status.value,
        }
        return Assessment(reading, signal, weather, air, pollen, delivered, ts)

    async def deliver(self, signal: ActuationSignal) -> bool:
        try:
            return await self._indicator.push(signal)
        except Exception:
            logger.exception("Indicator %s push raised", getattr(self._indicator, "indicator_id", "?"))
            return False
