from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .base import HttpSource, SourceError
from ..core.config import settings
from ..domain.models import AirQuality, WeatherCondition, WeatherSnapshot

logger = logging.getLogger(__name__)

# µg/m³ per ppm of ozone at 25 °C, 1 atm
OZONE_UG_PER_PPM = 1962.0


def _number(source_id: str, container: Any, key: str, default: Optional[float] = None) -> float:
    value = container.get(key, default) if isinstance(container, dict) else default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        if default is not None:
            return float(default)
        raise SourceError(source_id, f"missing numeric field {key!r}")
    return float(value)


class OpenWeatherAirSource(HttpSource):
    """OpenWeather air pollution endpoint (one API version per instance)."""

    def __init__(
        self,
        url: str,
        source_id: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(url, source_id, timeout=timeout, transport=transport)
        self._api_key = api_key if api_key is not None else settings.openweather_api_key

    async def fetch(self, lat: float, lon: float) -> AirQuality:
        data = await self._get_json({"lat": lat, "lon": lon, "appid": self._api_key})
        try:
            components = data["list"][0]["components"]
        except (KeyError, IndexError, TypeError) as e:
            raise SourceError(self.source_id, "payload has no list[0].components") from e

        pm25 = _number(self.source_id, components, "pm2_5")
        pm10 = _number(self.source_id, components, "pm10")
        o3 = _number(self.source_id, components, "o3", default=0.0)

        logger.info("%s air: pm25=%.1f pm10=%.1f o3=%.1f", self.source_id, pm25, pm10, o3)
        return AirQuality(pm25=pm25, pm10=pm10, ozone=o3 / OZONE_UG_PER_PPM, source=self.source_id)


class OpenWeatherCurrentSource(HttpSource):
    """Current conditions from One Call 3.0, metric units.

    Only the ``current`` block is requested and read.
    """

    EXCLUDE = "minutely,hourly,daily,alerts"

    def __init__(
        self,
        url: Optional[str] = None,
        source_id: str = "openweather_onecall",
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(url or settings.weather_url, source_id, timeout=timeout, transport=transport)
        self._api_key = api_key if api_key is not None else settings.openweather_api_key

    async def fetch(self, lat: float, lon: float) -> WeatherSnapshot:
        data = await self._get_json({
            "lat": lat,
            "lon": lon,
            "appid": self._api_key,
            "units": "metric",
            "exclude": self.EXCLUDE,
        })
        current = data.get("current") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            raise SourceError(self.source_id, "payload has no current block")

        weather = current.get("weather")
        condition = weather[0].get("main") if isinstance(weather, list) and weather and isinstance(weather[0], dict) else None

        # rain/snow volume for the last hour stands in for the rate
        precipitation = 0.0
        for key in ("rain", "snow"):
            precipitation += _number(self.source_id, current.get(key), "1h", default=0.0)

        temperature = _number(self.source_id, current, "temp")
        snapshot = WeatherSnapshot(
            temperature=temperature,
            feels_like=_number(self.source_id, current, "feels_like", default=temperature),
            humidity_percent=_number(self.source_id, current, "humidity", default=50.0),
            cloud_cover_percent=_number(self.source_id, current, "clouds", default=0.0),
            precipitation_rate=precipitation,
            weather_condition=WeatherCondition.parse(condition),
            uv_index=_number(self.source_id, current, "uvi", default=0.0),
        )
        logger.info(
            "%s weather: temp=%.1f feels=%.1f cond=%s rain=%.1f uvi=%.1f",
            self.source_id, snapshot.temperature, snapshot.feels_like,
            snapshot.weather_condition.value, snapshot.precipitation_rate, snapshot.uv_index,
        )
        return snapshot


def default_air_quality_sources(
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[OpenWeatherAirSource]:
    return [
        OpenWeatherAirSource(settings.air_quality_primary_url, "openweather_air_v3", transport=transport),
        OpenWeatherAirSource(settings.air_quality_secondary_url, "openweather_air_v2_5", transport=transport),
    ]
