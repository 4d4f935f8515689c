from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..domain.interfaces import AirQualitySource, PollenSource, WeatherSource
from ..domain.models import AirQuality, FetchOutcome, FetchStatus, PollenObservation, WeatherSnapshot
from ..domain.pollen import select_dominant_pollen
from ..sources.base import SourceError
from ..sources.google_pollen import GooglePollenSource
from ..sources.openweather import OpenWeatherCurrentSource, default_air_quality_sources

logger = logging.getLogger(__name__)


class AirQualityAggregator:
    """Tries air quality sources in priority order; first success wins.

    Attempts are sequential with no retry or backoff: a later source is only
    called after every earlier one failed.
    """

    def __init__(self, sources: Optional[Sequence[AirQualitySource]] = None) -> None:
        self._sources = list(sources) if sources is not None else default_air_quality_sources()

    @property
    def sources(self) -> list[AirQualitySource]:
        return list(self._sources)

    async def fetch_outcome(self, lat: float, lon: float) -> FetchOutcome[AirQuality]:
        if not self._sources:
            return FetchOutcome(FetchStatus.NOT_ATTEMPTED, error="no air quality sources configured")

        attempts: list[str] = []
        last_error: Optional[str] = None
        for source in self._sources:
            attempts.append(source.source_id)
            logger.info("Air quality attempt %d via %s", len(attempts), source.source_id)
            try:
                value = await source.fetch(lat, lon)
            except SourceError as e:
                last_error = str(e)
                logger.warning("Air quality source %s failed: %s", source.source_id, e.message)
                continue
            except Exception as e:
                last_error = f"{source.source_id}: {e}"
                logger.exception("Air quality source %s raised unexpectedly", source.source_id)
                continue

            return FetchOutcome(FetchStatus.OK, value=value, source=source.source_id, attempts=tuple(attempts))

        logger.error("Air quality unavailable for (%.4f, %.4f): all %d sources failed", lat, lon, len(attempts))
        return FetchOutcome(FetchStatus.FAILED, error=last_error, attempts=tuple(attempts))

    async def fetch(self, lat: float, lon: float) -> Optional[AirQuality]:
        return (await self.fetch_outcome(lat, lon)).value


async def fetch_air_quality(lat: float, lon: float) -> Optional[AirQuality]:
    return await AirQualityAggregator().fetch(lat, lon)


async def fetch_weather_outcome(
    lat: float,
    lon: float,
    source: Optional[WeatherSource] = None,
) -> FetchOutcome[WeatherSnapshot]:
    source = source or OpenWeatherCurrentSource()
    try:
        value = await source.fetch(lat, lon)
    except SourceError as e:
        logger.warning("Weather source %s failed: %s", source.source_id, e.message)
        return FetchOutcome(FetchStatus.FAILED, error=str(e), attempts=(source.source_id,))
    except Exception as e:
        logger.exception("Weather source %s raised unexpectedly", source.source_id)
        return FetchOutcome(FetchStatus.FAILED, error=f"{source.source_id}: {e}", attempts=(source.source_id,))
    return FetchOutcome(FetchStatus.OK, value=value, source=source.source_id, attempts=(source.source_id,))


async def fetch_weather(
    lat: float,
    lon: float,
    source: Optional[WeatherSource] = None,
) -> Optional[WeatherSnapshot]:
    return (await fetch_weather_outcome(lat, lon, source)).value


async def fetch_pollen_outcome(
    lat: float,
    lon: float,
    source: Optional[PollenSource] = None,
) -> FetchOutcome[PollenObservation]:
    source = source or GooglePollenSource()
    try:
        raw = await source.fetch(lat, lon)
    except SourceError as e:
        logger.warning("Pollen source %s failed: %s", source.source_id, e.message)
        return FetchOutcome(FetchStatus.FAILED, error=str(e), attempts=(source.source_id,))
    except Exception as e:
        logger.exception("Pollen source %s raised unexpectedly", source.source_id)
        return FetchOutcome(FetchStatus.FAILED, error=f"{source.source_id}: {e}", attempts=(source.source_id,))

    observation = select_dominant_pollen(raw)
    if observation is None:
        return FetchOutcome(FetchStatus.FAILED, error="no pollen data in response", attempts=(source.source_id,))
    return FetchOutcome(FetchStatus.OK, value=observation, source=source.source_id, attempts=(source.source_id,))


async def fetch_pollen(
    lat: float,
    lon: float,
    source: Optional[PollenSource] = None,
) -> Optional[PollenObservation]:
    return (await fetch_pollen_outcome(lat, lon, source)).value
