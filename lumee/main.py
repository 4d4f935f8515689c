from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import settings
from .core.log import configure_logging

from .api.routes import router as api_router
import lumee.api.routes as routes_module

from .drivers.indicator_http import build_indicator
from .services.acquisition import AirQualityAggregator
from .services.environment import EnvironmentService
from .sources.google_pollen import GooglePollenSource
from .sources.openweather import OpenWeatherCurrentSource, default_air_quality_sources


logger = logging.getLogger(__name__)


# --- Singletons ---
indicator = build_indicator()
environment = EnvironmentService(
    air=AirQualityAggregator(default_air_quality_sources()),
    indicator=indicator,
    weather_source=OpenWeatherCurrentSource(),
    pollen_source=GooglePollenSource(),
)


def get_environment() -> EnvironmentService:
    return environment


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(
        "Starting %s (indicator=%s tz=%s)",
        settings.app_name, indicator.indicator_id, settings.timezone,
    )
    if not settings.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; weather and air quality lookups will fail")
    if not settings.google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; pollen lookups will fail")

    try:
        yield
    finally:
        logger.info("Shutdown complete")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

# Make the dependency functions in routes resolve to the real ones
app.dependency_overrides[routes_module.get_environment] = get_environment

app.include_router(api_router, prefix="/api")
