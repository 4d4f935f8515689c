"""
Pytest configuration and shared fakes for the Lumee signal pipeline tests.
"""

from datetime import datetime, timezone

import pytest

from lumee.domain.models import AirQuality, WeatherCondition, WeatherSnapshot
from lumee.sources.base import SourceError


class FakeAirSource:
    """Air quality source returning a fixed value or raising."""

    def __init__(self, source_id, value=None, error=None):
        self.source_id = source_id
        self._value = value
        self._error = error
        self.calls = []

    async def fetch(self, lat, lon):
        self.calls.append((lat, lon))
        if self._error is not None:
            raise self._error
        return self._value


class FakeWeatherSource:
    source_id = "fake_weather"

    def __init__(self, value=None, error=None):
        self._value = value
        self._error = error
        self.calls = 0

    async def fetch(self, lat, lon):
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._value


class FakePollenSource:
    source_id = "fake_pollen"

    def __init__(self, payload=None, error=None):
        self._payload = payload
        self._error = error

    async def fetch(self, lat, lon):
        if self._error is not None:
            raise self._error
        return self._payload


class RecordingIndicator:
    indicator_id = "recording"

    def __init__(self, result=True, error=None):
        self.signals = []
        self._result = result
        self._error = error

    async def push(self, signal):
        self.signals.append(signal)
        if self._error is not None:
            raise self._error
        return self._result


def source_error(source_id="fake"):
    return SourceError(source_id, "boom")


@pytest.fixture
def mild_weather():
    return WeatherSnapshot(
        temperature=21.0,
        feels_like=21.5,
        humidity_percent=55.0,
        cloud_cover_percent=10.0,
        precipitation_rate=0.0,
        weather_condition=WeatherCondition.CLEAR,
    )


@pytest.fixture
def clean_air():
    return AirQuality(pm25=8.0, pm10=20.0, ozone=0.03, source="fake_air")


@pytest.fixture
def pollen_payload():
    return {
        "dailyInfo": [
            {
                "pollenTypeInfo": [
                    {"code": "GRASS", "displayName": "잔디", "indexInfo": {"value": 2, "category": "Low"}, "inSeason": True},
                    {"code": "TREE", "displayName": "나무", "indexInfo": {"value": 4, "category": "High"}, "inSeason": True},
                    {"code": "WEED", "displayName": "잡초", "indexInfo": {"value": 1, "category": "Very low"}},
                ]
            }
        ]
    }


@pytest.fixture
def fixed_time():
    return datetime(2025, 12, 11, 3, 0, tzinfo=timezone.utc)
