from __future__ import annotations
from datetime import date, datetime
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..domain.models import (
    ActuationSignal,
    CalendarEntry,
    EnvironmentalReading,
    UserSensitivityProfile,
    WeatherCondition,
)


class WeatherDataIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float = 0.0
    feels_like: float = Field(default=0.0, alias="feelsLike")
    pm10: float = 0.0
    pm25: float = 0.0
    ozone: float = 0.0
    uv_index: float = Field(default=0.0, alias="uvIndex")
    pollen: float = 0.0
    precipitation: float = 0.0
    weather: Optional[str] = "Clear"
    clouds: float = 0.0
    humidity: float = 50.0

    def to_reading(self) -> EnvironmentalReading:
        return EnvironmentalReading(
            temperature=self.temperature,
            feels_like=self.feels_like,
            pm10=self.pm10,
            pm25=self.pm25,
            ozone=self.ozone,
            uv_index=self.uv_index,
            pollen_index=self.pollen,
            precipitation_rate=self.precipitation,
            weather_condition=WeatherCondition.parse(self.weather),
            cloud_cover_percent=self.clouds,
            humidity_percent=self.humidity,
        )


class CalendarEntryIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str = Field(default="", validation_alias=AliasChoices("title", "summary"))
    start: Optional[Union[datetime, date, str]] = Field(default=None, validation_alias=AliasChoices("start", "date"))
    end: Optional[Union[datetime, date, str]] = None
    location: Optional[str] = None
    weather_location: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("weatherLocation", "resolvedLocation", "weather_location")
    )

    def to_entry(self, index: int) -> CalendarEntry:
        return CalendarEntry(
            id=self.id or str(index),
            title=self.title,
            start=self.start,
            end=self.end,
            raw_location=self.location,
            resolved_location=self.weather_location,
        )


class UserProfileIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = "user"
    sensitive_factors: List[str] = Field(default_factory=list, alias="sensitiveFactors")
    hobbies: List[str] = Field(default_factory=list)
    schedule: List[CalendarEntryIn] = Field(default_factory=list)

    def to_profile(self) -> UserSensitivityProfile:
        return UserSensitivityProfile(
            name=self.name,
            sensitive_factors=frozenset(self.sensitive_factors),
            hobbies=tuple(self.hobbies),
            schedule=tuple(e.to_entry(i) for i, e in enumerate(self.schedule)),
        )


class LedStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weather_data: WeatherDataIn = Field(alias="weatherData")
    user_profile: Optional[UserProfileIn] = Field(default=None, alias="userProfile")


class BluetoothRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weather_data: WeatherDataIn = Field(alias="weatherData")


class ScheduleQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: UserProfileIn
    requested: Union[datetime, date, str] = Field(alias="date")


def signal_out(signal: ActuationSignal) -> dict[str, Any]:
    return {
        "priority": signal.priority,
        "color": {"r": signal.color.r, "g": signal.color.g, "b": signal.color.b},
        "effect": signal.effect.value,
        "duration": signal.duration_ms,
        "soundId": signal.sound_id,
        "message": signal.message,
        "category": signal.category.value,
        "brightnessBoost": signal.brightness_boost,
    }


class EnvironmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    push: bool = True
    user_profile: Optional[UserProfileIn] = Field(default=None, alias="userProfile")
