from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Generic, Optional, TypeVar, Union


class WeatherCondition(str, Enum):
    THUNDERSTORM = "Thunderstorm"
    DRIZZLE = "Drizzle"
    RAIN = "Rain"
    SNOW = "Snow"
    MIST = "Mist"
    FOG = "Fog"
    CLEAR = "Clear"
    CLOUDS = "Clouds"

    @classmethod
    def parse(cls, text: Optional[str]) -> "WeatherCondition":
        if isinstance(text, cls):
            return text
        if not text:
            return cls.CLEAR
        wanted = str(text).strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return cls.CLEAR


class Effect(str, Enum):
    SOLID = "solid"
    SLOW_BLINK = "slow_blink"
    FAST_BLINK = "fast_blink"
    BREATHE = "breathe"
    PULSE = "pulse"
    WAVE = "wave"
    SPARKLE = "sparkle"
    RAIN = "rain"
    LIGHTNING = "lightning"
    GRADIENT = "gradient"


class Sound(IntEnum):
    # Indexes into the indicator firmware's fixed sound table
    HEAT_ALERT = 1
    COLD_ALERT = 2
    AIR_ALERT = 3
    AIR_WARNING = 4
    THUNDER = 5
    HEAVY_RAIN = 6
    CHIME = 7


class SignalCategory(str, Enum):
    HEAT = "heat"
    COLD = "cold"
    FINE_DUST = "fine_dust"
    DUST = "dust"
    OZONE = "ozone"
    THUNDERSTORM = "thunderstorm"
    RAIN = "rain"
    SNOW = "snow"
    FOG = "fog"
    CLOUDS = "clouds"
    UV = "uv"
    POLLEN = "pollen"
    HUMIDITY = "humidity"
    DRYNESS = "dryness"
    TEMPERATURE = "temperature"
    PLEASANT = "pleasant"


class SensitivityFactor(str, Enum):
    RESPIRATORY = "respiratory"
    SKIN = "skin"
    ALLERGY = "allergy"
    COLD = "cold"


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")


@dataclass(frozen=True)
class EnvironmentalReading:
    temperature: float = 0.0           # °C
    feels_like: float = 0.0            # °C
    pm10: float = 0.0                  # µg/m³
    pm25: float = 0.0                  # µg/m³
    ozone: float = 0.0                 # ppm
    uv_index: float = 0.0
    pollen_index: float = 0.0
    precipitation_rate: float = 0.0    # mm/h
    weather_condition: WeatherCondition = WeatherCondition.CLEAR
    cloud_cover_percent: float = 0.0
    humidity_percent: float = 50.0     # 0 would read as "very dry"


@dataclass(frozen=True)
class ActuationSignal:
    priority: int  # 1 = most urgent
    color: Color
    effect: Effect
    duration_ms: int  # 0 = self-timed / continuous
    message: str
    category: SignalCategory
    sound_id: Optional[int] = None
    brightness_boost: int = 0


@dataclass(frozen=True)
class AirQuality:
    pm25: float
    pm10: float
    ozone: float = 0.0  # ppm
    source: str = ""


@dataclass(frozen=True)
class WeatherSnapshot:
    temperature: float
    feels_like: float
    humidity_percent: float
    cloud_cover_percent: float
    precipitation_rate: float
    weather_condition: WeatherCondition
    uv_index: float = 0.0


@dataclass(frozen=True)
class PollenObservation:
    type: str  # provider code, e.g. "GRASS", "TREE", "WEED"
    value: int  # UPI 0-5
    category: str
    in_season: bool
    observed_at: datetime
    display_name: Optional[str] = None


DateLike = Union[str, date, datetime]


@dataclass(frozen=True)
class CalendarEntry:
    id: str
    title: str
    start: Optional[DateLike]
    end: Optional[DateLike] = None
    raw_location: Optional[str] = None
    resolved_location: Optional[str] = None

    @property
    def best_location(self) -> Optional[str]:
        for candidate in (self.resolved_location, self.raw_location):
            if candidate and candidate.strip():
                return candidate.strip()
        return None


@dataclass(frozen=True)
class UserSensitivityProfile:
    name: str
    sensitive_factors: frozenset[str] = frozenset()
    hobbies: tuple[str, ...] = ()
    schedule: tuple[CalendarEntry, ...] = ()

    @classmethod
    def anonymous(cls) -> "UserSensitivityProfile":
        return cls(name="user")


class FetchStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    NOT_ATTEMPTED = "not_attempted"


T = TypeVar("T")


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    status: FetchStatus
    value: Optional[T] = None
    error: Optional[str] = None
    source: Optional[str] = None
    attempts: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK
