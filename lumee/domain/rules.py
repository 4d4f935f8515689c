"""Priority cascade that turns an environmental reading into an LED signal.

The table below is evaluated top to bottom and the first matching rule wins.
Tiers encode the safety order: life-threatening heat, cold and toxic air
first, then chronic air quality, then transient weather, then comfort
advisories, and finally a plain temperature band. Reordering two rules, even
inside one tier, changes what the indicator shows.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from .models import (
    ActuationSignal,
    Color,
    Effect,
    EnvironmentalReading,
    SignalCategory,
    Sound,
    WeatherCondition,
)

logger = logging.getLogger(__name__)


class Tier(IntEnum):
    CRITICAL = 1
    AIR_QUALITY = 2
    WEATHER = 3
    SPECIAL = 4
    TEMPERATURE = 5


@dataclass(frozen=True)
class SignalTemplate:
    color: Color
    effect: Effect
    duration_ms: int
    message: str
    category: SignalCategory
    sound: Optional[Sound] = None


@dataclass(frozen=True)
class Rule:
    tier: Tier
    name: str
    predicate: Callable[[EnvironmentalReading], bool]
    template: SignalTemplate

    def signal(self) -> ActuationSignal:
        t = self.template
        return ActuationSignal(
            priority=int(self.tier),
            color=t.color,
            effect=t.effect,
            duration_ms=t.duration_ms,
            message=t.message,
            category=t.category,
            sound_id=int(t.sound) if t.sound is not None else None,
        )


def _rule(
    tier: Tier,
    name: str,
    predicate: Callable[[EnvironmentalReading], bool],
    rgb: tuple[int, int, int],
    effect: Effect,
    duration_ms: int,
    message: str,
    category: SignalCategory,
    sound: Optional[Sound] = None,
) -> Rule:
    return Rule(tier, name, predicate, SignalTemplate(Color(*rgb), effect, duration_ms, message, category, sound))


_C, _A, _W, _S, _T = Tier.CRITICAL, Tier.AIR_QUALITY, Tier.WEATHER, Tier.SPECIAL, Tier.TEMPERATURE
_Cat = SignalCategory

RULES: tuple[Rule, ...] = (
    # 1: emergencies
    _rule(_C, "heat_emergency", lambda r: r.feels_like >= 35,
          (255, 0, 0), Effect.FAST_BLINK, 500, "폭염 경보: 외출을 자제하세요", _Cat.HEAT, Sound.HEAT_ALERT),
    _rule(_C, "cold_emergency", lambda r: r.feels_like <= -15,
          (0, 100, 255), Effect.FAST_BLINK, 500, "한파 경보: 체온 유지에 주의하세요", _Cat.COLD, Sound.COLD_ALERT),
    _rule(_C, "pm25_hazardous", lambda r: r.pm25 > 75,
          (148, 0, 211), Effect.SLOW_BLINK, 1000, "초미세먼지 매우나쁨: 외출 시 KF94 마스크 필수", _Cat.FINE_DUST, Sound.AIR_ALERT),

    # 2: air quality
    _rule(_A, "pm10_very_bad", lambda r: r.pm10 > 150,
          (139, 0, 0), Effect.SLOW_BLINK, 2000, "미세먼지 매우나쁨: 실외활동 자제", _Cat.DUST, Sound.AIR_WARNING),
    _rule(_A, "pm10_bad", lambda r: r.pm10 > 80,
          (255, 140, 0), Effect.SOLID, 0, "미세먼지 나쁨: 마스크 착용 권장", _Cat.DUST),
    _rule(_A, "pm10_moderate", lambda r: r.pm10 > 50,
          (255, 215, 0), Effect.SOLID, 0, "미세먼지 보통: 민감군 주의", _Cat.DUST),
    _rule(_A, "pm25_bad", lambda r: r.pm25 > 35,
          (255, 165, 0), Effect.SOLID, 0, "초미세먼지 나쁨: 호흡기 민감자 주의", _Cat.FINE_DUST),
    _rule(_A, "ozone_high", lambda r: r.ozone > 0.12,
          (173, 255, 47), Effect.SLOW_BLINK, 2000, "오존 농도 높음: 실외활동 자제", _Cat.OZONE, Sound.AIR_WARNING),

    # 3: weather; rain bands strictly descending so heavier rain wins
    _rule(_W, "thunderstorm", lambda r: r.weather_condition is WeatherCondition.THUNDERSTORM,
          (255, 255, 0), Effect.LIGHTNING, 0, "천둥번개: 실내 대피 권장", _Cat.THUNDERSTORM, Sound.THUNDER),
    _rule(_W, "rain_torrential", lambda r: r.precipitation_rate > 30,
          (0, 0, 139), Effect.FAST_BLINK, 500, "폭우: 이동 자제", _Cat.RAIN, Sound.HEAVY_RAIN),
    _rule(_W, "rain_heavy", lambda r: r.precipitation_rate > 10,
          (30, 144, 255), Effect.RAIN, 0, "강한 비: 우산 필수", _Cat.RAIN),
    _rule(_W, "rain_moderate", lambda r: r.precipitation_rate > 2,
          (100, 149, 237), Effect.SLOW_BLINK, 2000, "보통 비: 우산 권장", _Cat.RAIN),
    _rule(_W, "rain_light", lambda r: r.precipitation_rate > 0,
          (135, 206, 250), Effect.SLOW_BLINK, 3000, "약한 비: 접이식 우산 휴대", _Cat.RAIN),
    _rule(_W, "snow", lambda r: r.weather_condition is WeatherCondition.SNOW,
          (255, 250, 250), Effect.SPARKLE, 0, "눈: 미끄럼 주의", _Cat.SNOW, Sound.CHIME),
    _rule(_W, "fog", lambda r: r.weather_condition in (WeatherCondition.MIST, WeatherCondition.FOG),
          (192, 192, 192), Effect.BREATHE, 2000, "안개: 운전 주의", _Cat.FOG),
    _rule(_W, "overcast", lambda r: r.cloud_cover_percent > 80,
          (169, 169, 169), Effect.SOLID, 0, "흐림", _Cat.CLOUDS),
    _rule(_W, "partly_cloudy", lambda r: r.cloud_cover_percent > 20,
          (176, 224, 230), Effect.SOLID, 0, "구름 조금", _Cat.CLOUDS),

    # 4: comfort advisories
    _rule(_S, "uv_very_high", lambda r: r.uv_index > 8,
          (186, 85, 211), Effect.PULSE, 2000, "자외선 매우 높음: 자외선 차단제 필수", _Cat.UV, Sound.CHIME),
    _rule(_S, "pollen_high", lambda r: r.pollen_index > 9,
          (255, 192, 203), Effect.BREATHE, 2000, "꽃가루 많음: 알레르기 약 복용 권장", _Cat.POLLEN),
    _rule(_S, "humid", lambda r: r.humidity_percent > 80,
          (64, 224, 208), Effect.WAVE, 0, "습도 매우 높음: 불쾌지수 높음", _Cat.HUMIDITY),
    _rule(_S, "dry", lambda r: r.humidity_percent < 30,
          (210, 180, 140), Effect.SOLID, 0, "습도 매우 낮음: 보습 필요", _Cat.DRYNESS),

    # 5: temperature bands
    _rule(_T, "very_hot", lambda r: r.temperature >= 30,
          (255, 69, 0), Effect.SOLID, 0, "매우 더움", _Cat.TEMPERATURE),
    _rule(_T, "hot", lambda r: r.temperature >= 25,
          (255, 140, 0), Effect.SOLID, 0, "더움", _Cat.TEMPERATURE),
    _rule(_T, "comfortable", lambda r: r.temperature >= 18,
          (50, 205, 50), Effect.SOLID, 0, "쾌적", _Cat.TEMPERATURE),
    _rule(_T, "cool", lambda r: r.temperature >= 10,
          (144, 238, 144), Effect.SOLID, 0, "선선", _Cat.TEMPERATURE),
    _rule(_T, "cold", lambda r: r.temperature >= 0,
          (70, 130, 180), Effect.SOLID, 0, "추움", _Cat.COLD),
    _rule(_T, "freezing", lambda r: r.temperature < 0,
          (0, 191, 255), Effect.SOLID, 0, "매우 추움", _Cat.COLD),
)

# Only reachable when temperature is not comparable (NaN)
DEFAULT_SIGNAL = ActuationSignal(
    priority=int(Tier.TEMPERATURE),
    color=Color(135, 206, 235),
    effect=Effect.GRADIENT,
    duration_ms=5000,
    message="완벽한 날씨: 외출하기 좋습니다",
    category=SignalCategory.PLEASANT,
)


def rules_for_tier(tier: Tier) -> tuple[Rule, ...]:
    return tuple(rule for rule in RULES if rule.tier is tier)


def match_rule(reading: EnvironmentalReading) -> Optional[Rule]:
    for rule in RULES:
        if rule.predicate(reading):
            return rule
    return None


def classify(reading: EnvironmentalReading) -> ActuationSignal:
    rule = match_rule(reading)
    if rule is None:
        logger.warning("classify: no rule matched (temperature=%r), using default signal", reading.temperature)
        return DEFAULT_SIGNAL

    logger.debug("classify: tier=%s rule=%s", rule.tier.name, rule.name)
    return rule.signal()
