"""
Unit tests for the classification cascade.

Covers tier ordering, first-match-wins inside a tier, strict threshold
boundaries, and the default signal.
"""

import math

import pytest

from lumee.domain.models import Color, Effect, EnvironmentalReading, SignalCategory, Sound, WeatherCondition
from lumee.domain.rules import DEFAULT_SIGNAL, RULES, Tier, classify, match_rule, rules_for_tier


def reading(**kwargs):
    return EnvironmentalReading(**kwargs)


class TestTierOrdering:

    def test_heat_checked_before_hazardous_fine_dust(self):
        signal = classify(reading(feels_like=36, pm25=90))

        assert signal.priority == 1
        assert signal.color == Color(255, 0, 0)
        assert signal.message == "폭염 경보: 외출을 자제하세요"
        assert signal.sound_id == Sound.HEAT_ALERT

    def test_cold_emergency_before_fine_dust(self):
        signal = classify(reading(feels_like=-20, pm25=90))

        assert signal.priority == 1
        assert signal.color == Color(0, 100, 255)
        assert signal.category is SignalCategory.COLD

    def test_critical_outranks_weather(self):
        signal = classify(reading(pm25=80, weather_condition=WeatherCondition.THUNDERSTORM))

        assert signal.priority == 1
        assert signal.effect is Effect.SLOW_BLINK
        assert signal.duration_ms == 1000

    def test_air_quality_outranks_weather(self):
        signal = classify(reading(pm10=90, precipitation_rate=40))

        assert signal.priority == 2
        assert signal.message == "미세먼지 나쁨: 마스크 착용 권장"

    def test_pm10_checked_before_pm25_within_tier(self):
        rule = match_rule(reading(pm10=60, pm25=50))
        assert rule.name == "pm10_moderate"

    def test_weather_outranks_special(self):
        signal = classify(reading(weather_condition=WeatherCondition.THUNDERSTORM, uv_index=11))

        assert signal.priority == 3
        assert signal.effect is Effect.LIGHTNING

    def test_rain_checked_before_snow(self):
        rule = match_rule(reading(precipitation_rate=1, weather_condition=WeatherCondition.SNOW))
        assert rule.name == "rain_light"

    def test_heavier_rain_wins(self):
        assert match_rule(reading(precipitation_rate=45)).name == "rain_torrential"
        assert match_rule(reading(precipitation_rate=12)).name == "rain_heavy"

    def test_fog_before_clouds(self):
        assert match_rule(reading(weather_condition=WeatherCondition.MIST, cloud_cover_percent=95)).name == "fog"
        assert match_rule(reading(weather_condition=WeatherCondition.FOG)).name == "fog"

    def test_special_outranks_temperature(self):
        signal = classify(reading(uv_index=9, temperature=31))

        assert signal.priority == 4
        assert signal.category is SignalCategory.UV

    def test_tiers_are_non_decreasing_in_table(self):
        tiers = [int(rule.tier) for rule in RULES]
        assert tiers == sorted(tiers)

    def test_priority_matches_tier(self):
        for rule in RULES:
            assert rule.signal().priority == int(rule.tier)

    def test_rules_for_tier_keeps_order(self):
        assert [r.name for r in rules_for_tier(Tier.CRITICAL)] == [
            "heat_emergency", "cold_emergency", "pm25_hazardous",
        ]
        assert [r.name for r in rules_for_tier(Tier.AIR_QUALITY)] == [
            "pm10_very_bad", "pm10_bad", "pm10_moderate", "pm25_bad", "ozone_high",
        ]


class TestThresholds:

    @pytest.mark.parametrize("fields, expected", [
        ({"feels_like": 35}, "heat_emergency"),
        ({"feels_like": 34.9, "temperature": 20}, "comfortable"),
        ({"feels_like": -15}, "cold_emergency"),
        ({"feels_like": -14.9, "temperature": -5}, "freezing"),
        ({"pm25": 75}, "pm25_bad"),
        ({"pm25": 75.1}, "pm25_hazardous"),
        ({"pm10": 150}, "pm10_bad"),
        ({"pm10": 151}, "pm10_very_bad"),
        ({"pm10": 80}, "pm10_moderate"),
        ({"pm10": 80.1}, "pm10_bad"),
        ({"pm10": 50, "temperature": 20}, "comfortable"),
        ({"pm10": 50.1}, "pm10_moderate"),
        ({"pm25": 35, "temperature": 20}, "comfortable"),
        ({"pm25": 35.1}, "pm25_bad"),
        ({"ozone": 0.12, "temperature": 20}, "comfortable"),
        ({"ozone": 0.121}, "ozone_high"),
        ({"precipitation_rate": 30}, "rain_heavy"),
        ({"precipitation_rate": 30.1}, "rain_torrential"),
        ({"precipitation_rate": 10}, "rain_moderate"),
        ({"precipitation_rate": 2}, "rain_light"),
        ({"precipitation_rate": 0, "temperature": 20}, "comfortable"),
        ({"cloud_cover_percent": 80}, "partly_cloudy"),
        ({"cloud_cover_percent": 81}, "overcast"),
        ({"cloud_cover_percent": 20, "temperature": 20}, "comfortable"),
        ({"uv_index": 8, "temperature": 20}, "comfortable"),
        ({"uv_index": 8.5}, "uv_very_high"),
        ({"pollen_index": 9, "temperature": 20}, "comfortable"),
        ({"pollen_index": 10}, "pollen_high"),
        ({"humidity_percent": 80, "temperature": 20}, "comfortable"),
        ({"humidity_percent": 81}, "humid"),
        ({"humidity_percent": 30, "temperature": 20}, "comfortable"),
        ({"humidity_percent": 29}, "dry"),
    ])
    def test_boundary(self, fields, expected):
        assert match_rule(reading(**fields)).name == expected

    @pytest.mark.parametrize("temperature, name, message", [
        (30, "very_hot", "매우 더움"),
        (29.9, "hot", "더움"),
        (25, "hot", "더움"),
        (18, "comfortable", "쾌적"),
        (12, "cool", "선선"),
        (10, "cool", "선선"),
        (5, "cold", "추움"),
        (0, "cold", "추움"),
        (-0.1, "freezing", "매우 추움"),
    ])
    def test_temperature_bands(self, temperature, name, message):
        rule = match_rule(reading(temperature=temperature))

        assert rule.name == name
        assert classify(reading(temperature=temperature)).message == message
        assert rule.tier is Tier.TEMPERATURE


class TestDefaults:

    def test_neutral_reading_lands_in_temperature_band(self):
        signal = classify(EnvironmentalReading())

        assert signal.priority == 5
        assert signal.message == "추움"
        assert signal != DEFAULT_SIGNAL

    def test_cool_band_with_neutral_fields(self):
        signal = classify(reading(temperature=15))

        assert signal.message == "선선"
        assert signal.color == Color(144, 238, 144)

    def test_nan_temperature_reaches_default_signal(self):
        signal = classify(reading(temperature=math.nan))

        assert signal == DEFAULT_SIGNAL
        assert signal.effect is Effect.GRADIENT
        assert signal.duration_ms == 5000

    def test_classify_is_pure(self):
        r = reading(pm10=100)
        assert classify(r) == classify(r)

    def test_non_alert_rules_have_no_sound(self):
        assert classify(reading(temperature=20)).sound_id is None
        assert classify(reading(precipitation_rate=35)).sound_id == Sound.HEAVY_RAIN
