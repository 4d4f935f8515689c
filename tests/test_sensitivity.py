"""
Unit tests for the per-user brightness adjustment.
"""

import pytest

from lumee.core.config import settings
from lumee.domain.models import EnvironmentalReading, UserSensitivityProfile
from lumee.domain.rules import classify
from lumee.domain.sensitivity import adjust_for_user


def profile(*factors):
    return UserSensitivityProfile(name="민지", sensitive_factors=frozenset(factors))


@pytest.mark.parametrize("factor, fields", [
    ("respiratory", {"pm10": 100}),
    ("respiratory", {"pm25": 40}),
    ("respiratory", {"ozone": 0.2}),
    ("skin", {"uv_index": 10}),
    ("allergy", {"pollen_index": 10}),
    ("cold", {"temperature": 3}),
    ("cold", {"temperature": -8}),
    ("cold", {"feels_like": -20}),
])
def test_matching_factor_boosts(factor, fields):
    signal = classify(EnvironmentalReading(**fields))
    adjusted = adjust_for_user(signal, profile(factor))

    assert adjusted.brightness_boost == settings.brightness_boost == 30


@pytest.mark.parametrize("factor, fields", [
    ("respiratory", {"uv_index": 10}),
    ("skin", {"pm10": 100}),
    ("allergy", {"temperature": 3}),
    ("cold", {"temperature": 12}),
])
def test_unrelated_factor_leaves_boost_at_zero(factor, fields):
    adjusted = adjust_for_user(classify(EnvironmentalReading(**fields)), profile(factor))
    assert adjusted.brightness_boost == 0


def test_multiple_matches_do_not_stack():
    signal = classify(EnvironmentalReading(pm10=100))
    adjusted = adjust_for_user(signal, profile("respiratory", "allergy", "skin", "cold"))

    assert adjusted.brightness_boost == 30


def test_only_boost_changes():
    signal = classify(EnvironmentalReading(pm10=100))
    adjusted = adjust_for_user(signal, profile("respiratory"))

    assert adjusted.message == signal.message
    assert adjusted.color == signal.color
    assert adjusted.priority == signal.priority
    assert signal.brightness_boost == 0


def test_no_profile_returns_signal_unchanged():
    signal = classify(EnvironmentalReading(pm10=100))

    assert adjust_for_user(signal, None) is signal
    assert adjust_for_user(signal, UserSensitivityProfile.anonymous()) is signal


def test_unknown_and_mixed_case_factors():
    signal = classify(EnvironmentalReading(uv_index=10))
    adjusted = adjust_for_user(signal, profile("Skin ", "sleepy"))

    assert adjusted.brightness_boost == 30


def test_boost_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "brightness_boost", 50)
    signal = classify(EnvironmentalReading(pollen_index=12))

    assert adjust_for_user(signal, profile("allergy")).brightness_boost == 50
