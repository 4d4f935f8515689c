"""
Unit tests for dominant pollen selection.
"""

from lumee.domain.pollen import select_dominant_pollen


def forecast(*types):
    return {"dailyInfo": [{"pollenTypeInfo": list(types)}]}


def pollen(code, value=None, category=None, in_season=None):
    entry = {"code": code, "displayName": code.lower()}
    if value is not None:
        entry["indexInfo"] = {"value": value, "category": category or "Low"}
    if in_season is not None:
        entry["inSeason"] = in_season
    return entry


class TestSelection:

    def test_highest_severity_wins(self, pollen_payload, fixed_time):
        obs = select_dominant_pollen(pollen_payload, observed_at=fixed_time)

        assert obs.type == "TREE"
        assert obs.value == 4
        assert obs.category == "High"
        assert obs.in_season is True
        assert obs.display_name == "나무"
        assert obs.observed_at == fixed_time

    def test_max_in_middle(self):
        obs = select_dominant_pollen(forecast(pollen("GRASS", 2), pollen("TREE", 5), pollen("WEED", 1)))
        assert obs.type == "TREE"
        assert obs.value == 5

    def test_tie_keeps_first(self):
        obs = select_dominant_pollen(forecast(pollen("GRASS", 5), pollen("TREE", 5), pollen("WEED", 1)))
        assert obs.type == "GRASS"

    def test_missing_severity_counts_as_zero(self):
        obs = select_dominant_pollen(forecast(pollen("GRASS"), pollen("TREE", 1)))
        assert obs.type == "TREE"

    def test_only_first_day_considered(self):
        payload = {"dailyInfo": [
            {"pollenTypeInfo": [pollen("GRASS", 1)]},
            {"pollenTypeInfo": [pollen("TREE", 5)]},
        ]}
        assert select_dominant_pollen(payload).type == "GRASS"


class TestDefaults:

    def test_no_index_info_anywhere(self):
        obs = select_dominant_pollen(forecast(pollen("GRASS"), pollen("TREE"), pollen("WEED")))

        assert obs.type == "GRASS"
        assert obs.value == 0
        assert obs.category == "Very low"
        assert obs.in_season is True

    def test_in_season_false_is_kept(self):
        obs = select_dominant_pollen(forecast(pollen("WEED", 3, "Moderate", in_season=False)))
        assert obs.in_season is False
        assert obs.category == "Moderate"

    def test_observed_at_defaults_to_now(self):
        obs = select_dominant_pollen(forecast(pollen("GRASS", 1)))
        assert obs.observed_at.tzinfo is not None


class TestInvalid:

    def test_no_daily_info(self):
        assert select_dominant_pollen({}) is None
        assert select_dominant_pollen({"dailyInfo": []}) is None
        assert select_dominant_pollen({"dailyInfo": "today"}) is None

    def test_no_pollen_types(self):
        assert select_dominant_pollen({"dailyInfo": [{}]}) is None
        assert select_dominant_pollen({"dailyInfo": [{"pollenTypeInfo": []}]}) is None
        assert select_dominant_pollen({"dailyInfo": [{"pollenTypeInfo": {"code": "GRASS"}}]}) is None

    def test_not_an_object(self):
        assert select_dominant_pollen(None) is None
        assert select_dominant_pollen([1, 2]) is None
