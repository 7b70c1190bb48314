from __future__ import annotations
import copy
import math

import pytest

from ecotrace.questions import get_question
from ecotrace.scoring import (
    LOOKUP_TABLES,
    Category,
    FootprintResult,
    category_for,
    contributions,
    score,
)

# Lowest-impact answer for every question, one person
LOW_IMPACT_SINGLE = {
    "car_km": 0,
    "public_transport": 0,
    "home_size": 0,
    "energy_type": 1,
    "meat_consumption": 1,
    "local_food": 100,
    "shopping_habits": 1,
    "electronic_devices": 0,
    "household": 1,
}


def test_low_impact_single_person():
    result = score(LOW_IMPACT_SINGLE)
    assert isinstance(result, FootprintResult)
    # 0.5 + 0.5 + 0.3 + 0.3 + 1.5 = 3.1
    assert math.isclose(result.raw_tonnes, 3.1)
    assert result.footprint_tonnes == 3
    assert result.category is Category.EXCELLENT
    assert result.accent == "good"


def test_low_impact_couple_split_rounds_half_up():
    result = score({**LOW_IMPACT_SINGLE, "household": 2})
    assert math.isclose(result.raw_tonnes, 1.55)
    assert result.footprint_tonnes == 2


def test_long_commute_car_contribution():
    result = score({"car_km": 20000})
    assert math.isclose(result.contributions["car_travel"], 2.4)
    # car 2.4 + default home 1.6 + default devices 0.5 + baseline 1.5
    assert result.footprint_tonnes == 6


@pytest.mark.parametrize("household", [0, -2, None])
def test_household_guard_matches_single_person(household):
    answers = {**LOW_IMPACT_SINGLE, "household": household}
    assert score(answers) == score({**LOW_IMPACT_SINGLE, "household": 1})


def test_household_absent_defaults_to_one():
    answers = {k: v for k, v in LOW_IMPACT_SINGLE.items() if k != "household"}
    assert score(answers).footprint_tonnes == score(LOW_IMPACT_SINGLE).footprint_tonnes


def test_round_half_up_not_bankers():
    # 1.5 baseline + 0.5 renewable heating + 0.5 no meat = 2.5
    answers = {"car_km": 0, "home_size": 0, "electronic_devices": 0, "energy_type": 1, "meat_consumption": 1}
    result = score(answers)
    assert math.isclose(result.raw_tonnes, 2.5)
    assert result.footprint_tonnes == 3


def test_empty_answers_use_range_defaults():
    parts = contributions({})
    assert math.isclose(parts["car_travel"], 1.2)
    assert math.isclose(parts["home_size"], 1.6)
    assert math.isclose(parts["electronics"], 0.5)
    assert parts["public_transport"] == 0.0
    assert parts["heating_energy"] == 0.0
    assert parts["baseline"] == 1.5
    # 1.2 + 1.6 + 0.5 + 1.5 = 4.8
    assert score({}).footprint_tonnes == 5


def test_recorded_zero_is_not_replaced_by_default():
    assert contributions({"home_size": 0})["home_size"] == 0.0
    assert contributions({"car_km": 0})["car_travel"] == 0.0
    assert contributions({})["home_size"] > 0.0


def test_unmapped_codes_contribute_zero():
    parts = contributions({"public_transport": 7, "energy_type": 2.5, "local_food": 60})
    assert parts["public_transport"] == 0.0
    assert parts["heating_energy"] == 0.0
    assert parts["local_food"] == 0.0


def test_float_codes_hit_the_table():
    assert contributions({"meat_consumption": 4.0})["meat_consumption"] == 3.0


def test_contribution_order():
    assert list(contributions({})) == [
        "car_travel",
        "public_transport",
        "home_size",
        "heating_energy",
        "meat_consumption",
        "local_food",
        "shopping_habits",
        "electronics",
        "baseline",
    ]


def test_heavy_consumer_is_poor():
    answers = {
        "household": 1,
        "car_km": 40000,
        "public_transport": 0,
        "home_size": 200,
        "energy_type": 2,
        "meat_consumption": 4,
        "local_food": 25,
        "shopping_habits": 4,
        "electronic_devices": 15,
    }
    result = score(answers)
    # 4.8 + 0 + 4 + 3 + 3 + 1.2 + 2.5 + 1.5 + 1.5 = 21.5
    assert result.footprint_tonnes == 22
    assert result.category is Category.POOR
    assert result.accent == "bad"


def test_score_is_pure():
    answers = copy.deepcopy(LOW_IMPACT_SINGLE)
    first = score(answers)
    second = score(answers)
    assert first == second
    assert answers == LOW_IMPACT_SINGLE


def test_footprint_never_negative():
    result = score({"car_km": -100000, "household": 1})
    assert result.footprint_tonnes == 0
    assert isinstance(result.footprint_tonnes, int)


@pytest.mark.parametrize(
    "tonnes,expected",
    [
        (0, Category.EXCELLENT),
        (6, Category.EXCELLENT),
        (6.5, Category.EXCELLENT),
        (7, Category.MODERATE),
        (10, Category.MODERATE),
        (11, Category.POOR),
    ],
)
def test_category_thresholds(tonnes, expected):
    category, accent, message = category_for(tonnes)
    assert category is expected
    assert accent in {"good", "medium", "bad"}
    assert message


def test_every_option_has_an_impact():
    # lookup tables cover exactly the option codes the catalog offers
    for question_id, table in LOOKUP_TABLES.items():
        assert set(get_question(question_id).kind.values) == set(table), question_id


def test_to_dict():
    d = score(LOW_IMPACT_SINGLE).to_dict()
    assert d["footprint_tonnes"] == 3
    assert d["category"] == "Excellent"
    assert isinstance(d["recommendations"], list)
    assert set(d["contributions"]) == set(contributions({}))


@pytest.mark.parametrize("bad", ["25", True, False, float("nan"), [1]])
def test_non_numeric_choice_counts_as_unanswered(bad):
    answers = {**LOW_IMPACT_SINGLE, "local_food": bad, "public_transport": bad}
    parts = contributions(answers)
    assert parts["local_food"] == 0.0
    assert parts["public_transport"] == 0.0
    # an unanswered local_food still asks for local produce
    assert any("local and seasonal" in tip for tip in score(answers).recommendations)


@pytest.mark.parametrize("bad", ["20000", True, float("inf")])
def test_non_numeric_range_falls_back_to_default(bad):
    assert contributions({"car_km": bad}) == contributions({})
    assert score({"car_km": bad, "household": bad}) == score({})
