"""Tests for the food tiering engine."""

import logging

import pytest

from food_tiering.domain.components import FoodProfile, Unit
from food_tiering.domain.policy import TieringPolicy
from food_tiering.domain.tiering import (
    Archetype,
    ReasonCode,
    ReasonKind,
    Tier,
)
from food_tiering.services.meals import combine_profiles
from food_tiering.services.tiering import TieringService
from tests.conftest import component, food


def _codes(result) -> list[tuple[ReasonCode, str | None]]:
    return [(reason.code, reason.component) for reason in result.reasons]


def test_worked_example_lands_in_e_band(service, example_reference) -> None:
    profile = food(
        component("PROTEIN", Unit.G, 20),
        component("SUGAR", Unit.G, 30),
        component("SODIUM", Unit.MG, 600),
    )

    result = service.evaluate(profile, example_reference)

    assert result.score == pytest.approx(22.47, abs=0.01)
    assert result.tier == Tier.E
    assert result.is_estimate is False
    assert [(r.kind, r.component) for r in result.reasons] == [
        (ReasonKind.NEGATIVE, "SUGAR"),
        (ReasonKind.POSITIVE, "PROTEIN"),
        (ReasonKind.NEGATIVE, "SODIUM"),
        (ReasonKind.NEGATIVE, None),
    ]
    assert result.reasons[0].message == "High in sugar (120% of daily limit per 100 g)."
    assert result.reasons[1].message == (
        "Provides protein (40% of daily intake per 100 g)."
    )
    assert result.archetype == Archetype.PROTEIN


def test_empty_components_is_neutral_estimate(service, example_reference) -> None:
    result = service.evaluate(FoodProfile(), example_reference)

    assert result.score == 50
    assert result.tier == Tier.C
    assert result.is_estimate is True
    assert len(result.reasons) == 1
    assert result.reasons[0].kind == ReasonKind.INFO
    assert result.reasons[0].code == ReasonCode.NO_NUTRIENT_DATA


def test_missing_serving_grams_falls_back_to_per_serving(
    service, example_reference
) -> None:
    profile = food(component("PROTEIN", Unit.G, 20), grams=None, calories=100)

    result = service.evaluate(profile, example_reference)

    assert result.is_estimate is True
    assert _codes(result) == [
        (ReasonCode.BENEFICIAL_NUTRIENT, "PROTEIN"),
        (ReasonCode.MISSING_SERVING_BASIS, None),
    ]
    assert "per serving" in result.reasons[0].message


def test_zero_serving_grams_is_treated_as_unknown(service, example_reference) -> None:
    with_zero = service.evaluate(
        food(component("PROTEIN", Unit.G, 20), grams=0), example_reference
    )
    without = service.evaluate(
        food(component("PROTEIN", Unit.G, 20), grams=None), example_reference
    )

    assert with_zero == without
    assert with_zero.is_estimate is True


def test_missing_serving_is_estimate_even_with_complete_data(
    service, default_reference
) -> None:
    profile = food(
        component("ENERGY", Unit.KCAL, 120),
        component("PROTEIN", Unit.G, 10),
        component("FIBER", Unit.G, 4),
        component("SUGAR", Unit.G, 2),
        grams=None,
    )

    assert service.evaluate(profile, default_reference).is_estimate is True


def test_missing_calories_sets_estimate(service, example_reference) -> None:
    profile = food(component("PROTEIN", Unit.G, 20), calories=None)

    result = service.evaluate(profile, example_reference)

    assert result.is_estimate is True
    assert (ReasonCode.MISSING_CALORIES, None) in _codes(result)


def test_energy_component_provides_calorie_basis(service, default_reference) -> None:
    profile = food(
        component("ENERGY", Unit.KCAL, 150),
        component("PROTEIN", Unit.G, 20),
        calories=None,
    )

    result = service.evaluate(profile, default_reference)

    assert result.is_estimate is False
    assert all(reason.kind != ReasonKind.INFO for reason in result.reasons)


def test_missing_amount_with_weight_is_reported(service, example_reference) -> None:
    profile = food(
        component("PROTEIN", Unit.G, None),
        component("SUGAR", Unit.G, 10),
    )

    result = service.evaluate(profile, example_reference)

    assert result.is_estimate is True
    assert _codes(result) == [
        (ReasonCode.HARMFUL_NUTRIENT, "SUGAR"),
        (ReasonCode.CALORIE_DENSITY, None),
        (ReasonCode.MISSING_AMOUNT, "PROTEIN"),
    ]
    assert result.reasons[2].message == "Amount of protein is unknown."


def test_missing_amount_without_weight_is_ignored(service, example_reference) -> None:
    profile = food(
        component("WATER", Unit.G, None),
        component("SUGAR", Unit.G, 10),
    )

    result = service.evaluate(profile, example_reference)

    assert result.is_estimate is False
    assert _codes(result) == [
        (ReasonCode.HARMFUL_NUTRIENT, "SUGAR"),
        (ReasonCode.CALORIE_DENSITY, None),
    ]


def test_unrecognized_component_is_ignored(service, example_reference) -> None:
    profile = food(component("CAFFEINE", Unit.MG, 80))

    result = service.evaluate(profile, example_reference)

    neutral = service.evaluate(
        food(component("WATER", Unit.G, 50)), example_reference
    )
    assert result.score == neutral.score
    assert result.tier == Tier.C
    assert result.is_estimate is False
    assert _codes(result) == [
        (ReasonCode.CALORIE_DENSITY, None),
        (ReasonCode.UNRECOGNIZED_COMPONENT, "CAFFEINE"),
    ]
    assert result.reasons[1].kind == ReasonKind.INFO


def test_unconvertible_unit_is_skipped(service, example_reference) -> None:
    profile = food(
        component("PROTEIN", Unit.KCAL, 80),
        component("SUGAR", Unit.G, 10),
    )

    result = service.evaluate(profile, example_reference)

    assert result.is_estimate is True
    assert _codes(result) == [
        (ReasonCode.HARMFUL_NUTRIENT, "SUGAR"),
        (ReasonCode.CALORIE_DENSITY, None),
        (ReasonCode.UNCONVERTIBLE_UNIT, "PROTEIN"),
    ]
    only_sugar = service.evaluate(food(component("SUGAR", Unit.G, 10)), example_reference)
    assert result.score == only_sugar.score


def test_units_are_converted_to_reference_unit(service, example_reference) -> None:
    in_mg = service.evaluate(
        food(component("SODIUM", Unit.MG, 600)), example_reference
    )
    in_g = service.evaluate(food(component("SODIUM", Unit.G, 0.6)), example_reference)

    assert in_g.score == pytest.approx(in_mg.score)
    assert in_g.tier == in_mg.tier


def test_duplicate_component_uses_first_listing(service, example_reference) -> None:
    duplicated = food(
        component("SUGAR", Unit.G, 10),
        component("SUGAR", Unit.G, 50),
    )

    result = service.evaluate(duplicated, example_reference)
    single = service.evaluate(food(component("SUGAR", Unit.G, 10)), example_reference)

    assert result.score == single.score
    assert _codes(result) == [
        (ReasonCode.HARMFUL_NUTRIENT, "SUGAR"),
        (ReasonCode.CALORIE_DENSITY, None),
        (ReasonCode.DUPLICATE_COMPONENT, "SUGAR"),
    ]


def test_reasons_are_capped_and_sorted_by_impact(service, default_reference) -> None:
    profile = food(
        component("IRON", Unit.MG, 9),
        component("VITAMIN_C", Unit.MG, 90),
        component("FIBER", Unit.G, 10),
        component("SATURATED", Unit.G, 8),
        component("SODIUM", Unit.MG, 1000),
        component("PROTEIN", Unit.G, 30),
        component("SUGAR", Unit.G, 40),
    )

    result = service.evaluate(profile, default_reference)

    assert [reason.component for reason in result.reasons] == [
        "SUGAR",
        "PROTEIN",
        "SODIUM",
        "SATURATED",
        "FIBER",
    ]


def test_capped_estimate_keeps_its_cause(service, default_reference) -> None:
    components = (
        component("PROTEIN", Unit.G, 30),
        component("FIBER", Unit.G, 10),
        component("SUGAR", Unit.G, 40),
        component("SODIUM", Unit.MG, 1000),
        component("SATURATED", Unit.G, 8),
        component("VITAMIN_C", Unit.MG, None),
    )

    per_serving = service.evaluate(food(*components, grams=None), default_reference)
    per_100g = service.evaluate(food(*components), default_reference)

    assert per_serving.is_estimate is True
    assert _codes(per_serving) == [
        (ReasonCode.HARMFUL_NUTRIENT, "SUGAR"),
        (ReasonCode.BENEFICIAL_NUTRIENT, "PROTEIN"),
        (ReasonCode.HARMFUL_NUTRIENT, "SODIUM"),
        (ReasonCode.HARMFUL_NUTRIENT, "SATURATED"),
        (ReasonCode.MISSING_SERVING_BASIS, None),
    ]
    assert per_100g.is_estimate is True
    assert _codes(per_100g)[-1] == (ReasonCode.MISSING_AMOUNT, "VITAMIN_C")
    assert len(per_100g.reasons) == 5


def test_single_reason_cap_shows_estimate_cause(default_reference) -> None:
    service = TieringService(policy=TieringPolicy(max_reasons=1))
    profile = food(
        component("SUGAR", Unit.G, 40),
        component("PROTEIN", Unit.G, None),
    )

    result = service.evaluate(profile, default_reference)

    assert _codes(result) == [(ReasonCode.MISSING_AMOUNT, "PROTEIN")]


def test_equal_impact_is_ordered_by_name(service, example_reference) -> None:
    profile = food(
        component("PROTEIN", Unit.G, 60),
        component("FIBER", Unit.G, 30),
    )

    result = service.evaluate(profile, example_reference)

    assert [reason.component for reason in result.reasons] == [
        "FIBER",
        "PROTEIN",
        None,
    ]
    assert result.reasons[0].message.startswith("Excellent source of fiber")


def test_small_contributions_produce_fallback_reason(
    service, example_reference
) -> None:
    profile = food(component("SODIUM", Unit.MG, 100), calories=20)

    result = service.evaluate(profile, example_reference)

    assert result.tier == Tier.C
    assert result.score < 50
    assert _codes(result) == [(ReasonCode.NO_SIGNIFICANT_SIGNALS, None)]


def test_info_reasons_follow_basis_then_component_order(
    service, example_reference
) -> None:
    profile = food(
        component("PROTEIN", Unit.G, None),
        component("CAFFEINE", Unit.MG, 80),
        grams=None,
        calories=None,
    )

    result = service.evaluate(profile, example_reference)

    assert _codes(result) == [
        (ReasonCode.MISSING_SERVING_BASIS, None),
        (ReasonCode.MISSING_CALORIES, None),
        (ReasonCode.UNRECOGNIZED_COMPONENT, "CAFFEINE"),
        (ReasonCode.MISSING_AMOUNT, "PROTEIN"),
    ]


def test_harmful_ratio_is_capped(service, example_reference) -> None:
    twice = service.evaluate(food(component("SUGAR", Unit.G, 50)), example_reference)
    tenfold = service.evaluate(
        food(component("SUGAR", Unit.G, 250)), example_reference
    )

    assert twice.score == tenfold.score
    assert tenfold.tier == Tier.F
    assert tenfold.score >= 0
    assert tenfold.reasons[0].message.startswith("High in sugar (1000%")


def test_beneficial_credit_saturates_at_daily_intake(
    service, example_reference
) -> None:
    enough = service.evaluate(
        food(component("PROTEIN", Unit.G, 50)), example_reference
    )
    more = service.evaluate(food(component("PROTEIN", Unit.G, 90)), example_reference)

    assert enough.score == more.score


def test_nutrient_dense_food_reaches_top_tier(service, default_reference) -> None:
    profile = food(
        component("PROTEIN", Unit.G, 60),
        component("FIBER", Unit.G, 30),
        component("VITAMIN_C", Unit.MG, 100),
        component("VITAMIN_A_RAE", Unit.MCG, 1000),
        component("IRON", Unit.MG, 20),
        component("POTASSIUM", Unit.MG, 5000),
        component("OMEGA3", Unit.G, 2),
    )

    result = service.evaluate(profile, default_reference)

    assert result.tier == Tier.S
    assert result.score <= 100
    assert len(result.reasons) == 5
    assert all(reason.kind == ReasonKind.POSITIVE for reason in result.reasons)


def test_evaluation_is_deterministic(service, default_reference) -> None:
    profile = food(
        component("SUGAR", Unit.G, 12),
        component("PROTEIN", Unit.G, 8),
        component("SODIUM", Unit.MG, 300),
        component("VITAMIN_C", Unit.MG, None),
        component("CAFFEINE", Unit.MG, 40),
    )

    first = service.evaluate(profile, default_reference)
    second = TieringService().evaluate(profile, default_reference)

    assert first == second
    assert first.as_dict() == second.as_dict()


@pytest.mark.parametrize(
    ("name", "unit", "direction"),
    [
        ("PROTEIN", Unit.G, 1),
        ("FIBER", Unit.G, 1),
        ("SUGAR", Unit.G, -1),
        ("SODIUM", Unit.MG, -1),
    ],
)
def test_score_is_monotone_in_component_amount(
    service, example_reference, name, unit, direction
) -> None:
    scale = 100 if unit is Unit.MG else 1
    other = "SUGAR" if name == "PROTEIN" else "PROTEIN"
    scores = [
        service.evaluate(
            food(
                component(other, Unit.G, 10),
                component(name, unit, step * 5 * scale),
            ),
            example_reference,
        ).score
        for step in range(15)
    ]

    pairs = zip(scores, scores[1:], strict=False)
    if direction > 0:
        assert all(later >= earlier for earlier, later in pairs)
    else:
        assert all(later <= earlier for earlier, later in pairs)


def test_custom_policy_changes_tiers(example_reference) -> None:
    policy = TieringPolicy(max_reasons=1, score_precision=0)
    service = TieringService(policy=policy)
    profile = food(
        component("PROTEIN", Unit.G, 20),
        component("SUGAR", Unit.G, 30),
        component("SODIUM", Unit.MG, 600),
    )

    result = service.evaluate(profile, example_reference)

    assert result.score == 22
    assert len(result.reasons) == 1
    assert result.reasons[0].component == "SUGAR"


def test_evaluate_meal_tiers_combined_profile(service, example_reference) -> None:
    breakfast = [
        food(component("PROTEIN", Unit.G, 20), component("SUGAR", Unit.G, 5)),
        food(component("SUGAR", Unit.G, 25)),
    ]

    result = service.evaluate_meal(breakfast, example_reference)

    assert result == service.evaluate(combine_profiles(breakfast), example_reference)
    assert [reason.component for reason in result.reasons] == [
        "SUGAR",
        "PROTEIN",
        None,
    ]


def test_debug_logs_result(example_reference, caplog) -> None:
    service = TieringService(debug=True)

    with caplog.at_level(logging.INFO, logger="food_tiering"):
        service.evaluate(food(component("CAFFEINE", Unit.MG, 1)), example_reference)

    assert "Tiering skipped unrecognized component CAFFEINE" in caplog.text
    assert "Tiering result: tier=C" in caplog.text


def test_worked_example_without_calorie_density(example_reference) -> None:
    service = TieringService(policy=TieringPolicy(calorie_density_weight=0))
    profile = food(
        component("PROTEIN", Unit.G, 20),
        component("SUGAR", Unit.G, 30),
        component("SODIUM", Unit.MG, 600),
    )

    result = service.evaluate(profile, example_reference)

    assert result.score == pytest.approx(25.19, abs=0.01)
    assert result.tier == Tier.E
    assert ReasonCode.CALORIE_DENSITY not in [reason.code for reason in result.reasons]


def test_calorie_dense_food_is_penalized(service, example_reference) -> None:
    light = service.evaluate(
        food(component("PROTEIN", Unit.G, 10), calories=40), example_reference
    )
    dense = service.evaluate(
        food(component("PROTEIN", Unit.G, 10), calories=800), example_reference
    )

    assert dense.score < light.score
    assert _codes(dense)[0] == (ReasonCode.CALORIE_DENSITY, None)
    assert dense.reasons[0].kind == ReasonKind.NEGATIVE
    assert dense.reasons[0].message == "High calorie density (800 kcal per 100 g)."
    assert ReasonCode.CALORIE_DENSITY not in [reason.code for reason in light.reasons]


def test_calorie_density_is_capped(service, example_reference) -> None:
    at_cap = service.evaluate(
        food(component("SUGAR", Unit.G, 5), calories=800), example_reference
    )
    beyond = service.evaluate(
        food(component("SUGAR", Unit.G, 5), calories=900), example_reference
    )

    assert at_cap.score == beyond.score


def test_calorie_density_uses_energy_component(service, default_reference) -> None:
    profile = food(
        component("ENERGY", Unit.KJ, 836.8),
        component("PROTEIN", Unit.G, 10),
        calories=None,
    )

    result = service.evaluate(profile, default_reference)

    assert result.is_estimate is False
    assert result.reasons[-1].message == (
        "Moderate calorie density (200 kcal per 100 g)."
    )


def test_calorie_density_needs_serving_weight(service, example_reference) -> None:
    result = service.evaluate(
        food(component("PROTEIN", Unit.G, 10), grams=None, calories=800),
        example_reference,
    )

    assert ReasonCode.CALORIE_DENSITY not in [reason.code for reason in result.reasons]


def test_score_does_not_rise_with_calorie_density(service, example_reference) -> None:
    scores = [
        service.evaluate(
            food(component("PROTEIN", Unit.G, 10), calories=step * 60),
            example_reference,
        ).score
        for step in range(16)
    ]

    assert all(
        later <= earlier for earlier, later in zip(scores, scores[1:], strict=False)
    )
