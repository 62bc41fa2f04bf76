"""Meal aggregation of several food profiles."""

from collections.abc import Iterable
from dataclasses import dataclass

from food_tiering.domain.components import (
    ComponentAmount,
    ComponentLabel,
    FoodProfile,
    Unit,
)
from food_tiering.services.units import convert


@dataclass
class _Total:
    """Running total for one component across the foods of a meal."""

    unit: Unit
    amount: float | None


def combine_profiles(profiles: Iterable[FoodProfile]) -> FoodProfile:
    """Sum food profiles into a single meal profile.

    Grams are summed only when every food reports them. The meal calorie
    amount sums each food's effective calories, so one food with no calorie
    basis makes it unknown, and the ENERGY total is only known when every
    food lists ENERGY. A component listed without an amount, or in a unit
    that cannot be added to its first listing, makes the meal amount unknown.
    Other components that a food does not list count as zero for that food.
    """
    foods = list(profiles)
    totals: dict[str, _Total] = {}
    for food in foods:
        seen: set[str] = set()
        for component in food.components:
            if component.name in seen:
                continue
            seen.add(component.name)
            total = totals.get(component.name)
            if total is None:
                totals[component.name] = _Total(component.unit, component.amount)
                continue
            if total.amount is None:
                continue
            if not component.is_known:
                total.amount = None
                continue
            converted = convert(
                component.amount, component.unit, total.unit, component.name
            )
            total.amount = None if converted is None else total.amount + converted

    energy = totals.get(ComponentLabel.ENERGY)
    if energy is not None and any(
        food.find(ComponentLabel.ENERGY) is None for food in foods
    ):
        energy.amount = None

    return FoodProfile.of(
        (
            ComponentAmount(name=name, unit=total.unit, amount=total.amount)
            for name, total in totals.items()
        ),
        serving_total_grams=_sum_known(food.serving_total_grams for food in foods),
        calorie_amount=_sum_known(food.calories for food in foods),
    )


def _sum_known(values: Iterable[float | None]) -> float | None:
    collected = list(values)
    if not collected or any(value is None for value in collected):
        return None
    return sum(collected)
