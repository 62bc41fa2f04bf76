"""Macronutrient archetype detection."""

from food_tiering.domain.components import ComponentLabel, FoodProfile, Unit
from food_tiering.domain.tiering import Archetype
from food_tiering.services.units import convert

_KCAL_PER_G = {
    ComponentLabel.CARBOHYDRATE: 4.0,
    ComponentLabel.PROTEIN: 4.0,
    ComponentLabel.FAT: 9.0,
}


def detect_archetype(profile: FoodProfile) -> Archetype:
    """Classify a food by where its macronutrient calories come from."""
    carbs = _grams_per_100g(profile, ComponentLabel.CARBOHYDRATE)
    protein = _grams_per_100g(profile, ComponentLabel.PROTEIN)
    fat = _grams_per_100g(profile, ComponentLabel.FAT)

    c_kcal = carbs * _KCAL_PER_G[ComponentLabel.CARBOHYDRATE]
    p_kcal = protein * _KCAL_PER_G[ComponentLabel.PROTEIN]
    f_kcal = fat * _KCAL_PER_G[ComponentLabel.FAT]
    total = c_kcal + p_kcal + f_kcal
    if not total:
        return Archetype.MIXED

    c_share = c_kcal / total
    p_share = p_kcal / total
    f_share = f_kcal / total

    if protein >= 20 and p_share >= 0.4:
        return Archetype.PROTEIN
    if protein >= 12 and carbs >= 20 and p_share >= 0.2 and c_share >= 0.2:
        return Archetype.MIXED
    if c_share >= 0.6:
        return Archetype.CARB
    if f_share >= 0.6 or fat >= 30:
        return Archetype.FAT
    return Archetype.MIXED


def _grams_per_100g(profile: FoodProfile, label: ComponentLabel) -> float:
    if not profile.has_serving_basis:
        return 0.0
    component = profile.find(label)
    if component is None or component.amount is None:
        return 0.0
    grams = convert(component.amount, component.unit, Unit.G, label)
    if grams is None:
        return 0.0
    return grams / profile.serving_total_grams * 100
