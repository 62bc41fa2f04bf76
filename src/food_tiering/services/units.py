"""Fixed unit conversion table for component amounts."""

from food_tiering.domain.components import KJ_PER_KCAL, ComponentLabel, Unit

_MASS_IN_MCG = {
    Unit.G: 1_000_000.0,
    Unit.MG: 1_000.0,
    Unit.MCG: 1.0,
}

_ENERGY_IN_KCAL = {
    Unit.KCAL: 1.0,
    Unit.KJ: 1.0 / KJ_PER_KCAL,
}

# International units are nutrient-specific; expressed in micrograms.
_IU_IN_MCG: dict[str, float] = {
    ComponentLabel.VITAMIN_A_RAE: 0.3,
    ComponentLabel.VITAMIN_D_D2_D3: 0.025,
    ComponentLabel.VITAMIN_E_ALPHA_TOCOPHEROL: 670.0,
}


def convert(
    amount: float, from_unit: Unit, to_unit: Unit, component: str | None = None
) -> float | None:
    """Convert an amount between units, or return None when impossible."""
    if from_unit is to_unit:
        return amount
    if from_unit in _ENERGY_IN_KCAL and to_unit in _ENERGY_IN_KCAL:
        return amount * _ENERGY_IN_KCAL[from_unit] / _ENERGY_IN_KCAL[to_unit]
    in_mcg = _to_mcg(amount, from_unit, component)
    if in_mcg is None:
        return None
    if to_unit is Unit.IU:
        factor = _IU_IN_MCG.get(component) if component else None
        return in_mcg / factor if factor else None
    if to_unit in _MASS_IN_MCG:
        return in_mcg / _MASS_IN_MCG[to_unit]
    return None


def is_convertible(
    from_unit: Unit, to_unit: Unit, component: str | None = None
) -> bool:
    return convert(1.0, from_unit, to_unit, component) is not None


def _to_mcg(amount: float, unit: Unit, component: str | None) -> float | None:
    if unit in _MASS_IN_MCG:
        return amount * _MASS_IN_MCG[unit]
    if unit is Unit.IU and component:
        factor = _IU_IN_MCG.get(component)
        if factor:
            return amount * factor
    return None
