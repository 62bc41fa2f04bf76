"""Domain models for food nutrient components."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from food_tiering.domain.errors import InvalidInputError


class ComponentLabel(StrEnum):
    """Known nutrient component labels."""

    ENERGY = "ENERGY"
    WATER = "WATER"
    CARBOHYDRATE = "CARBOHYDRATE"
    STARCH = "STARCH"
    SUGAR = "SUGAR"
    FIBER = "FIBER"
    FAT = "FAT"
    SATURATED = "SATURATED"
    TRANS = "TRANS"
    MONOUNSATURATED = "MONOUNSATURATED"
    POLYUNSATURATED = "POLYUNSATURATED"
    CHOLESTEROL = "CHOLESTEROL"
    OMEGA6 = "OMEGA6"
    OMEGA3 = "OMEGA3"
    OMEGA3_EPA = "OMEGA3_EPA"
    OMEGA3_DHA = "OMEGA3_DHA"
    PROTEIN = "PROTEIN"
    VITAMIN_A_RAE = "VITAMIN_A_RAE"
    VITAMIN_A_BETA_CAROTENE = "VITAMIN_A_BETA_CAROTENE"
    VITAMIN_A_LUTEIN_ZEAXANTHIN = "VITAMIN_A_LUTEIN_ZEAXANTHIN"
    VITAMIN_A_LYCOPENE = "VITAMIN_A_LYCOPENE"
    VITAMIN_D_D2_D3 = "VITAMIN_D_D2_D3"
    VITAMIN_E_ALPHA_TOCOPHEROL = "VITAMIN_E_ALPHA_TOCOPHEROL"
    VITAMIN_K = "VITAMIN_K"
    VITAMIN_B1_THIAMINE = "VITAMIN_B1_THIAMINE"
    VITAMIN_B2_RIBOFLAVIN = "VITAMIN_B2_RIBOFLAVIN"
    VITAMIN_B3_NIACIN = "VITAMIN_B3_NIACIN"
    VITAMIN_B5_PANTOTHENIC_ACID = "VITAMIN_B5_PANTOTHENIC_ACID"
    VITAMIN_B6 = "VITAMIN_B6"
    VITAMIN_B7_BIOTIN = "VITAMIN_B7_BIOTIN"
    VITAMIN_B9_FOLATE_DFE = "VITAMIN_B9_FOLATE_DFE"
    VITAMIN_B12 = "VITAMIN_B12"
    VITAMIN_C = "VITAMIN_C"
    CHOLINE = "CHOLINE"
    HISTIDINE = "HISTIDINE"
    ISOLEUCINE = "ISOLEUCINE"
    LEUCINE = "LEUCINE"
    LYSINE = "LYSINE"
    THREONINE = "THREONINE"
    TRYPTOPHAN = "TRYPTOPHAN"
    VALINE = "VALINE"
    METHIONINE_CYSTEINE_TOTAL = "METHIONINE_CYSTEINE_TOTAL"
    PHENYLALANINE_TYROSINE_TOTAL = "PHENYLALANINE_TYROSINE_TOTAL"
    CALCIUM = "CALCIUM"
    PHOSPHORUS = "PHOSPHORUS"
    MAGNESIUM = "MAGNESIUM"
    SODIUM = "SODIUM"
    POTASSIUM = "POTASSIUM"
    IRON = "IRON"
    ZINC = "ZINC"
    COPPER = "COPPER"
    MANGANESE = "MANGANESE"
    IODINE = "IODINE"
    SELENIUM = "SELENIUM"


class Unit(StrEnum):
    """Measurement units for component amounts."""

    KCAL = "KCAL"
    KJ = "KJ"
    G = "G"
    MG = "MG"
    MCG = "MCG"
    IU = "IU"


KJ_PER_KCAL = 4.184


_DISPLAY_NAMES: dict[str, str] = {
    ComponentLabel.SATURATED: "saturated fat",
    ComponentLabel.TRANS: "trans fat",
    ComponentLabel.MONOUNSATURATED: "monounsaturated fat",
    ComponentLabel.POLYUNSATURATED: "polyunsaturated fat",
    ComponentLabel.OMEGA6: "omega-6",
    ComponentLabel.OMEGA3: "omega-3",
    ComponentLabel.OMEGA3_EPA: "omega-3 (EPA)",
    ComponentLabel.OMEGA3_DHA: "omega-3 (DHA)",
    ComponentLabel.VITAMIN_A_RAE: "vitamin A",
    ComponentLabel.VITAMIN_A_BETA_CAROTENE: "beta-carotene",
    ComponentLabel.VITAMIN_A_LUTEIN_ZEAXANTHIN: "lutein + zeaxanthin",
    ComponentLabel.VITAMIN_A_LYCOPENE: "lycopene",
    ComponentLabel.VITAMIN_D_D2_D3: "vitamin D",
    ComponentLabel.VITAMIN_E_ALPHA_TOCOPHEROL: "vitamin E",
    ComponentLabel.VITAMIN_K: "vitamin K",
    ComponentLabel.VITAMIN_B1_THIAMINE: "vitamin B1",
    ComponentLabel.VITAMIN_B2_RIBOFLAVIN: "vitamin B2",
    ComponentLabel.VITAMIN_B3_NIACIN: "niacin (B3)",
    ComponentLabel.VITAMIN_B5_PANTOTHENIC_ACID: "vitamin B5",
    ComponentLabel.VITAMIN_B6: "vitamin B6",
    ComponentLabel.VITAMIN_B7_BIOTIN: "biotin (B7)",
    ComponentLabel.VITAMIN_B9_FOLATE_DFE: "folate (B9)",
    ComponentLabel.VITAMIN_B12: "vitamin B12",
    ComponentLabel.VITAMIN_C: "vitamin C",
    ComponentLabel.METHIONINE_CYSTEINE_TOTAL: "methionine + cysteine",
    ComponentLabel.PHENYLALANINE_TYROSINE_TOTAL: "phenylalanine + tyrosine",
}


def display_name(name: str) -> str:
    """Return a human-readable name for a component label."""
    return _DISPLAY_NAMES.get(name) or name.replace("_", " ").lower()


def parse_unit(raw: "str | Unit") -> Unit:
    """Parse a unit code, rejecting unknown values."""
    try:
        return Unit(str(raw).strip().upper())
    except ValueError as exc:
        raise InvalidInputError(f"Unknown unit: {raw!r}") from exc


def _check_non_negative(value: float | None, field_name: str) -> float | None:
    if value is None:
        return None
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{field_name} must be a finite non-negative number")
    return float(value)


@dataclass(frozen=True)
class ComponentAmount:
    """A nutrient component listed on a food.

    ``amount`` is ``None`` when the component is listed but its quantity is
    unknown. A component that is not listed at all is simply absent from
    ``FoodProfile.components``.
    """

    name: str
    unit: Unit
    amount: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "unit", parse_unit(self.unit))
        object.__setattr__(
            self, "amount", _check_non_negative(self.amount, f"{self.name} amount")
        )

    @property
    def is_known(self) -> bool:
        """Whether the component carries a quantity."""
        return self.amount is not None


@dataclass(frozen=True)
class FoodProfile:
    """Nutritional profile of one serving of a food or meal."""

    serving_total_grams: float | None = None
    calorie_amount: float | None = None
    components: tuple[ComponentAmount, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "serving_total_grams",
            _check_non_negative(self.serving_total_grams, "serving_total_grams"),
        )
        object.__setattr__(
            self,
            "calorie_amount",
            _check_non_negative(self.calorie_amount, "calorie_amount"),
        )
        object.__setattr__(self, "components", tuple(self.components))

    @classmethod
    def of(
        cls,
        components: Iterable[ComponentAmount],
        serving_total_grams: float | None = None,
        calorie_amount: float | None = None,
    ) -> "FoodProfile":
        """Build a profile from any iterable of components."""
        return cls(
            serving_total_grams=serving_total_grams,
            calorie_amount=calorie_amount,
            components=tuple(components),
        )

    def find(self, name: str) -> ComponentAmount | None:
        """Return the first listed component with the given name."""
        for component in self.components:
            if component.name == name:
                return component
        return None

    @property
    def has_serving_basis(self) -> bool:
        """Whether amounts can be normalised per 100 g."""
        return bool(self.serving_total_grams)

    @property
    def calories(self) -> float | None:
        """Effective kcal per serving, preferring a listed ENERGY value."""
        energy = self.find(ComponentLabel.ENERGY)
        if energy is not None and energy.amount is not None:
            if energy.unit is Unit.KCAL:
                return energy.amount
            if energy.unit is Unit.KJ:
                return energy.amount / KJ_PER_KCAL
        return self.calorie_amount
