"""Domain models for food tier results."""

from dataclasses import dataclass, field
from enum import StrEnum


class Tier(StrEnum):
    """Food quality tier, S best and F worst."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


class ReasonKind(StrEnum):
    """Direction of a reason."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    INFO = "info"


class ReasonCode(StrEnum):
    """Stable reason codes for presentation layers."""

    BENEFICIAL_NUTRIENT = "BENEFICIAL_NUTRIENT"
    HARMFUL_NUTRIENT = "HARMFUL_NUTRIENT"
    CALORIE_DENSITY = "CALORIE_DENSITY"
    MISSING_AMOUNT = "MISSING_AMOUNT"
    UNRECOGNIZED_COMPONENT = "UNRECOGNIZED_COMPONENT"
    UNCONVERTIBLE_UNIT = "UNCONVERTIBLE_UNIT"
    DUPLICATE_COMPONENT = "DUPLICATE_COMPONENT"
    MISSING_SERVING_BASIS = "MISSING_SERVING_BASIS"
    MISSING_CALORIES = "MISSING_CALORIES"
    NO_NUTRIENT_DATA = "NO_NUTRIENT_DATA"
    NO_SIGNIFICANT_SIGNALS = "NO_SIGNIFICANT_SIGNALS"


class Archetype(StrEnum):
    """Dominant macronutrient class of a food."""

    PROTEIN = "protein"
    CARB = "carb"
    FAT = "fat"
    MIXED = "mixed"


@dataclass(frozen=True)
class TierReason:
    """One explanation attached to a tier result."""

    kind: ReasonKind
    code: ReasonCode
    message: str
    component: str | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "code": self.code.value,
            "component": self.component,
            "message": self.message,
        }


@dataclass(frozen=True)
class FoodTierResult:
    """Quality assessment of a food or meal."""

    tier: Tier
    score: float
    reasons: tuple[TierReason, ...] = field(default_factory=tuple)
    is_estimate: bool = False
    archetype: Archetype = Archetype.MIXED

    def as_dict(self) -> dict[str, object]:
        """Plain structured representation of the result."""
        return {
            "tier": self.tier.value,
            "score": self.score,
            "reasons": [reason.as_dict() for reason in self.reasons],
            "isEstimate": self.is_estimate,
            "archetype": self.archetype.value,
        }
