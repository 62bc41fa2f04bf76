"""Scoring policy constants for the tiering engine."""

import math
from dataclasses import dataclass, field

from food_tiering.domain.errors import InvalidInputError
from food_tiering.domain.tiering import Tier

DEFAULT_THRESHOLDS: tuple[tuple[Tier, float], ...] = (
    (Tier.S, 90.0),
    (Tier.A, 75.0),
    (Tier.B, 60.0),
    (Tier.C, 45.0),
    (Tier.D, 30.0),
    (Tier.E, 15.0),
)


def score_to_tier(
    score: float, thresholds: tuple[tuple[Tier, float], ...] = DEFAULT_THRESHOLDS
) -> Tier:
    """Map a 0-100 score onto a tier using inclusive lower bounds."""
    for tier, minimum in thresholds:
        if score >= minimum:
            return tier
    return Tier.F


@dataclass(frozen=True)
class TieringPolicy:
    """Tunable constants of the scoring algorithm.

    The composite contribution sum is squashed with a logistic curve
    ``100 / (1 + exp(-(total - center) / scale))``, so a food whose
    contributions cancel out lands on 50.

    Calorie density (kcal per 100 g) is scored like a harmful nutrient whose
    daily limit is ``calorie_density_limit``.
    """

    center: float = 0.0
    scale: float = 1.0
    ratio_cap: float = 2.0
    min_impact: float = 0.05
    max_reasons: int = 5
    score_precision: int = 2
    empty_score: float = 50.0
    calorie_density_limit: float = 400.0
    calorie_density_weight: float = 0.3
    thresholds: tuple[tuple[Tier, float], ...] = field(
        default_factory=lambda: DEFAULT_THRESHOLDS
    )

    def __post_init__(self) -> None:
        for name in (
            "center",
            "scale",
            "ratio_cap",
            "min_impact",
            "empty_score",
            "calorie_density_limit",
            "calorie_density_weight",
        ):
            if not math.isfinite(getattr(self, name)):
                raise InvalidInputError(f"{name} must be finite")
        if self.scale <= 0:
            raise InvalidInputError("scale must be positive")
        if self.ratio_cap <= 0:
            raise InvalidInputError("ratio_cap must be positive")
        if self.min_impact < 0:
            raise InvalidInputError("min_impact must not be negative")
        if self.max_reasons < 1:
            raise InvalidInputError("max_reasons must be at least 1")
        if self.score_precision < 0:
            raise InvalidInputError("score_precision must not be negative")
        if not 0 <= self.empty_score <= 100:
            raise InvalidInputError("empty_score must be within [0, 100]")
        if self.calorie_density_limit <= 0:
            raise InvalidInputError("calorie_density_limit must be positive")
        if not 0 <= self.calorie_density_weight <= 1:
            raise InvalidInputError("calorie_density_weight must be within [0, 1]")
        _validate_thresholds(tuple(self.thresholds))
        object.__setattr__(self, "thresholds", tuple(self.thresholds))

    def squash(self, total: float) -> float:
        """Map an unbounded contribution sum into [0, 100]."""
        exponent = -(total - self.center) / self.scale
        # exp overflows past ~709; the curve is already flat there
        if exponent > 700:
            return 0.0
        if exponent < -700:
            return 100.0
        return 100.0 / (1.0 + math.exp(exponent))

    def round_score(self, score: float) -> float:
        return round(min(100.0, max(0.0, score)), self.score_precision)

    def tier_for(self, score: float) -> Tier:
        return score_to_tier(score, self.thresholds)


def _validate_thresholds(thresholds: tuple[tuple[Tier, float], ...]) -> None:
    expected = [tier for tier in Tier if tier is not Tier.F]
    if [tier for tier, _ in thresholds] != expected:
        raise InvalidInputError("thresholds must list tiers S through E in order")
    previous = math.inf
    for tier, minimum in thresholds:
        if not math.isfinite(minimum) or not 0 <= minimum <= 100:
            raise InvalidInputError(f"threshold for {tier} must be within [0, 100]")
        if minimum >= previous:
            raise InvalidInputError("thresholds must be strictly descending")
        previous = minimum
