"""Reference intake domain models."""

import math
from dataclasses import dataclass
from enum import StrEnum

from food_tiering.domain.components import Unit, parse_unit
from food_tiering.domain.errors import InvalidInputError


class Polarity(StrEnum):
    """Whether more of a nutrient is good, bad or merely informational."""

    BENEFICIAL = "beneficial"
    HARMFUL = "harmful"
    NEUTRAL = "neutral"

    @property
    def sign(self) -> int:
        """Scoring sign for the polarity."""
        if self is Polarity.BENEFICIAL:
            return 1
        if self is Polarity.HARMFUL:
            return -1
        return 0


@dataclass(frozen=True)
class ReferenceEntry:
    """Recommended daily intake and scoring weight for one component."""

    rdi: float
    unit: Unit
    polarity: Polarity
    weight: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.rdi) or self.rdi <= 0:
            raise InvalidInputError("rdi must be a finite positive number")
        if not math.isfinite(self.weight) or not 0 <= self.weight <= 1:
            raise InvalidInputError("weight must be within [0, 1]")
        object.__setattr__(self, "unit", parse_unit(self.unit))
        try:
            object.__setattr__(self, "polarity", Polarity(self.polarity))
        except ValueError as exc:
            raise InvalidInputError(f"Unknown polarity: {self.polarity!r}") from exc

    @property
    def scores(self) -> bool:
        """Whether the component can move the score at all."""
        return self.weight > 0 and self.polarity is not Polarity.NEUTRAL
