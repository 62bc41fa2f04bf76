"""Pydantic models for food profile and tier result payloads."""

from pydantic import BaseModel, ConfigDict, Field

from food_tiering.domain.components import ComponentAmount, FoodProfile
from food_tiering.domain.tiering import FoodTierResult


class ComponentPayload(BaseModel):
    """Nutrient component payload."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    group: str | None = None
    name: str
    unit: str
    amount: float | None = None


class FoodProfilePayload(BaseModel):
    """Food or meal-food payload."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    serving_total_grams: float | None = Field(default=None, alias="servingTotalGrams")
    calorie_amount: float | None = Field(default=None, alias="calorieAmount")
    components: list[ComponentPayload] | None = None

    def to_domain(self) -> FoodProfile:
        """Convert to a validated domain profile."""
        return FoodProfile.of(
            (
                ComponentAmount(name=item.name, unit=item.unit, amount=item.amount)
                for item in self.components or []
            ),
            serving_total_grams=self.serving_total_grams,
            calorie_amount=self.calorie_amount,
        )


class TierReasonPayload(BaseModel):
    """Tier reason payload."""

    kind: str
    code: str
    component: str | None = None
    message: str


class FoodTierResultPayload(BaseModel):
    """Tier result payload."""

    model_config = ConfigDict(populate_by_name=True)

    tier: str
    score: float
    reasons: list[TierReasonPayload]
    is_estimate: bool = Field(alias="isEstimate")
    archetype: str

    @classmethod
    def from_domain(cls, result: FoodTierResult) -> "FoodTierResultPayload":
        return cls(
            tier=result.tier.value,
            score=result.score,
            reasons=[
                TierReasonPayload(
                    kind=reason.kind.value,
                    code=reason.code.value,
                    component=reason.component,
                    message=reason.message,
                )
                for reason in result.reasons
            ],
            is_estimate=result.is_estimate,
            archetype=result.archetype.value,
        )
