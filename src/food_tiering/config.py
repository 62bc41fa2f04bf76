"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_tiering.domain.policy import TieringPolicy
from food_tiering.domain.tiering import Tier

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Tiering settings loaded from environment variables."""

    squash_center: float = 0.0
    squash_scale: float = 1.0
    ratio_cap: float = 2.0
    min_impact: float = 0.05
    max_reasons: int = 5
    score_precision: int = 2
    empty_score: float = 50.0
    calorie_density_limit: float = 400.0
    calorie_density_weight: float = 0.3
    tier_s_min: float = 90.0
    tier_a_min: float = 75.0
    tier_b_min: float = 60.0
    tier_c_min: float = 45.0
    tier_d_min: float = 30.0
    tier_e_min: float = 15.0
    population_group: str = "ALL"
    reference_age: float = 30.0
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def build_policy(settings: Settings) -> TieringPolicy:
    """Build a validated scoring policy from settings."""
    return TieringPolicy(
        center=settings.squash_center,
        scale=settings.squash_scale,
        ratio_cap=settings.ratio_cap,
        min_impact=settings.min_impact,
        max_reasons=settings.max_reasons,
        score_precision=settings.score_precision,
        empty_score=settings.empty_score,
        calorie_density_limit=settings.calorie_density_limit,
        calorie_density_weight=settings.calorie_density_weight,
        thresholds=(
            (Tier.S, settings.tier_s_min),
            (Tier.A, settings.tier_a_min),
            (Tier.B, settings.tier_b_min),
            (Tier.C, settings.tier_c_min),
            (Tier.D, settings.tier_d_min),
            (Tier.E, settings.tier_e_min),
        ),
    )
