"""Dependency container wiring for the tiering engine."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from food_tiering.adapters.rdi_catalog import reference_from_rdi_catalog
from food_tiering.app_logging import configure_logging
from food_tiering.config import Settings, build_policy
from food_tiering.domain.components import FoodProfile
from food_tiering.domain.policy import TieringPolicy
from food_tiering.domain.tiering import FoodTierResult
from food_tiering.services.reference import (
    InMemoryReferenceData,
    default_reference_data,
)
from food_tiering.services.tiering import TieringService


@dataclass
class AppContainer:
    """Holds the resolved policy, reference snapshot and engine."""

    settings: Settings
    policy: TieringPolicy
    reference_data: InMemoryReferenceData
    tiering_service: TieringService

    def evaluate(self, profile: FoodProfile) -> FoodTierResult:
        """Evaluate a profile against the container's reference snapshot."""
        return self.tiering_service.evaluate(profile, self.reference_data)


def build_container(
    settings: Settings | None = None,
    rdi_catalog: Mapping[str, object] | None = None,
    custom_rdi: Sequence[object] | None = None,
) -> AppContainer:
    """Create the default dependency container.

    ``rdi_catalog`` and ``custom_rdi`` are payloads the caller has already
    fetched; without them the built-in reference catalog is used.
    """
    resolved_settings = settings or Settings()
    configure_logging(logging.DEBUG if resolved_settings.debug else logging.INFO)
    policy = build_policy(resolved_settings)
    reference_data = default_reference_data()
    if rdi_catalog is not None or custom_rdi:
        reference_data = reference_from_rdi_catalog(
            rdi_catalog or {},
            base=reference_data,
            population_group=resolved_settings.population_group,
            age=resolved_settings.reference_age,
            custom=custom_rdi,
        )
    tiering_service = TieringService(policy=policy, debug=resolved_settings.debug)
    return AppContainer(
        settings=resolved_settings,
        policy=policy,
        reference_data=reference_data,
        tiering_service=tiering_service,
    )
