"""Shared test fixtures."""

import logging

import pytest

from food_tiering.config import Settings
from food_tiering.containers import AppContainer, build_container
from food_tiering.domain.components import ComponentAmount, FoodProfile, Unit
from food_tiering.domain.reference import Polarity, ReferenceEntry
from food_tiering.services.reference import (
    InMemoryReferenceData,
    default_reference_data,
)
from food_tiering.services.tiering import TieringService

RDI_CATALOG: dict[str, object] = {
    "SODIUM": {
        "ALL": [
            {
                "ageMin": 0,
                "ageMax": 18,
                "rdiMin": None,
                "rdiMax": 1800,
                "unit": "MG",
                "isDerived": False,
                "basis": None,
                "divisor": None,
                "note": None,
            },
            {"ageMin": 19, "ageMax": 120, "rdiMin": 1500, "rdiMax": 2000, "unit": "MG"},
        ]
    },
    "PROTEIN": {
        "ALL": [{"ageMin": 19, "ageMax": 120, "rdiMin": 56, "rdiMax": None, "unit": "G"}],
        "FEMALE": [
            {"ageMin": 19, "ageMax": 120, "rdiMin": 46, "rdiMax": None, "unit": "G"}
        ],
    },
    "VITAMIN_C": {
        "ALL": [
            {"ageMin": 19, "ageMax": 120, "rdiMin": None, "rdiMax": None, "unit": "MG"}
        ]
    },
    "IRON": {
        "ALL": [{"ageMin": 19, "ageMax": 120, "rdiMin": 8, "rdiMax": 45, "unit": "KCAL"}]
    },
    "CAFFEINE": {
        "ALL": [
            {"ageMin": 19, "ageMax": 120, "rdiMin": None, "rdiMax": 400, "unit": "MG"}
        ]
    },
}


def component(name: str, unit: Unit | str, amount: float | None) -> ComponentAmount:
    return ComponentAmount(name=name, unit=unit, amount=amount)


def food(
    *components: ComponentAmount,
    grams: float | None = 100,
    calories: float | None = 200,
) -> FoodProfile:
    return FoodProfile(
        serving_total_grams=grams, calorie_amount=calories, components=components
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("food_tiering")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def example_reference() -> InMemoryReferenceData:
    return InMemoryReferenceData(
        {
            "PROTEIN": ReferenceEntry(
                rdi=50, unit=Unit.G, polarity=Polarity.BENEFICIAL, weight=0.8
            ),
            "FIBER": ReferenceEntry(
                rdi=28, unit=Unit.G, polarity=Polarity.BENEFICIAL, weight=0.8
            ),
            "SUGAR": ReferenceEntry(
                rdi=25, unit=Unit.G, polarity=Polarity.HARMFUL, weight=1.0
            ),
            "SODIUM": ReferenceEntry(
                rdi=2300, unit=Unit.MG, polarity=Polarity.HARMFUL, weight=0.8
            ),
            "WATER": ReferenceEntry(
                rdi=2700, unit=Unit.G, polarity=Polarity.NEUTRAL, weight=0.0
            ),
        }
    )


@pytest.fixture
def default_reference() -> InMemoryReferenceData:
    return default_reference_data()


@pytest.fixture
def service() -> TieringService:
    return TieringService()


@pytest.fixture
def settings() -> Settings:
    return Settings(debug=False)


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
