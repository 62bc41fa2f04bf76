"""Reference intake data consumed by the tiering engine."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from food_tiering.domain.components import ComponentLabel, Unit
from food_tiering.domain.reference import Polarity, ReferenceEntry


class ReferenceDataProvider(Protocol):
    """Read-only lookup of reference entries by component name."""

    def lookup(self, name: str) -> ReferenceEntry | None:
        """Return the reference entry for a component, if known."""


@dataclass(frozen=True)
class InMemoryReferenceData:
    """Immutable snapshot of reference entries keyed by component name."""

    entries: Mapping[str, ReferenceEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        snapshot = {str(name): entry for name, entry in self.entries.items()}
        object.__setattr__(self, "entries", MappingProxyType(snapshot))

    def lookup(self, name: str) -> ReferenceEntry | None:
        return self.entries.get(name)

    def names(self) -> list[str]:
        return sorted(self.entries)

    def with_overrides(
        self, overrides: Mapping[str, ReferenceEntry]
    ) -> "InMemoryReferenceData":
        """Return a new snapshot with the given entries replaced."""
        merged = dict(self.entries)
        merged.update({str(name): entry for name, entry in overrides.items()})
        return InMemoryReferenceData(merged)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


_B = Polarity.BENEFICIAL
_H = Polarity.HARMFUL
_N = Polarity.NEUTRAL

# Adult daily values: (rdi, unit, polarity, weight).
_DEFAULTS: dict[ComponentLabel, tuple[float, Unit, Polarity, float]] = {
    ComponentLabel.ENERGY: (2000, Unit.KCAL, _N, 0.0),
    ComponentLabel.WATER: (2700, Unit.G, _N, 0.0),
    ComponentLabel.CARBOHYDRATE: (275, Unit.G, _N, 0.0),
    ComponentLabel.STARCH: (130, Unit.G, _N, 0.0),
    ComponentLabel.SUGAR: (50, Unit.G, _H, 1.0),
    ComponentLabel.FIBER: (28, Unit.G, _B, 0.8),
    ComponentLabel.FAT: (78, Unit.G, _N, 0.0),
    ComponentLabel.SATURATED: (20, Unit.G, _H, 0.8),
    ComponentLabel.TRANS: (2, Unit.G, _H, 1.0),
    ComponentLabel.MONOUNSATURATED: (44, Unit.G, _B, 0.2),
    ComponentLabel.POLYUNSATURATED: (22, Unit.G, _B, 0.2),
    ComponentLabel.CHOLESTEROL: (300, Unit.MG, _H, 0.3),
    ComponentLabel.OMEGA6: (17, Unit.G, _N, 0.0),
    ComponentLabel.OMEGA3: (1.6, Unit.G, _B, 0.4),
    ComponentLabel.OMEGA3_EPA: (0.25, Unit.G, _B, 0.2),
    ComponentLabel.OMEGA3_DHA: (0.25, Unit.G, _B, 0.2),
    ComponentLabel.PROTEIN: (50, Unit.G, _B, 0.8),
    ComponentLabel.VITAMIN_A_RAE: (900, Unit.MCG, _B, 0.25),
    ComponentLabel.VITAMIN_A_BETA_CAROTENE: (4800, Unit.MCG, _B, 0.1),
    ComponentLabel.VITAMIN_A_LUTEIN_ZEAXANTHIN: (10000, Unit.MCG, _B, 0.1),
    ComponentLabel.VITAMIN_A_LYCOPENE: (10000, Unit.MCG, _B, 0.1),
    ComponentLabel.VITAMIN_D_D2_D3: (20, Unit.MCG, _B, 0.25),
    ComponentLabel.VITAMIN_E_ALPHA_TOCOPHEROL: (15, Unit.MG, _B, 0.25),
    ComponentLabel.VITAMIN_K: (120, Unit.MCG, _B, 0.25),
    ComponentLabel.VITAMIN_B1_THIAMINE: (1.2, Unit.MG, _B, 0.25),
    ComponentLabel.VITAMIN_B2_RIBOFLAVIN: (1.3, Unit.MG, _B, 0.25),
    ComponentLabel.VITAMIN_B3_NIACIN: (16, Unit.MG, _B, 0.25),
    ComponentLabel.VITAMIN_B5_PANTOTHENIC_ACID: (5, Unit.MG, _B, 0.25),
    ComponentLabel.VITAMIN_B6: (1.7, Unit.MG, _B, 0.25),
    ComponentLabel.VITAMIN_B7_BIOTIN: (30, Unit.MCG, _B, 0.25),
    ComponentLabel.VITAMIN_B9_FOLATE_DFE: (400, Unit.MCG, _B, 0.25),
    ComponentLabel.VITAMIN_B12: (2.4, Unit.MCG, _B, 0.25),
    ComponentLabel.VITAMIN_C: (90, Unit.MG, _B, 0.25),
    ComponentLabel.CHOLINE: (550, Unit.MG, _B, 0.25),
    ComponentLabel.HISTIDINE: (700, Unit.MG, _B, 0.1),
    ComponentLabel.ISOLEUCINE: (1400, Unit.MG, _B, 0.1),
    ComponentLabel.LEUCINE: (2730, Unit.MG, _B, 0.1),
    ComponentLabel.LYSINE: (2100, Unit.MG, _B, 0.1),
    ComponentLabel.THREONINE: (1050, Unit.MG, _B, 0.1),
    ComponentLabel.TRYPTOPHAN: (280, Unit.MG, _B, 0.1),
    ComponentLabel.VALINE: (1820, Unit.MG, _B, 0.1),
    ComponentLabel.METHIONINE_CYSTEINE_TOTAL: (1050, Unit.MG, _B, 0.1),
    ComponentLabel.PHENYLALANINE_TYROSINE_TOTAL: (1750, Unit.MG, _B, 0.1),
    ComponentLabel.CALCIUM: (1300, Unit.MG, _B, 0.25),
    ComponentLabel.PHOSPHORUS: (1250, Unit.MG, _B, 0.25),
    ComponentLabel.MAGNESIUM: (420, Unit.MG, _B, 0.25),
    ComponentLabel.SODIUM: (2300, Unit.MG, _H, 0.8),
    ComponentLabel.POTASSIUM: (4700, Unit.MG, _B, 0.3),
    ComponentLabel.IRON: (18, Unit.MG, _B, 0.25),
    ComponentLabel.ZINC: (11, Unit.MG, _B, 0.25),
    ComponentLabel.COPPER: (0.9, Unit.MG, _B, 0.25),
    ComponentLabel.MANGANESE: (2.3, Unit.MG, _B, 0.25),
    ComponentLabel.IODINE: (150, Unit.MCG, _B, 0.25),
    ComponentLabel.SELENIUM: (55, Unit.MCG, _B, 0.25),
}


def default_reference_data() -> InMemoryReferenceData:
    """Built-in adult reference catalog covering every component label."""
    return InMemoryReferenceData(
        {
            label.value: ReferenceEntry(
                rdi=float(rdi), unit=unit, polarity=polarity, weight=weight
            )
            for label, (rdi, unit, polarity, weight) in _DEFAULTS.items()
        }
    )
