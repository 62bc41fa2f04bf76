"""Adapter turning RDI catalog payloads into reference snapshots."""

import logging
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from food_tiering.domain.components import parse_unit
from food_tiering.domain.errors import InvalidInputError
from food_tiering.domain.reference import Polarity, ReferenceEntry
from food_tiering.services.reference import InMemoryReferenceData
from food_tiering.services.units import is_convertible

DEFAULT_POPULATION_GROUP = "ALL"

_logger = logging.getLogger(__name__)


class RdiRowPayload(BaseModel):
    """One age band of the RDI catalog."""

    model_config = ConfigDict(populate_by_name=True)

    age_min: float = Field(alias="ageMin")
    age_max: float = Field(alias="ageMax")
    rdi_min: float | None = Field(default=None, alias="rdiMin")
    rdi_max: float | None = Field(default=None, alias="rdiMax")
    unit: str
    is_derived: bool = Field(default=False, alias="isDerived")
    basis: str | None = None
    divisor: float | None = None
    note: str | None = None

    def covers(self, age: float) -> bool:
        return self.age_min <= age <= self.age_max


class CustomRdiPayload(BaseModel):
    """User-defined RDI override for one component."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str
    unit: str
    rdi_min: float | None = Field(default=None, alias="rdiMin")
    rdi_max: float | None = Field(default=None, alias="rdiMax")


RdiCatalogPayload = dict[str, dict[str, list[RdiRowPayload]]]

_CATALOG_ADAPTER = TypeAdapter(RdiCatalogPayload)
_CUSTOM_ADAPTER = TypeAdapter(list[CustomRdiPayload])


def parse_rdi_catalog(payload: Mapping[str, object]) -> RdiCatalogPayload:
    """Validate a raw catalog payload."""
    return _CATALOG_ADAPTER.validate_python(payload)


def parse_custom_rdi(payload: Sequence[object]) -> list[CustomRdiPayload]:
    """Validate a raw list of custom RDI overrides."""
    return _CUSTOM_ADAPTER.validate_python(payload)


def reference_from_rdi_catalog(
    payload: Mapping[str, object],
    base: InMemoryReferenceData,
    population_group: str = DEFAULT_POPULATION_GROUP,
    age: float = 30.0,
    custom: Sequence[object] | None = None,
) -> InMemoryReferenceData:
    """Resolve catalog rows for a person and merge them over ``base``.

    Polarity and weight always come from ``base``; the catalog only supplies
    intake values. Custom overrides are applied last.
    """
    catalog = parse_rdi_catalog(payload)
    overrides: dict[str, ReferenceEntry] = {}
    for name, groups in catalog.items():
        current = base.lookup(name)
        if current is None:
            _logger.warning("RDI catalog: unknown component %s skipped", name)
            continue
        rows = groups.get(population_group) or groups.get(
            DEFAULT_POPULATION_GROUP, []
        )
        row = next((row for row in rows if row.covers(age)), None)
        if row is None:
            continue
        entry = _entry_from_values(name, current, row.unit, row.rdi_min, row.rdi_max)
        if entry is not None:
            overrides[name] = entry

    resolved = base.with_overrides(overrides)
    if custom:
        resolved = resolved.with_overrides(custom_overrides(custom, resolved))
    return resolved


def custom_overrides(
    custom: Sequence[object], base: InMemoryReferenceData
) -> dict[str, ReferenceEntry]:
    """Build reference entries from user-defined RDI overrides."""
    overrides: dict[str, ReferenceEntry] = {}
    for item in parse_custom_rdi(custom):
        current = base.lookup(item.name)
        if current is None:
            _logger.warning("Custom RDI: unknown component %s skipped", item.name)
            continue
        entry = _entry_from_values(
            item.name, current, item.unit, item.rdi_min, item.rdi_max
        )
        if entry is not None:
            overrides[item.name] = entry
    return overrides


def _entry_from_values(
    name: str,
    current: ReferenceEntry,
    raw_unit: str,
    rdi_min: float | None,
    rdi_max: float | None,
) -> ReferenceEntry | None:
    """Pick the bound that matters for the polarity and validate it."""
    if current.polarity is Polarity.HARMFUL:
        candidates = (rdi_max, rdi_min)
    else:
        candidates = (rdi_min, rdi_max)
    value = next(
        (value for value in candidates if value is not None and value > 0), None
    )
    if value is None:
        _logger.warning("RDI for %s has no usable value", name)
        return None
    try:
        unit = parse_unit(raw_unit)
        if not is_convertible(unit, current.unit, name):
            raise InvalidInputError(f"{unit} is not comparable to {current.unit}")
        return ReferenceEntry(
            rdi=value, unit=unit, polarity=current.polarity, weight=current.weight
        )
    except InvalidInputError as exc:
        _logger.warning("RDI for %s skipped: %s", name, exc)
        return None
