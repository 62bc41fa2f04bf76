"""Food tiering engine."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from food_tiering.domain.components import ComponentLabel, FoodProfile, display_name
from food_tiering.domain.policy import TieringPolicy
from food_tiering.domain.reference import Polarity, ReferenceEntry
from food_tiering.domain.tiering import (
    Archetype,
    FoodTierResult,
    ReasonCode,
    ReasonKind,
    TierReason,
)
from food_tiering.services.archetype import detect_archetype
from food_tiering.services.meals import combine_profiles
from food_tiering.services.reference import ReferenceDataProvider
from food_tiering.services.units import convert

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Signal:
    """Scored contribution and the reason describing it."""

    name: str
    contribution: float
    reason: TierReason


@dataclass
class _Evaluation:
    """Mutable scratch state for one evaluation."""

    per_100g: bool
    is_estimate: bool = False
    signals: list[_Signal] = field(default_factory=list)
    basis_infos: list[TierReason] = field(default_factory=list)
    component_infos: list[TierReason] = field(default_factory=list)
    estimate_causes: list[TierReason] = field(default_factory=list)

    def mark_estimate(self, reason: TierReason) -> None:
        self.is_estimate = True
        self.estimate_causes.append(reason)


@dataclass
class TieringService:
    """Scores foods against reference intakes and assigns S-F tiers."""

    policy: TieringPolicy = field(default_factory=TieringPolicy)
    debug: bool = False

    def evaluate(
        self, profile: FoodProfile, reference: ReferenceDataProvider
    ) -> FoodTierResult:
        """Evaluate a single food profile against a reference snapshot."""
        if not profile.components:
            score = self.policy.round_score(self.policy.empty_score)
            return FoodTierResult(
                tier=self.policy.tier_for(score),
                score=score,
                reasons=(
                    _info(
                        ReasonCode.NO_NUTRIENT_DATA,
                        "No nutrient data available, neutral rating.",
                    ),
                ),
                is_estimate=True,
                archetype=Archetype.MIXED,
            )

        state = _Evaluation(per_100g=profile.has_serving_basis)
        self._check_basis(profile, state)
        seen: set[str] = set()
        for component in profile.components:
            name = component.name
            if name in seen:
                state.component_infos.append(
                    _info(
                        ReasonCode.DUPLICATE_COMPONENT,
                        f"{_capitalize(display_name(name))} is listed more than "
                        "once, extra entries ignored.",
                        name,
                    )
                )
                continue
            seen.add(name)

            entry = reference.lookup(name)
            if entry is None:
                if self.debug:
                    _logger.info("Tiering skipped unrecognized component %s", name)
                state.component_infos.append(
                    _info(
                        ReasonCode.UNRECOGNIZED_COMPONENT,
                        f"Unrecognized component {name}, ignored in scoring.",
                        name,
                    )
                )
                continue

            if not component.is_known:
                if entry.scores:
                    reason = _info(
                        ReasonCode.MISSING_AMOUNT,
                        f"Amount of {display_name(name)} is unknown.",
                        name,
                    )
                    state.component_infos.append(reason)
                    state.mark_estimate(reason)
                continue

            amount = convert(component.amount, component.unit, entry.unit, name)
            if amount is None:
                if self.debug:
                    _logger.info(
                        "Tiering cannot convert %s from %s to %s",
                        name,
                        component.unit,
                        entry.unit,
                    )
                reason = _info(
                    ReasonCode.UNCONVERTIBLE_UNIT,
                    f"{_capitalize(display_name(name))} is given in "
                    f"{component.unit.value}, which cannot be compared to "
                    f"{entry.unit.value}; ignored in scoring.",
                    name,
                )
                state.component_infos.append(reason)
                if entry.scores:
                    state.mark_estimate(reason)
                continue

            if entry.scores:
                state.signals.append(self._signal(name, amount, entry, profile))

        density = self._calorie_density(profile)
        if density is not None:
            state.signals.append(density)

        total = math.fsum(signal.contribution for signal in state.signals)
        score = self.policy.round_score(self.policy.squash(total))
        result = FoodTierResult(
            tier=self.policy.tier_for(score),
            score=score,
            reasons=self._reasons(state),
            is_estimate=state.is_estimate,
            archetype=detect_archetype(profile),
        )
        if self.debug:
            _logger.info(
                "Tiering result: tier=%s score=%s total=%.4f estimate=%s components=%s",
                result.tier,
                result.score,
                total,
                result.is_estimate,
                len(profile.components),
            )
        return result

    def evaluate_meal(
        self, profiles: Iterable[FoodProfile], reference: ReferenceDataProvider
    ) -> FoodTierResult:
        """Evaluate several foods eaten together as one meal."""
        return self.evaluate(combine_profiles(profiles), reference)

    def _check_basis(self, profile: FoodProfile, state: _Evaluation) -> None:
        if not state.per_100g:
            reason = _info(
                ReasonCode.MISSING_SERVING_BASIS,
                "Serving weight is unknown, amounts compared per serving.",
            )
            state.basis_infos.append(reason)
            state.mark_estimate(reason)
        if profile.calories is None:
            reason = _info(ReasonCode.MISSING_CALORIES, "Calorie content is unknown.")
            state.basis_infos.append(reason)
            state.mark_estimate(reason)

    def _signal(
        self, name: str, amount: float, entry: ReferenceEntry, profile: FoodProfile
    ) -> _Signal:
        """Normalise an amount and compute its weighted contribution."""
        if profile.has_serving_basis:
            density = amount / profile.serving_total_grams * 100
            basis = "per 100 g"
        else:
            density = amount
            basis = "per serving"
        raw_ratio = density / entry.rdi
        ratio = min(max(raw_ratio, 0.0), self.policy.ratio_cap)
        if entry.polarity is Polarity.BENEFICIAL:
            saturated = min(ratio, 1.0)
        else:
            saturated = ratio
        contribution = entry.weight * entry.polarity.sign * saturated
        return _Signal(
            name=name,
            contribution=contribution,
            reason=_describe(name, contribution, raw_ratio * 100, basis),
        )

    def _calorie_density(self, profile: FoodProfile) -> _Signal | None:
        """Score kcal per 100 g as a harmful signal, when both bases are known."""
        calories = profile.calories
        if (
            not profile.has_serving_basis
            or calories is None
            or not self.policy.calorie_density_weight
        ):
            return None
        density = calories / profile.serving_total_grams * 100
        ratio = min(
            density / self.policy.calorie_density_limit, self.policy.ratio_cap
        )
        lead = "High" if ratio >= 1 else "Moderate"
        return _Signal(
            name=ComponentLabel.ENERGY,
            contribution=-self.policy.calorie_density_weight * ratio,
            reason=TierReason(
                kind=ReasonKind.NEGATIVE,
                code=ReasonCode.CALORIE_DENSITY,
                message=f"{lead} calorie density ({density:.0f} kcal per 100 g).",
            ),
        )

    def _reasons(self, state: _Evaluation) -> tuple[TierReason, ...]:
        """Order reasons by impact and cap them for presentation.

        An estimate always keeps at least one reason that explains it, taking
        the last slot from a scored reason if the cap would drop it.
        """
        scored = sorted(
            (
                signal
                for signal in state.signals
                if abs(signal.contribution) > self.policy.min_impact
            ),
            key=lambda signal: (-abs(signal.contribution), signal.name),
        )
        reasons = [signal.reason for signal in scored]
        reasons.extend(state.basis_infos)
        reasons.extend(sorted(state.component_infos, key=lambda r: r.component or ""))
        if not reasons:
            reasons.append(
                _info(
                    ReasonCode.NO_SIGNIFICANT_SIGNALS,
                    "No nutrient stands out for better or worse.",
                )
            )
        limit = self.policy.max_reasons
        kept = reasons[:limit]
        if state.estimate_causes and not any(
            reason in state.estimate_causes for reason in kept
        ):
            cause = next(r for r in reasons if r in state.estimate_causes)
            kept = kept[: limit - 1] + [cause]
        return tuple(kept)


def _describe(
    name: str, contribution: float, percent: float, basis: str
) -> TierReason:
    label = display_name(name)
    shown = f"{percent:.0f}%"
    if contribution > 0:
        lead = "Excellent source of" if percent >= 100 else "Provides"
        return TierReason(
            kind=ReasonKind.POSITIVE,
            code=ReasonCode.BENEFICIAL_NUTRIENT,
            message=f"{lead} {label} ({shown} of daily intake {basis}).",
            component=name,
        )
    lead = "High in" if percent >= 100 else "Contains"
    return TierReason(
        kind=ReasonKind.NEGATIVE,
        code=ReasonCode.HARMFUL_NUTRIENT,
        message=f"{lead} {label} ({shown} of daily limit {basis}).",
        component=name,
    )


def _info(code: ReasonCode, message: str, component: str | None = None) -> TierReason:
    return TierReason(
        kind=ReasonKind.INFO, code=code, message=message, component=component
    )


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]
