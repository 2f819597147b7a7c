"""Slot scorer - ranks candidate slots by a weighted sum of factors.

Combines preference matching, resource load, time-of-day and day-of-week
conventions, and historical outcomes into a single [0, 1] score per slot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from slotwise.config import get_settings
from slotwise.models import (
    CandidateSlot,
    HistoricalBooking,
    PreferenceProfile,
    RankedRecommendation,
    ScoringFactors,
)
from slotwise.scoring import factors as f
from slotwise.scoring.weights import FACTOR_NAMES, ScoringWeights, default_weights

logger = logging.getLogger(__name__)

GENERIC_REASON = "Available slot with acceptable conditions"


class SlotScorer:
    """Scores and ranks candidate slots.

    The scorer holds no per-request state; profiles and history are passed
    to every ``recommend`` call.
    """

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or default_weights()

    def recommend(
        self,
        candidate_slots: Sequence[CandidateSlot | dict[str, Any]],
        profiles: Sequence[PreferenceProfile | dict[str, Any]] | None = None,
        history: Sequence[HistoricalBooking | dict[str, Any]] | None = None,
        top_n: int | None = None,
    ) -> list[RankedRecommendation]:
        """Return the best ``top_n`` slots, highest score first.

        All inputs are validated before any scoring starts. Ties keep their
        input order.

        Raises:
            pydantic.ValidationError: If a slot, profile or history record
                is malformed (e.g. a slot ending before it starts).
            ValueError: If ``top_n`` is negative.
        """
        if top_n is None:
            top_n = get_settings().default_top_n
        if top_n < 0:
            raise ValueError(f"top_n must be non-negative, got {top_n}")

        slots = [CandidateSlot.model_validate(s) for s in candidate_slots]
        profile_list = [PreferenceProfile.model_validate(p) for p in profiles or []]
        history_list = [HistoricalBooking.model_validate(h) for h in history or []]

        if not slots:
            return []

        scored = [self.score_slot(slot, profile_list, history_list) for slot in slots]
        scored.sort(key=lambda r: r.score, reverse=True)

        logger.debug(
            "Scored %d slots (profiles=%d, history=%d), returning top %d",
            len(scored),
            len(profile_list),
            len(history_list),
            top_n,
        )
        return scored[:top_n]

    def score_slot(
        self,
        slot: CandidateSlot,
        profiles: Sequence[PreferenceProfile],
        history: Sequence[HistoricalBooking],
    ) -> RankedRecommendation:
        """Score a single validated slot."""
        factors = self.calculate_factors(slot, profiles, history)
        values = factors.model_dump()
        score = f.clamp(
            sum(values[name] * self.weights.weights.value(name) for name in FACTOR_NAMES)
        )

        return RankedRecommendation.model_validate(
            {
                **slot.model_dump(),
                "score": score,
                "factors": factors,
                "reasons": self.generate_reasons(factors),
            }
        )

    def calculate_factors(
        self,
        slot: CandidateSlot,
        profiles: Sequence[PreferenceProfile],
        history: Sequence[HistoricalBooking],
    ) -> ScoringFactors:
        """Compute every factor, isolating failures to the failing factor."""
        defaults = self.weights.defaults
        weekday, hour = slot.weekday, slot.hour

        calculators: dict[str, Callable[[], float]] = {
            "preference_match": lambda: f.score_preference_match(
                weekday, hour, profiles, default=defaults.preference_match
            ),
            "load_balance": lambda: f.score_load_balance(
                slot.load_info, default=defaults.load_balance
            ),
            "time_of_day": lambda: f.score_time_of_day(hour),
            "day_of_week": lambda: f.score_day_of_week(weekday),
            "past_success": lambda: f.score_past_success(
                weekday, hour, history, default=defaults.past_success
            ),
            "participant_satisfaction": lambda: f.score_participant_satisfaction(
                slot.resource_ids,
                history,
                default=defaults.participant_satisfaction,
            ),
        }

        values: dict[str, float] = {}
        for name, calculate in calculators.items():
            try:
                values[name] = f.clamp(calculate())
            except Exception:
                logger.exception(
                    "Factor %s failed for slot %s, using default %.2f",
                    name,
                    slot.id,
                    defaults.value(name),
                )
                values[name] = defaults.value(name)

        return ScoringFactors(**values)

    def generate_reasons(self, factors: ScoringFactors) -> list[str]:
        """Short human-readable tags for the factors that stand out."""
        thresholds = self.weights.reason_thresholds
        reasons: list[str] = []

        if factors.preference_match > thresholds.preference_match:
            reasons.append("Matches participant time preferences")
        if factors.load_balance > thresholds.load_balance:
            reasons.append("Good resource load distribution")
        if factors.time_of_day > thresholds.time_of_day:
            reasons.append("Optimal time of day")
        if factors.day_of_week > thresholds.day_of_week:
            reasons.append("Preferred day of week")
        if factors.past_success > thresholds.past_success:
            reasons.append(f"{factors.past_success * 100:.0f}% historical success rate")
        if factors.participant_satisfaction > thresholds.participant_satisfaction:
            reasons.append("High participant satisfaction history")

        if not reasons:
            reasons.append(GENERIC_REASON)
        return reasons

    @staticmethod
    def explain(recommendation: RankedRecommendation) -> str:
        """Multi-line summary of a recommendation for display."""
        return "\n".join(
            [
                f"Score: {recommendation.score * 100:.0f}%",
                f"Time: {recommendation.start.strftime('%A %Y-%m-%d %H:%M')}",
                f"Reasons: {', '.join(recommendation.reasons)}",
            ]
        )
