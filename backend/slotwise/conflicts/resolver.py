"""Conflict resolution - rule-based remedies ranked by confidence.

Each conflict type has a fixed rule set drawing on a pool of already-scored
alternative slots (best first). When the rules produce nothing, an optional
fallback strategy is consulted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Any, Callable, Protocol

from slotwise.config import get_settings
from slotwise.models import (
    Conflict,
    ConflictType,
    RankedRecommendation,
    Resolution,
    ResolutionAction,
    ResolutionSuggestion,
)
from slotwise.utils.time import align_awareness, utcnow

logger = logging.getLogger(__name__)

PREFERENCE_MATCH_THRESHOLD = 0.7


class FallbackStrategy(Protocol):
    """Produces suggestions for conflicts the rule set cannot handle."""

    def suggest(
        self,
        conflict: Conflict,
        alternatives: Sequence[RankedRecommendation],
    ) -> list[ResolutionSuggestion]:
        ...


class NoFallback:
    """Default strategy: never adds suggestions."""

    def suggest(
        self,
        conflict: Conflict,
        alternatives: Sequence[RankedRecommendation],
    ) -> list[ResolutionSuggestion]:
        return []


def severity_label(severity: int) -> str:
    if severity >= 5:
        return "Critical"
    if severity >= 4:
        return "High"
    if severity >= 3:
        return "Medium"
    if severity >= 2:
        return "Low"
    return "Informational"


def _describe_time(dt: datetime) -> str:
    return dt.strftime("%A %Y-%m-%d %H:%M")


class ConflictResolver:
    """Turns conflicts into ranked resolution suggestions."""

    def __init__(
        self,
        fallback: FallbackStrategy | None = None,
        work_hours_start: int | None = None,
        work_hours_end: int | None = None,
        alternative_lead_days: int | None = None,
    ) -> None:
        config = get_settings()
        self.fallback = fallback or NoFallback()
        self.work_hours_start = (
            config.work_hours_start if work_hours_start is None else work_hours_start
        )
        self.work_hours_end = (
            config.work_hours_end if work_hours_end is None else work_hours_end
        )
        self.alternative_lead_days = (
            config.alternative_lead_days
            if alternative_lead_days is None
            else alternative_lead_days
        )
        self._rules: dict[
            ConflictType,
            Callable[[Conflict, list[RankedRecommendation], datetime], list[ResolutionSuggestion]],
        ] = {
            ConflictType.DOUBLE_BOOKING: self._resolve_double_booking,
            ConflictType.LOAD_EXCEEDED: self._resolve_load_exceeded,
            ConflictType.OUTSIDE_HOURS: self._resolve_outside_hours,
            ConflictType.HOLIDAY: self._resolve_holiday,
            ConflictType.PREFERENCE_VIOLATION: self._resolve_preference_violation,
        }

    def resolve(
        self,
        conflicts: Sequence[Conflict | dict[str, Any]],
        alternatives: Sequence[RankedRecommendation | dict[str, Any]] | None = None,
        now: datetime | None = None,
    ) -> list[Resolution]:
        """Produce one resolution per conflict, in input order.

        Args:
            conflicts: Conflicts from the detector or external collaborators.
            alternatives: Scored alternative slots, best first.
            now: Reference time for lead-time rules. Defaults to current UTC.

        Raises:
            pydantic.ValidationError: If a conflict or alternative is malformed.
        """
        conflict_list = [Conflict.model_validate(c) for c in conflicts]
        if not conflict_list:
            return []

        pool = [RankedRecommendation.model_validate(a) for a in alternatives or []]
        reference = now or utcnow()
        return [self.resolve_conflict(c, pool, reference) for c in conflict_list]

    def resolve_conflict(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
        now: datetime,
    ) -> Resolution:
        suggestions = self._rules[conflict.type](conflict, alternatives, now)

        if not suggestions:
            suggestions = self._fallback_suggestions(conflict, alternatives)

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        logger.debug(
            "Resolved %s conflict with %d suggestion(s)",
            conflict.type.value,
            len(suggestions),
        )

        return Resolution(
            conflict_type=conflict.type,
            description=conflict.description,
            affected_participants=list(conflict.affected_participants),
            severity=conflict.severity,
            severity_label=severity_label(conflict.severity),
            suggestions=suggestions,
        )

    def _fallback_suggestions(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
    ) -> list[ResolutionSuggestion]:
        try:
            return list(self.fallback.suggest(conflict, alternatives))
        except Exception:
            logger.exception(
                "Fallback strategy failed for %s conflict", conflict.type.value
            )
            return []

    # ------------------------------------------------------------------
    # Rules per conflict type
    # ------------------------------------------------------------------

    def _resolve_double_booking(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
        now: datetime,
    ) -> list[ResolutionSuggestion]:
        suggestions: list[ResolutionSuggestion] = []

        if alternatives:
            best = alternatives[0]
            suggestions.append(
                ResolutionSuggestion(
                    action=ResolutionAction.FIND_ALTERNATIVE,
                    description=f"Reschedule to {_describe_time(best.start)}",
                    alternative_slot=best,
                    confidence=best.score,
                    tradeoffs=["May not be optimal time", "All participants available"],
                )
            )

        suggestions.append(
            ResolutionSuggestion(
                action=ResolutionAction.RESCHEDULE,
                description="Reschedule the conflicting booking to a later time",
                confidence=0.6,
                tradeoffs=["Affects other participants", "May cascade additional conflicts"],
            )
        )
        suggestions.append(
            ResolutionSuggestion(
                action=ResolutionAction.CHANGE_PARTICIPANTS,
                description="Assign different resources who are available",
                confidence=0.5,
                tradeoffs=["Different expertise", "May affect consistency"],
            )
        )
        return suggestions

    def _resolve_load_exceeded(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
        now: datetime,
    ) -> list[ResolutionSuggestion]:
        suggestions = [
            ResolutionSuggestion(
                action=ResolutionAction.CHANGE_PARTICIPANTS,
                description="Reassign to resources with lower load",
                confidence=0.8,
                tradeoffs=["Better load distribution", "Different resource perspective"],
            )
        ]

        lead = timedelta(days=self.alternative_lead_days)
        later = [
            a for a in alternatives if a.start >= align_awareness(now, a.start) + lead
        ]
        if later:
            suggestions.append(
                ResolutionSuggestion(
                    action=ResolutionAction.FIND_ALTERNATIVE,
                    description=(
                        f"Schedule at {_describe_time(later[0].start)} when load is lower"
                    ),
                    alternative_slot=later[0],
                    confidence=0.7,
                    tradeoffs=["Delays the booking", "Resources have more capacity"],
                )
            )

        suggestions.append(
            ResolutionSuggestion(
                action=ResolutionAction.REDUCE_DURATION,
                description="Reduce the booking duration to stay within limits",
                confidence=0.5,
                tradeoffs=["Less time available", "Respects resource limits"],
            )
        )
        return suggestions

    def _resolve_outside_hours(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
        now: datetime,
    ) -> list[ResolutionSuggestion]:
        within_hours = [
            a
            for a in alternatives
            if self.work_hours_start <= a.start.hour < self.work_hours_end
        ]
        if not within_hours:
            return []

        best = within_hours[0]
        return [
            ResolutionSuggestion(
                action=ResolutionAction.FIND_ALTERNATIVE,
                description=f"Reschedule to within work hours: {_describe_time(best.start)}",
                alternative_slot=best,
                confidence=0.9,
                tradeoffs=["Respects work hours", "May delay scheduling"],
            )
        ]

    def _resolve_holiday(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
        now: datetime,
    ) -> list[ResolutionSuggestion]:
        if not alternatives:
            return []

        return [
            ResolutionSuggestion(
                action=ResolutionAction.FIND_ALTERNATIVE,
                description=(
                    f"Reschedule to the next available working day: "
                    f"{_describe_time(alternatives[0].start)}"
                ),
                alternative_slot=alternatives[0],
                confidence=0.9,
                tradeoffs=["Avoids holiday scheduling", "May affect the timeline"],
            )
        ]

    def _resolve_preference_violation(
        self,
        conflict: Conflict,
        alternatives: list[RankedRecommendation],
        now: datetime,
    ) -> list[ResolutionSuggestion]:
        suggestions: list[ResolutionSuggestion] = []

        preferred = [
            a
            for a in alternatives
            if a.factors.preference_match > PREFERENCE_MATCH_THRESHOLD
        ]
        if preferred:
            suggestions.append(
                ResolutionSuggestion(
                    action=ResolutionAction.FIND_ALTERNATIVE,
                    description="Reschedule to a time matching participant preferences",
                    alternative_slot=preferred[0],
                    confidence=0.8,
                    tradeoffs=[
                        "Matches participant preferences",
                        "Higher likelihood of acceptance",
                    ],
                )
            )

        suggestions.append(
            ResolutionSuggestion(
                action=ResolutionAction.RESCHEDULE,
                description="Proceed with the current time if urgent (override preference)",
                confidence=0.4,
                tradeoffs=["May reduce participant satisfaction", "Meets scheduling urgency"],
            )
        )
        return suggestions
