"""Preference Learner - derives scheduling preferences from booking history.

Statistical analysis only: weekday and hour histograms of successful
bookings, reschedule rates per weekday, and the most common duration.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from slotwise.config import get_settings
from slotwise.models import (
    AvoidedTime,
    HistoricalBooking,
    PreferenceMatch,
    PreferenceProfile,
    TimeRange,
)
from slotwise.models.preferences import MAX_TIME_RANGES
from slotwise.utils.time import day_of_week, format_hour, minute_of_day, utcnow

logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_DAYS = frozenset({1, 2, 3, 4})  # Mon-Thu
DEFAULT_TIME_RANGES = (("09:00", "12:00"), ("14:00", "17:00"))
WORKDAY_TIME_RANGE = ("09:00", "17:00")
DEFAULT_DURATION = 60
DEFAULT_BREAK_MINUTES = 15
DEFAULT_MAX_BOOKINGS_PER_DAY = 4
DEFAULT_CONFIDENCE = 0.3

MIN_RECORDS_FOR_AVOIDANCE = 3
RESCHEDULE_RATE_THRESHOLD = 0.40


class PreferenceLearner:
    """Learns a per-owner ``PreferenceProfile`` from historical bookings."""

    def __init__(self, full_confidence_history_size: int | None = None) -> None:
        if full_confidence_history_size is None:
            full_confidence_history_size = get_settings().full_confidence_history_size
        if full_confidence_history_size <= 0:
            raise ValueError(
                "full_confidence_history_size must be positive, "
                f"got {full_confidence_history_size}"
            )
        self.full_confidence_history_size = full_confidence_history_size

    def learn(
        self,
        owner_id: str,
        history: Sequence[HistoricalBooking | dict[str, Any]],
    ) -> PreferenceProfile:
        """Derive a fresh profile for ``owner_id``.

        The result fully replaces any previous profile for the owner; use
        ``merge`` to combine it with an existing one.

        Raises:
            pydantic.ValidationError: If a history record is malformed.
        """
        records = [HistoricalBooking.model_validate(h) for h in history]
        if not records:
            logger.info("No history for %s, using default preferences", owner_id)
            return self.default_profile(owner_id)

        successful = [r for r in records if r.successful]
        profile = PreferenceProfile(
            owner_id=owner_id,
            preferred_days=self._preferred_days(successful),
            preferred_time_ranges=self._preferred_time_ranges(successful),
            avoided_times=self._avoided_times(records),
            preferred_duration=self._preferred_duration(successful),
            preferred_break_minutes=DEFAULT_BREAK_MINUTES,
            confidence=self.confidence_for(len(records)),
            updated_at=utcnow(),
        )
        logger.info(
            "Learned preferences for %s from %d records (confidence=%.2f)",
            owner_id,
            len(records),
            profile.confidence,
        )
        return profile

    def confidence_for(self, history_size: int) -> float:
        """Confidence grows linearly with history size, capped at 1.0."""
        return min(history_size / self.full_confidence_history_size, 1.0)

    @staticmethod
    def default_profile(owner_id: str) -> PreferenceProfile:
        """Profile used for owners without any history."""
        return PreferenceProfile(
            owner_id=owner_id,
            preferred_days=set(DEFAULT_PREFERRED_DAYS),
            preferred_time_ranges=[
                TimeRange(start=start, end=end) for start, end in DEFAULT_TIME_RANGES
            ],
            preferred_duration=DEFAULT_DURATION,
            preferred_break_minutes=DEFAULT_BREAK_MINUTES,
            max_bookings_per_day=DEFAULT_MAX_BOOKINGS_PER_DAY,
            timezone="UTC",
            confidence=DEFAULT_CONFIDENCE,
            updated_at=utcnow(),
        )

    # ------------------------------------------------------------------
    # Pattern analysis
    # ------------------------------------------------------------------

    @staticmethod
    def _preferred_days(successful: Sequence[HistoricalBooking]) -> set[int]:
        """Weekdays booked more often than the mean over all seven days."""
        counts = Counter(r.day_of_week for r in successful)
        mean = sum(counts.values()) / 7
        days = {day for day, count in counts.items() if count > mean}
        return days or set(DEFAULT_PREFERRED_DAYS)

    @staticmethod
    def _preferred_time_ranges(
        successful: Sequence[HistoricalBooking],
    ) -> list[TimeRange]:
        """Merge booked hours into contiguous ranges, keep the busiest three."""
        counts = Counter(r.hour_of_day for r in successful)
        if not counts:
            return [TimeRange(start=WORKDAY_TIME_RANGE[0], end=WORKDAY_TIME_RANGE[1])]

        runs: list[list[int]] = []
        for hour in sorted(counts):
            if runs and hour == runs[-1][-1] + 1:
                runs[-1].append(hour)
            else:
                runs.append([hour])

        # sort is stable, so equally busy runs stay in chronological order
        runs.sort(key=lambda run: sum(counts[h] for h in run), reverse=True)
        return [
            TimeRange(start=format_hour(run[0]), end=format_hour(run[-1] + 1))
            for run in runs[:MAX_TIME_RANGES]
        ]

    @staticmethod
    def _avoided_times(records: Sequence[HistoricalBooking]) -> list[AvoidedTime]:
        """Weekdays whose bookings are frequently rescheduled."""
        totals: Counter[int] = Counter()
        rescheduled: Counter[int] = Counter()
        for record in records:
            totals[record.day_of_week] += 1
            if record.rescheduled:
                rescheduled[record.day_of_week] += 1

        avoided = []
        for day in sorted(totals):
            total = totals[day]
            if total < MIN_RECORDS_FOR_AVOIDANCE:
                continue
            rate = rescheduled[day] / total
            if rate > RESCHEDULE_RATE_THRESHOLD:
                avoided.append(
                    AvoidedTime(
                        day_of_week=day,
                        reason=f"High reschedule rate ({rate * 100:.0f}%)",
                    )
                )
        return avoided

    @staticmethod
    def _preferred_duration(successful: Sequence[HistoricalBooking]) -> int:
        """Most common duration; the earliest seen wins a tie."""
        counts = Counter(r.duration for r in successful)
        if not counts:
            return DEFAULT_DURATION
        return counts.most_common(1)[0][0]

    # ------------------------------------------------------------------
    # Profile operations
    # ------------------------------------------------------------------

    @staticmethod
    def merge(
        existing: PreferenceProfile,
        learned: PreferenceProfile,
    ) -> PreferenceProfile:
        """Combine an existing profile with a newly learned one.

        A learned profile with strictly higher confidence replaces the
        existing one. Otherwise non-empty learned fields override the
        existing ones and the higher confidence is kept.
        """
        if learned.confidence > existing.confidence:
            return learned

        return existing.model_copy(
            update={
                "preferred_days": learned.preferred_days or existing.preferred_days,
                "preferred_time_ranges": (
                    learned.preferred_time_ranges or existing.preferred_time_ranges
                ),
                "avoided_times": learned.avoided_times or existing.avoided_times,
                "preferred_duration": (
                    learned.preferred_duration or existing.preferred_duration
                ),
                "max_bookings_per_day": (
                    learned.max_bookings_per_day or existing.max_bookings_per_day
                ),
                "timezone": learned.timezone or existing.timezone,
                "confidence": max(learned.confidence, existing.confidence),
                "updated_at": utcnow(),
            }
        )

    @staticmethod
    def matches(slot_start: datetime, profile: PreferenceProfile) -> PreferenceMatch:
        """Check a start time against a profile at minute precision."""
        score = 0.0
        reasons: list[str] = []

        if day_of_week(slot_start) in profile.preferred_days:
            score += 0.5
            reasons.append("Matches preferred day")

        minute = minute_of_day(slot_start)
        if any(r.contains_minute(minute) for r in profile.preferred_time_ranges):
            score += 0.5
            reasons.append("Within preferred time range")

        return PreferenceMatch(matches=score >= 0.5, score=score, reasons=reasons)
