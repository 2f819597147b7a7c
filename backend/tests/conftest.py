"""Shared test fixtures for the slotwise test suite."""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, Optional

import pytest

from slotwise.models import (
    CandidateSlot,
    HistoricalBooking,
    RankedRecommendation,
    ScoringFactors,
)

# 2025-01-06 is a Monday, so MONDAY + n days lands on weekday n + 1.
MONDAY = datetime(2025, 1, 6)
TUESDAY = datetime(2025, 1, 7)
SATURDAY = datetime(2025, 1, 11)


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute)


@pytest.fixture
def make_slot() -> Callable[..., CandidateSlot]:
    """Factory for candidate slots."""

    def _make(
        slot_id: str,
        start: datetime,
        minutes: int = 60,
        resources: tuple[str, ...] = ("r1",),
        load: Optional[tuple[int, int]] = None,
    ) -> CandidateSlot:
        return CandidateSlot(
            id=slot_id,
            start=start,
            end=start + timedelta(minutes=minutes),
            assigned_resources=[
                {"resource_id": r, "display_name": r.upper()} for r in resources
            ],
            load_info=(
                {"current_load": load[0], "max_load": load[1]} if load else None
            ),
        )

    return _make


@pytest.fixture
def make_booking() -> Callable[..., HistoricalBooking]:
    """Factory for history records; weekday and hour derive from ``when``."""

    def _make(
        when: datetime,
        successful: bool = True,
        duration: int = 60,
        participants: tuple[str, ...] = ("r1",),
        **extra: Any,
    ) -> HistoricalBooking:
        return HistoricalBooking(
            participants=list(participants),
            scheduled_time=when,
            duration=duration,
            day_of_week=when.isoweekday() % 7,
            hour_of_day=when.hour,
            successful=successful,
            **extra,
        )

    return _make


@pytest.fixture
def make_alternative(
    make_slot: Callable[..., CandidateSlot],
) -> Callable[..., RankedRecommendation]:
    """Factory for already-scored alternative slots."""

    def _make(
        slot_id: str,
        start: datetime,
        score: float,
        preference_match: float = 0.5,
    ) -> RankedRecommendation:
        slot = make_slot(slot_id, start)
        return RankedRecommendation(
            **slot.model_dump(),
            score=score,
            factors=ScoringFactors(
                preference_match=preference_match,
                load_balance=0.7,
                time_of_day=0.9,
                day_of_week=0.9,
                past_success=0.5,
                participant_satisfaction=0.5,
            ),
            reasons=["Optimal time of day"],
        )

    return _make
