"""Tests for PreferenceLearner."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from slotwise.learning import PreferenceLearner
from slotwise.models import PreferenceProfile, TimeRange

from conftest import MONDAY, TUESDAY, at


@pytest.fixture
def learner() -> PreferenceLearner:
    return PreferenceLearner(full_confidence_history_size=20)


def _ranges(profile: PreferenceProfile) -> list[tuple[str, str]]:
    return [(r.start, r.end) for r in profile.preferred_time_ranges]


def test_empty_history_gives_default_profile(learner: PreferenceLearner) -> None:
    profile = learner.learn("owner", [])

    assert profile.owner_id == "owner"
    assert profile.confidence == 0.3
    assert profile.preferred_days == {1, 2, 3, 4}
    assert _ranges(profile) == [("09:00", "12:00"), ("14:00", "17:00")]
    assert profile.preferred_duration == 60
    assert profile.preferred_break_minutes == 15


@pytest.mark.parametrize(("size", "expected"), [(1, 0.05), (10, 0.5), (20, 1.0), (35, 1.0)])
def test_confidence_scales_with_history(
    learner: PreferenceLearner, make_booking, size: int, expected: float
) -> None:
    history = [make_booking(at(TUESDAY, 10)) for _ in range(size)]
    assert learner.learn("owner", history).confidence == pytest.approx(expected)


def test_confidence_is_monotone(learner: PreferenceLearner) -> None:
    values = [learner.confidence_for(n) for n in range(0, 40)]
    assert values == sorted(values)
    assert max(values) == 1.0


@pytest.mark.parametrize("size", [0, -5])
def test_non_positive_history_size_rejected(size: int) -> None:
    """An explicit zero is not silently replaced by the configured value."""
    with pytest.raises(ValueError, match="must be positive"):
        PreferenceLearner(full_confidence_history_size=size)


def test_preferred_days_above_mean(learner: PreferenceLearner, make_booking) -> None:
    """Only weekdays above the seven-day mean of successful bookings remain."""
    history = (
        [make_booking(at(TUESDAY, 10)) for _ in range(5)]
        + [make_booking(at(TUESDAY + timedelta(days=1), 10))]
        + [make_booking(at(TUESDAY + timedelta(days=2), 10))]
        + [make_booking(at(MONDAY, 10), successful=False) for _ in range(6)]
    )
    assert learner.learn("owner", history).preferred_days == {2}


def test_no_successful_bookings_fall_back(learner: PreferenceLearner, make_booking) -> None:
    history = [make_booking(at(MONDAY, 10), successful=False, duration=30)]
    profile = learner.learn("owner", history)

    assert profile.preferred_days == {1, 2, 3, 4}
    assert _ranges(profile) == [("09:00", "17:00")]
    assert profile.preferred_duration == 60


def test_time_ranges_merge_consecutive_hours(
    learner: PreferenceLearner, make_booking
) -> None:
    """Adjacent hours merge; the three busiest ranges are kept."""
    hours = [9, 9, 9, 10, 10, 14, 14, 14, 14, 16, 20]
    history = [make_booking(at(TUESDAY, h)) for h in hours]

    profile = learner.learn("owner", history)

    assert _ranges(profile) == [("09:00", "11:00"), ("14:00", "15:00"), ("16:00", "17:00")]


def test_time_ranges_ignore_unsuccessful(learner: PreferenceLearner, make_booking) -> None:
    history = [
        make_booking(at(TUESDAY, 15)),
        make_booking(at(TUESDAY, 8), successful=False),
        make_booking(at(TUESDAY, 8), successful=False),
    ]
    assert _ranges(learner.learn("owner", history)) == [("15:00", "16:00")]


def test_avoided_times(learner: PreferenceLearner, make_booking) -> None:
    """Weekdays with at least three records and >40% reschedules are avoided."""
    friday = MONDAY + timedelta(days=4)
    history = (
        [make_booking(at(MONDAY, 10), rescheduled=r) for r in (True, True, False)]
        + [make_booking(at(TUESDAY, 10), rescheduled=True) for _ in range(2)]
        + [make_booking(at(friday, 10), rescheduled=r) for r in (True, True, False, False, False)]
    )

    avoided = learner.learn("owner", history).avoided_times

    assert len(avoided) == 1
    assert avoided[0].day_of_week == 1
    assert avoided[0].reason == "High reschedule rate (67%)"


def test_preferred_duration_is_mode_of_successful(
    learner: PreferenceLearner, make_booking
) -> None:
    history = [
        make_booking(at(TUESDAY, 10), duration=30),
        make_booking(at(TUESDAY, 11), duration=30),
        make_booking(at(TUESDAY, 12), duration=45),
        make_booking(at(TUESDAY, 13), duration=90, successful=False),
        make_booking(at(TUESDAY, 14), duration=90, successful=False),
        make_booking(at(TUESDAY, 15), duration=90, successful=False),
    ]
    profile = learner.learn("owner", history)

    assert profile.preferred_duration == 30
    assert profile.preferred_break_minutes == 15


def test_learn_accepts_dicts_and_validates(learner: PreferenceLearner) -> None:
    record = {
        "participants": ["r1"],
        "scheduledTime": "2025-01-07T10:00:00",
        "duration": 60,
        "dayOfWeek": 2,
        "hourOfDay": 10,
        "successful": True,
    }
    assert learner.learn("owner", [record]).preferred_days == {2}

    with pytest.raises(ValidationError):
        learner.learn("owner", [{**record, "duration": -15}])


def test_time_range_limit_enforced() -> None:
    with pytest.raises(ValidationError):
        PreferenceProfile(
            owner_id="owner",
            preferred_time_ranges=[
                TimeRange(start=f"{h:02d}:00", end=f"{h + 1:02d}:00") for h in range(8, 12)
            ],
        )


def test_merge_prefers_more_confident_learned_profile(learner: PreferenceLearner) -> None:
    existing = PreferenceLearner.default_profile("owner")
    learned = existing.model_copy(update={"preferred_days": {5}, "confidence": 0.9})

    assert PreferenceLearner.merge(existing, learned) is learned


def test_merge_field_by_field(learner: PreferenceLearner) -> None:
    """A less confident learned profile only overrides non-empty fields."""
    existing = PreferenceLearner.default_profile("owner").model_copy(
        update={"confidence": 0.8, "preferred_duration": 45}
    )
    learned = PreferenceProfile(
        owner_id="owner",
        preferred_days={3},
        preferred_time_ranges=[],
        preferred_duration=30,
        confidence=0.4,
    )

    merged = PreferenceLearner.merge(existing, learned)

    assert merged.preferred_days == {3}
    assert _ranges(merged) == _ranges(existing)
    assert merged.preferred_duration == 30
    assert merged.max_bookings_per_day == existing.max_bookings_per_day
    assert merged.confidence == 0.8
    assert merged.updated_at >= existing.updated_at


def test_matches_at_minute_precision() -> None:
    profile = PreferenceLearner.default_profile("owner")

    inside = PreferenceLearner.matches(at(TUESDAY, 11, 59), profile)
    assert inside.matches and inside.score == 1.0
    assert inside.reasons == ["Matches preferred day", "Within preferred time range"]

    outside = PreferenceLearner.matches(at(TUESDAY - timedelta(days=2), 12, 30), profile)
    assert not outside.matches
    assert outside.score == 0.0
