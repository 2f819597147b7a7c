"""Individual slot scoring factors.

Each function returns a value in [0, 1]. Functions that depend on optional
data (profiles, history, load info) fall back to a neutral default when the
data is absent.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from slotwise.models import HistoricalBooking, LoadInfo, PreferenceProfile

NEUTRAL_SCORE = 0.5
DEFAULT_LOAD_BALANCE = 0.7

# (start hour inclusive, end hour exclusive, score), checked in order
TIME_OF_DAY_BANDS: tuple[tuple[int, int, float], ...] = (
    (9, 12, 0.9),  # morning
    (14, 17, 0.8),  # afternoon
    (17, 19, 0.5),  # late afternoon
    (12, 14, 0.4),  # lunch
    (6, 9, 0.3),  # early morning
)
TIME_OF_DAY_FALLBACK = 0.2

# 0 = Sunday
DAY_OF_WEEK_SCORES: dict[int, float] = {
    0: 0.1,
    1: 0.6,
    2: 0.9,
    3: 0.9,
    4: 0.9,
    5: 0.7,
    6: 0.1,
}


def clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def score_preference_match(
    weekday: int,
    hour: int,
    profiles: Sequence[PreferenceProfile] | None,
    default: float = NEUTRAL_SCORE,
) -> float:
    """Average per-profile match of the slot's weekday and hour.

    A profile contributes 0.5 for a preferred weekday and 0.5 when the hour
    falls inside any of its preferred time ranges.
    """
    if not profiles:
        return default

    total = 0.0
    for profile in profiles:
        score = 0.0
        if weekday in profile.preferred_days:
            score += 0.5
        if any(r.contains_hour(hour) for r in profile.preferred_time_ranges):
            score += 0.5
        total += min(score, 1.0)

    return total / len(profiles)


def score_load_balance(
    load_info: LoadInfo | None,
    default: float = DEFAULT_LOAD_BALANCE,
) -> float:
    """Prefer lightly loaded resources: 0% utilisation scores 1.0.

    Raises:
        ValueError: If ``max_load`` is zero, since utilisation is undefined.
    """
    if load_info is None:
        return default
    if load_info.max_load == 0:
        raise ValueError("Cannot compute utilisation with max_load of 0")
    return clamp(1.0 - load_info.current_load / load_info.max_load)


def score_time_of_day(hour: int) -> float:
    for start, end, score in TIME_OF_DAY_BANDS:
        if start <= hour < end:
            return score
    return TIME_OF_DAY_FALLBACK


def score_day_of_week(weekday: int) -> float:
    return DAY_OF_WEEK_SCORES[weekday]


def score_past_success(
    weekday: int,
    hour: int,
    history: Sequence[HistoricalBooking] | None,
    default: float = NEUTRAL_SCORE,
) -> float:
    """Success rate of past bookings on the same weekday within an hour."""
    if not history:
        return default

    similar = [
        h for h in history if h.day_of_week == weekday and abs(h.hour_of_day - hour) <= 1
    ]
    if not similar:
        return default

    successes = sum(1 for h in similar if h.successful)
    return successes / len(similar)


def score_participant_satisfaction(
    resource_ids: Iterable[str],
    history: Sequence[HistoricalBooking] | None,
    default: float = NEUTRAL_SCORE,
) -> float:
    """Mean normalised satisfaction of past bookings involving any resource."""
    if not history:
        return default

    ids = set(resource_ids)
    ratings = [
        h.satisfaction / 5
        for h in history
        if h.satisfaction is not None and ids.intersection(h.participants)
    ]
    if not ratings:
        return default
    return clamp(sum(ratings) / len(ratings))
