"""Slot scoring - factor functions, weights and the ranking service."""

from .factors import (
    score_day_of_week,
    score_load_balance,
    score_participant_satisfaction,
    score_past_success,
    score_preference_match,
    score_time_of_day,
)
from .scorer import SlotScorer
from .weights import ScoringWeights, load_weights

__all__ = [
    "ScoringWeights",
    "SlotScorer",
    "load_weights",
    "score_day_of_week",
    "score_load_balance",
    "score_participant_satisfaction",
    "score_past_success",
    "score_preference_match",
    "score_time_of_day",
]
