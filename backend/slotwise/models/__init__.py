"""Data records exchanged with slotwise callers."""

from .conflicts import (
    Conflict,
    ConflictType,
    Resolution,
    ResolutionAction,
    ResolutionSuggestion,
    ScheduledBooking,
)
from .history import HistoricalBooking
from .preferences import AvoidedTime, PreferenceMatch, PreferenceProfile, TimeRange
from .slots import CandidateSlot, LoadInfo, RankedRecommendation, Resource, ScoringFactors

__all__ = [
    "AvoidedTime",
    "CandidateSlot",
    "Conflict",
    "ConflictType",
    "HistoricalBooking",
    "LoadInfo",
    "PreferenceMatch",
    "PreferenceProfile",
    "RankedRecommendation",
    "Resolution",
    "ResolutionAction",
    "ResolutionSuggestion",
    "Resource",
    "ScheduledBooking",
    "ScoringFactors",
    "TimeRange",
]
