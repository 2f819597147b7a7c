"""Slotwise - appointment slot scoring, preference learning and conflict resolution."""

from .conflicts import ConflictDetector, ConflictResolver, FallbackStrategy, NoFallback
from .learning import PreferenceLearner
from .models import (
    CandidateSlot,
    Conflict,
    ConflictType,
    HistoricalBooking,
    PreferenceProfile,
    RankedRecommendation,
    Resolution,
    ResolutionAction,
    ScheduledBooking,
)
from .scoring import SlotScorer
from .service import SchedulingIntelligence

__version__ = "0.1.0"

__all__ = [
    "CandidateSlot",
    "Conflict",
    "ConflictDetector",
    "ConflictResolver",
    "ConflictType",
    "FallbackStrategy",
    "HistoricalBooking",
    "NoFallback",
    "PreferenceLearner",
    "PreferenceProfile",
    "RankedRecommendation",
    "Resolution",
    "ResolutionAction",
    "ScheduledBooking",
    "SchedulingIntelligence",
    "SlotScorer",
]
