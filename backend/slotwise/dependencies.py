"""Singleton providers for the slotwise services."""

from slotwise.config import get_settings
from slotwise.scoring import SlotScorer, load_weights
from slotwise.service import SchedulingIntelligence

# Global singleton instances (services are stateless apart from their stores)
_scorer: SlotScorer | None = None
_intelligence: SchedulingIntelligence | None = None


def get_slot_scorer() -> SlotScorer:
    """Return singleton SlotScorer, honouring a configured weights file."""
    global _scorer
    if _scorer is None:
        weights_path = get_settings().weights_path
        _scorer = SlotScorer(load_weights(weights_path) if weights_path else None)
    return _scorer


def get_scheduling_intelligence() -> SchedulingIntelligence:
    """Return singleton SchedulingIntelligence with in-memory stores."""
    global _intelligence
    if _intelligence is None:
        _intelligence = SchedulingIntelligence(scorer=get_slot_scorer())
    return _intelligence


def reset() -> None:
    """Drop cached singletons, e.g. after changing settings in tests."""
    global _scorer, _intelligence
    _scorer = None
    _intelligence = None
