"""
Scheduling intelligence facade wiring scoring, learning and conflict handling.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Optional

from slotwise.conflicts import ConflictDetector, ConflictResolver
from slotwise.learning import PreferenceLearner
from slotwise.memory import (
    HistoryStore,
    InMemoryHistoryStore,
    InMemoryProfileStore,
    ProfileStore,
)
from slotwise.models import (
    CandidateSlot,
    Conflict,
    HistoricalBooking,
    PreferenceProfile,
    RankedRecommendation,
    Resolution,
    ScheduledBooking,
)
from slotwise.scoring import SlotScorer

logger = logging.getLogger(__name__)


class SchedulingIntelligence:
    """
    Runs the recommend / learn / check flows against owner-keyed stores.
    """

    def __init__(
        self,
        scorer: Optional[SlotScorer] = None,
        learner: Optional[PreferenceLearner] = None,
        detector: Optional[ConflictDetector] = None,
        resolver: Optional[ConflictResolver] = None,
        profile_store: Optional[ProfileStore] = None,
        history_store: Optional[HistoryStore] = None,
    ):
        self.scorer = scorer or SlotScorer()
        self.learner = learner or PreferenceLearner()
        self.detector = detector or ConflictDetector()
        self.resolver = resolver or ConflictResolver()
        self.profile_store = profile_store or InMemoryProfileStore()
        self.history_store = history_store or InMemoryHistoryStore()

    def learn_preferences(
        self,
        owner_id: str,
        history: Sequence[HistoricalBooking | dict[str, Any]],
    ) -> PreferenceProfile:
        """
        Learn a profile from history and store both for the owner.

        Args:
            owner_id: Owner whose profile is (re)learned
            history: Complete booking history for the owner

        Returns:
            The new profile, which replaces any previously stored one
        """
        records = [HistoricalBooking.model_validate(h) for h in history]
        profile = self.learner.learn(owner_id, records)

        self.profile_store.save(profile)
        self.history_store.replace(owner_id, records)
        return profile

    def recommend_for(
        self,
        owner_id: str,
        candidate_slots: Sequence[CandidateSlot | dict[str, Any]],
        top_n: Optional[int] = None,
    ) -> list[RankedRecommendation]:
        """
        Rank candidate slots using the owner's stored profile and history.

        Owners without a stored profile are scored with neutral defaults.
        """
        profile = self.profile_store.get(owner_id)
        history = self.history_store.get(owner_id)

        if profile is None:
            logger.info("No stored profile for %s, scoring with defaults", owner_id)

        return self.scorer.recommend(
            candidate_slots,
            profiles=[profile] if profile else None,
            history=history or None,
            top_n=top_n,
        )

    def check_proposed_slot(
        self,
        proposed_slot: CandidateSlot | dict[str, Any],
        existing_schedule: Sequence[ScheduledBooking | dict[str, Any]],
        candidate_slots: Sequence[CandidateSlot | dict[str, Any]] = (),
        owner_id: Optional[str] = None,
        extra_conflicts: Sequence[Conflict | dict[str, Any]] = (),
        now: Optional[datetime] = None,
    ) -> tuple[list[Conflict], list[Resolution]]:
        """
        Detect conflicts for a proposed slot and suggest resolutions.

        Args:
            proposed_slot: Slot the caller wants to book
            existing_schedule: Bookings already on the calendar
            candidate_slots: Pool of alternatives, scored before resolving
            owner_id: Owner whose stored profile and history inform scoring
            extra_conflicts: Conflicts raised by external capacity, holiday
                or preference checks
            now: Reference time for lead-time rules

        Returns:
            Tuple of (conflicts, resolutions), one resolution per conflict
        """
        conflicts = self.detector.detect(proposed_slot, existing_schedule)
        conflicts.extend(Conflict.model_validate(c) for c in extra_conflicts)
        if not conflicts:
            return [], []

        if owner_id is not None:
            alternatives = self.recommend_for(
                owner_id, candidate_slots, top_n=len(candidate_slots)
            )
        else:
            alternatives = self.scorer.recommend(
                candidate_slots, top_n=len(candidate_slots)
            )

        resolutions = self.resolver.resolve(conflicts, alternatives, now=now)
        logger.info(
            "Checked proposed slot: %d conflict(s), %d alternative(s)",
            len(conflicts),
            len(alternatives),
        )
        return conflicts, resolutions
