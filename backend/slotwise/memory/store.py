"""Owner-keyed stores for preference profiles and booking history.

The scoring and learning algorithms never touch these stores; callers read
inputs from them and write results back. Writes are last-write-wins, which
is enough because ``PreferenceLearner.learn`` replaces a profile wholesale.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from slotwise.models import HistoricalBooking, PreferenceProfile

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Key-value store of the current profile per owner."""

    def get(self, owner_id: str) -> PreferenceProfile | None:
        ...

    def save(self, profile: PreferenceProfile) -> None:
        ...

    def delete(self, owner_id: str) -> bool:
        ...


class HistoryStore(Protocol):
    """Key-value store of booking history per owner."""

    def get(self, owner_id: str) -> list[HistoricalBooking]:
        ...

    def replace(self, owner_id: str, history: Sequence[HistoricalBooking]) -> None:
        ...

    def append(self, owner_id: str, booking: HistoricalBooking) -> None:
        ...


class InMemoryProfileStore:
    """Dict-backed ``ProfileStore``."""

    def __init__(self) -> None:
        self._profiles: dict[str, PreferenceProfile] = {}

    def get(self, owner_id: str) -> PreferenceProfile | None:
        return self._profiles.get(owner_id)

    def save(self, profile: PreferenceProfile) -> None:
        self._profiles[profile.owner_id] = profile
        logger.debug(
            "Saved profile for %s (confidence=%.2f)", profile.owner_id, profile.confidence
        )

    def delete(self, owner_id: str) -> bool:
        removed = self._profiles.pop(owner_id, None) is not None
        if removed:
            logger.info("Deleted profile for %s", owner_id)
        return removed

    def __len__(self) -> int:
        return len(self._profiles)


class InMemoryHistoryStore:
    """Dict-backed ``HistoryStore``."""

    def __init__(self) -> None:
        self._history: dict[str, list[HistoricalBooking]] = {}

    def get(self, owner_id: str) -> list[HistoricalBooking]:
        return list(self._history.get(owner_id, []))

    def replace(self, owner_id: str, history: Sequence[HistoricalBooking]) -> None:
        self._history[owner_id] = list(history)
        logger.debug("Stored %d history records for %s", len(history), owner_id)

    def append(self, owner_id: str, booking: HistoricalBooking) -> None:
        self._history.setdefault(owner_id, []).append(booking)
