"""Caller-side repositories for profiles and history."""

from .store import HistoryStore, InMemoryHistoryStore, InMemoryProfileStore, ProfileStore

__all__ = ["HistoryStore", "InMemoryHistoryStore", "InMemoryProfileStore", "ProfileStore"]
