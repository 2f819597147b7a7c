"""Preference learning from booking history."""

from .preference_learner import PreferenceLearner

__all__ = ["PreferenceLearner"]
