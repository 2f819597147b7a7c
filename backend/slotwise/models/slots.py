"""Candidate slot and recommendation models."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from slotwise.models.base import SlotwiseModel
from slotwise.utils.time import day_of_week


class Resource(SlotwiseModel):
    """A bookable resource (person, room) assigned to a slot."""

    resource_id: str
    display_name: str = ""


class LoadInfo(SlotwiseModel):
    """Current booking load of the slot's resources.

    ``current_load <= max_load`` is expected but not enforced.
    """

    current_load: int = Field(ge=0)
    max_load: int = Field(ge=0)


class CandidateSlot(SlotwiseModel):
    """A proposed time interval plus its assigned resources."""

    id: str
    start: datetime
    end: datetime
    assigned_resources: list[Resource] = Field(default_factory=list)
    load_info: Optional[LoadInfo] = None

    @model_validator(mode="after")
    def _check_interval(self) -> "CandidateSlot":
        if self.end <= self.start:
            raise ValueError(
                f"Slot {self.id!r} ends at {self.end.isoformat()} which is not "
                f"after its start {self.start.isoformat()}"
            )
        return self

    @property
    def weekday(self) -> int:
        """Weekday of the start time, 0 = Sunday."""
        return day_of_week(self.start)

    @property
    def hour(self) -> int:
        return self.start.hour

    @property
    def resource_ids(self) -> list[str]:
        return [r.resource_id for r in self.assigned_resources]


class ScoringFactors(SlotwiseModel):
    """Per-factor breakdown of a slot score, each value in [0, 1]."""

    preference_match: float = Field(ge=0.0, le=1.0)
    load_balance: float = Field(ge=0.0, le=1.0)
    time_of_day: float = Field(ge=0.0, le=1.0)
    day_of_week: float = Field(ge=0.0, le=1.0)
    past_success: float = Field(ge=0.0, le=1.0)
    participant_satisfaction: float = Field(ge=0.0, le=1.0)


class RankedRecommendation(CandidateSlot):
    """A candidate slot together with its aggregate score and reasons."""

    score: float = Field(ge=0.0, le=1.0)
    factors: ScoringFactors
    reasons: list[str] = Field(default_factory=list)
