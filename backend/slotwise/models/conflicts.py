"""Conflict and resolution models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, model_validator

from slotwise.models.base import SlotwiseModel
from slotwise.models.slots import RankedRecommendation


class ConflictType(str, Enum):
    """Scheduling problem categories."""

    DOUBLE_BOOKING = "double_booking"
    LOAD_EXCEEDED = "load_exceeded"
    OUTSIDE_HOURS = "outside_hours"
    HOLIDAY = "holiday"
    PREFERENCE_VIOLATION = "preference_violation"


class ResolutionAction(str, Enum):
    """Remedy kinds a resolution suggestion can propose."""

    RESCHEDULE = "reschedule"
    FIND_ALTERNATIVE = "find_alternative"
    REDUCE_DURATION = "reduce_duration"
    CHANGE_PARTICIPANTS = "change_participants"


class ScheduledBooking(SlotwiseModel):
    """An entry of the existing schedule checked for conflicts."""

    start: datetime
    end: datetime
    participants: list[str] = Field(default_factory=list)
    booking_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_interval(self) -> "ScheduledBooking":
        if self.end <= self.start:
            raise ValueError(
                f"Booking {self.booking_id or '<unnamed>'} ends at "
                f"{self.end.isoformat()} which is not after its start "
                f"{self.start.isoformat()}"
            )
        return self


class Conflict(SlotwiseModel):
    """A detected scheduling problem. Severity 5 is the most critical."""

    type: ConflictType
    description: str
    affected_participants: list[str] = Field(default_factory=list)
    severity: int = Field(ge=1, le=5)
    metadata: dict[str, Any] = Field(default_factory=dict)


class ResolutionSuggestion(SlotwiseModel):
    """One proposed remedy for a conflict."""

    action: ResolutionAction
    description: str
    alternative_slot: Optional[RankedRecommendation] = None
    confidence: float = Field(ge=0.0, le=1.0)
    tradeoffs: list[str] = Field(default_factory=list)


class Resolution(SlotwiseModel):
    """Ranked remedies for a single conflict."""

    conflict_type: ConflictType
    description: str
    affected_participants: list[str] = Field(default_factory=list)
    severity: int = Field(ge=1, le=5)
    severity_label: str
    suggestions: list[ResolutionSuggestion] = Field(default_factory=list)
