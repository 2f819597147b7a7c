"""Preference profile models for the learning system."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from slotwise.models.base import SlotwiseModel
from slotwise.utils.time import parse_hhmm, utcnow

MAX_TIME_RANGES = 3


class TimeRange(SlotwiseModel):
    """A clock-time window, ``start`` inclusive and ``end`` exclusive."""

    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _check_hhmm(cls, value: str) -> str:
        parse_hhmm(value)
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "TimeRange":
        if self.start_minutes >= self.end_minutes:
            raise ValueError(f"Time range {self.start}-{self.end} is empty")
        return self

    @property
    def start_hour(self) -> int:
        return parse_hhmm(self.start)[0]

    @property
    def end_hour(self) -> int:
        return parse_hhmm(self.end)[0]

    @property
    def start_minutes(self) -> int:
        hours, minutes = parse_hhmm(self.start)
        return hours * 60 + minutes

    @property
    def end_minutes(self) -> int:
        hours, minutes = parse_hhmm(self.end)
        return hours * 60 + minutes

    def contains_hour(self, hour: int) -> bool:
        """Hour-boundary membership test used by slot scoring."""
        return self.start_hour <= hour < self.end_hour

    def contains_minute(self, minute_of_day: int) -> bool:
        return self.start_minutes <= minute_of_day < self.end_minutes


class AvoidedTime(SlotwiseModel):
    """A weekday and/or time window the owner tends to avoid."""

    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    time_range: Optional[TimeRange] = None
    reason: Optional[str] = None


class PreferenceProfile(SlotwiseModel):
    """Scheduling preferences learned for a single owner."""

    owner_id: str
    preferred_days: set[int] = Field(default_factory=set)
    preferred_time_ranges: list[TimeRange] = Field(
        default_factory=list, max_length=MAX_TIME_RANGES
    )
    avoided_times: list[AvoidedTime] = Field(default_factory=list)
    preferred_duration: int = Field(default=60, gt=0)
    preferred_break_minutes: int = Field(default=15, ge=0)
    max_bookings_per_day: Optional[int] = Field(default=None, gt=0)
    timezone: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0, default=0.3)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("preferred_days")
    @classmethod
    def _check_days(cls, days: set[int]) -> set[int]:
        invalid = sorted(d for d in days if not 0 <= d <= 6)
        if invalid:
            raise ValueError(f"Weekdays must be within 0-6, got {invalid}")
        return days


class PreferenceMatch(SlotwiseModel):
    """Outcome of checking one start time against a profile."""

    matches: bool
    score: float = Field(ge=0.0, le=1.0)
    reasons: list[str] = Field(default_factory=list)
