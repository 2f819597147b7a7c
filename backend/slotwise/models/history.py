"""Historical booking records used for learning and scoring."""

from datetime import datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field

from slotwise.models.base import SlotwiseModel


class HistoricalBooking(SlotwiseModel):
    """Outcome of a past booking. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    participants: list[str] = Field(default_factory=list)
    scheduled_time: datetime
    duration: int = Field(gt=0)  # minutes
    day_of_week: int = Field(ge=0, le=6)  # 0 = Sunday
    hour_of_day: int = Field(ge=0, le=23)
    successful: bool
    satisfaction: Optional[float] = Field(default=None, ge=0.0, le=5.0)
    rescheduled: Optional[bool] = None
    booking_id: Optional[str] = None
    lead_time_days: Optional[int] = Field(default=None, ge=0)
    metadata: dict[str, Any] = Field(default_factory=dict)
