"""Conflict detection for a single proposed slot."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from slotwise.config import get_settings
from slotwise.models import CandidateSlot, Conflict, ConflictType, ScheduledBooking
from slotwise.utils.time import align_awareness

logger = logging.getLogger(__name__)


def intervals_overlap(
    start1: datetime, end1: datetime, start2: datetime, end2: datetime
) -> bool:
    """Strict overlap; touching intervals do not overlap."""
    return start1 < end2 and end1 > start2


class ConflictDetector:
    """Checks a proposed slot against the existing schedule.

    Only double bookings and out-of-hours starts are detected here. Load,
    holiday and preference conflicts come from external collaborators and
    are passed straight to the resolver.
    """

    def __init__(
        self,
        work_hours_start: int | None = None,
        work_hours_end: int | None = None,
    ) -> None:
        config = get_settings()
        self.work_hours_start = (
            config.work_hours_start if work_hours_start is None else work_hours_start
        )
        self.work_hours_end = (
            config.work_hours_end if work_hours_end is None else work_hours_end
        )

    def detect(
        self,
        proposed_slot: CandidateSlot | dict[str, Any],
        existing_schedule: Sequence[ScheduledBooking | dict[str, Any]],
    ) -> list[Conflict]:
        """Return the conflicts the proposed slot would cause.

        Raises:
            pydantic.ValidationError: If the slot or a booking is malformed.
        """
        slot = CandidateSlot.model_validate(proposed_slot)
        schedule = [ScheduledBooking.model_validate(b) for b in existing_schedule]
        resource_ids = slot.resource_ids

        conflicts: list[Conflict] = []
        for booking in schedule:
            # Naive timestamps on either side are read as UTC.
            booking_start = align_awareness(booking.start, slot.start)
            booking_end = align_awareness(booking.end, slot.start)
            if not intervals_overlap(slot.start, slot.end, booking_start, booking_end):
                continue

            affected = [r for r in resource_ids if r in booking.participants]
            if affected:
                conflicts.append(
                    Conflict(
                        type=ConflictType.DOUBLE_BOOKING,
                        description=f"Double-booking detected for: {', '.join(affected)}",
                        affected_participants=affected,
                        severity=5,
                        metadata={"booking_id": booking.booking_id} if booking.booking_id else {},
                    )
                )

        start_hour = slot.hour
        if start_hour < self.work_hours_start or start_hour >= self.work_hours_end:
            conflicts.append(
                Conflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    description=(
                        f"Proposed time ({start_hour:02d}:00) is outside work hours "
                        f"({self.work_hours_start:02d}:00-{self.work_hours_end:02d}:00)"
                    ),
                    affected_participants=list(resource_ids),
                    severity=3,
                )
            )

        if conflicts:
            logger.info(
                "Slot %s has %d conflict(s): %s",
                slot.id,
                len(conflicts),
                ", ".join(c.type.value for c in conflicts),
            )
        return conflicts
