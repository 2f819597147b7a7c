"""Tests for ConflictDetector."""

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from slotwise.conflicts import ConflictDetector, intervals_overlap
from slotwise.models import ConflictType, ScheduledBooking

from conftest import TUESDAY, at


@pytest.fixture
def detector() -> ConflictDetector:
    return ConflictDetector(work_hours_start=9, work_hours_end=17)


def _booking(start, minutes: int, *participants: str) -> ScheduledBooking:
    return ScheduledBooking(
        start=start,
        end=start + timedelta(minutes=minutes),
        participants=list(participants),
    )


def test_overlap_with_shared_resource_is_double_booking(
    detector: ConflictDetector, make_slot
) -> None:
    slot = make_slot("p", at(TUESDAY, 10), resources=("r1", "r2"))
    schedule = [_booking(at(TUESDAY, 10, 30), 60, "r1", "someone-else")]

    conflicts = detector.detect(slot, schedule)

    assert len(conflicts) == 1
    assert conflicts[0].type == ConflictType.DOUBLE_BOOKING
    assert conflicts[0].severity == 5
    assert conflicts[0].affected_participants == ["r1"]


def test_touching_or_unshared_bookings_do_not_conflict(
    detector: ConflictDetector, make_slot
) -> None:
    slot = make_slot("p", at(TUESDAY, 10), resources=("r1",))
    schedule = [
        _booking(at(TUESDAY, 11), 30, "r1"),  # starts when the slot ends
        _booking(at(TUESDAY, 9), 60, "r1"),  # ends when the slot starts
        _booking(at(TUESDAY, 10), 60, "r2"),  # overlaps, nobody shared
    ]
    assert detector.detect(slot, schedule) == []


def test_each_overlapping_booking_reported(detector: ConflictDetector, make_slot) -> None:
    slot = make_slot("p", at(TUESDAY, 10), minutes=120, resources=("r1", "r2"))
    schedule = [
        {"start": at(TUESDAY, 10), "end": at(TUESDAY, 11), "participants": ["r1"], "bookingId": "b1"},
        {"start": at(TUESDAY, 11), "end": at(TUESDAY, 12), "participants": ["r2"]},
    ]

    conflicts = detector.detect(slot, schedule)

    assert [c.affected_participants for c in conflicts] == [["r1"], ["r2"]]
    assert conflicts[0].metadata == {"booking_id": "b1"}


@pytest.mark.parametrize(("hour", "outside"), [(8, True), (9, False), (16, False), (17, True)])
def test_outside_work_hours(
    detector: ConflictDetector, make_slot, hour: int, outside: bool
) -> None:
    slot = make_slot("p", at(TUESDAY, hour), resources=("r1", "r2"))

    conflicts = detector.detect(slot, [])

    if outside:
        assert len(conflicts) == 1
        assert conflicts[0].type == ConflictType.OUTSIDE_HOURS
        assert conflicts[0].severity == 3
        assert conflicts[0].affected_participants == ["r1", "r2"]
    else:
        assert conflicts == []


def test_work_hours_default_from_settings(make_slot) -> None:
    conflicts = ConflictDetector().detect(make_slot("p", at(TUESDAY, 7)), [])
    assert [c.type for c in conflicts] == [ConflictType.OUTSIDE_HOURS]


def test_malformed_booking_rejected(detector: ConflictDetector, make_slot) -> None:
    with pytest.raises(ValidationError):
        detector.detect(
            make_slot("p", at(TUESDAY, 10)),
            [{"start": at(TUESDAY, 11), "end": at(TUESDAY, 10), "participants": []}],
        )


def test_intervals_overlap() -> None:
    assert intervals_overlap(at(TUESDAY, 9), at(TUESDAY, 11), at(TUESDAY, 10), at(TUESDAY, 12))
    assert not intervals_overlap(at(TUESDAY, 9), at(TUESDAY, 10), at(TUESDAY, 10), at(TUESDAY, 12))


def test_aware_slot_against_naive_booking(detector: ConflictDetector, make_slot) -> None:
    """Naive booking times are read as UTC instead of failing the comparison."""
    slot = make_slot("p", at(TUESDAY, 10).replace(tzinfo=timezone.utc))

    conflicts = detector.detect(
        slot,
        [{"start": "2025-01-07T10:30:00", "end": "2025-01-07T11:30:00", "participants": ["r1"]}],
    )

    assert [c.type for c in conflicts] == [ConflictType.DOUBLE_BOOKING]


def test_naive_slot_against_offset_booking(detector: ConflictDetector, make_slot) -> None:
    slot = make_slot("p", at(TUESDAY, 10))
    plus_two = timezone(timedelta(hours=2))

    overlapping = _booking(at(TUESDAY, 12, 30).replace(tzinfo=plus_two), 60, "r1")
    earlier = _booking(at(TUESDAY, 10, 30).replace(tzinfo=plus_two), 60, "r1")

    assert [c.type for c in detector.detect(slot, [overlapping])] == [
        ConflictType.DOUBLE_BOOKING
    ]
    assert detector.detect(slot, [earlier]) == []
