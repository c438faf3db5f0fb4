"""Court and time-slot grid construction."""

from datetime import time

from courtsched.models import Court, TimeSlot


def build_courts(courts: int | list[str]) -> list[Court]:
    """Build courts from a count ('Court 1'..'Court N') or a list of names."""
    if isinstance(courts, int):
        if courts < 1:
            raise ValueError(f"Need at least one court, got {courts}")
        return [Court(id=f"court-{i}", name=f"Court {i}")
                for i in range(1, courts + 1)]

    if not courts:
        raise ValueError("Need at least one court")
    return [Court(id=f"court-{i}", name=str(name))
            for i, name in enumerate(courts, 1)]


def build_time_slots(start_times: list[time], days: int,
                     duration: int) -> list[TimeSlot]:
    """Build the same set of slots for each day 1..days.

    Slots are sorted by start time within each day; the validator's rest
    check relies on this ordering. Ids are 'day{d}-slot{i}' with i counting
    from 0 in sorted order.
    """
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    if duration <= 0:
        raise ValueError(f"slot duration must be > 0, got {duration}")

    ordered = sorted(start_times)
    for prev, curr in zip(ordered, ordered[1:]):
        if prev == curr:
            raise ValueError(f"Duplicate slot start time {curr.strftime('%H:%M')}")

    slots = []
    for day in range(1, days + 1):
        for idx, t in enumerate(ordered):
            slots.append(TimeSlot(
                id=f"day{day}-slot{idx}",
                day=day,
                start_time=t,
                duration=duration,
            ))
    return slots


def sort_time_slots(slots: list[TimeSlot]) -> list[TimeSlot]:
    return sorted(slots, key=lambda s: (s.day, s.start_time))
