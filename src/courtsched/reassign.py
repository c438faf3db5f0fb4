"""Manual edits to a match list (drag-and-drop moves, removals, results).

Every function returns a new list and leaves its inputs untouched. Moves are
never rejected for conflicts; re-run validator.validate afterwards.
"""

from dataclasses import replace

from courtsched.models import Competitor, Court, Match, MatchStatus, TimeSlot


def _index_of(matches: list[Match], match_id: str) -> int:
    for i, m in enumerate(matches):
        if m.id == match_id:
            return i
    raise ValueError(f"No match with id {match_id!r}")


def move_match(matches: list[Match], match_id: str, court: Court,
               time_slot: TimeSlot, courts: list[Court],
               time_slots: list[TimeSlot]) -> list[Match]:
    """Place a match on a new (court, time slot), keeping day/start_time in sync.

    The target court and slot must belong to the grid given by courts and
    time_slots; anything else raises ValueError.
    """
    idx = _index_of(matches, match_id)
    if court.id not in {c.id for c in courts}:
        raise ValueError(f"Court {court.id!r} is not on the grid")
    if time_slot.id not in {s.id for s in time_slots}:
        raise ValueError(f"Time slot {time_slot.id!r} is not on the grid")
    moved = replace(
        matches[idx],
        court_id=court.id,
        time_slot_id=time_slot.id,
        day=time_slot.day,
        start_time=time_slot.start_time,
    )
    return matches[:idx] + [moved] + matches[idx + 1:]


def remove_match(matches: list[Match], match_id: str) -> list[Match]:
    idx = _index_of(matches, match_id)
    return matches[:idx] + matches[idx + 1:]


def remove_competitor(competitors: list[Competitor], matches: list[Match],
                      competitor_id: str) -> tuple[list[Competitor], list[Match]]:
    """Drop a competitor from the roster along with every match it plays in."""
    remaining = [c for c in competitors if c.id != competitor_id]
    kept = [m for m in matches if not m.involves(competitor_id)]
    return remaining, kept


def set_status(matches: list[Match], match_id: str, status: MatchStatus,
               score: tuple[int, int] | None = None) -> list[Match]:
    """Update a match's lifecycle status (and score, if given)."""
    idx = _index_of(matches, match_id)
    current = matches[idx]
    updated = replace(
        current,
        status=status,
        score=score if score is not None else current.score,
    )
    return matches[:idx] + [updated] + matches[idx + 1:]
