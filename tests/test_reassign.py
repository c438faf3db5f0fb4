"""Tests for reassign.py — manual moves and edits followed by re-validation."""

from datetime import time

import pytest

from courtsched.grid import build_courts, build_time_slots
from courtsched.models import (
    Competitor, Court, Match, MatchStatus, TimeSlot, TournamentConfig,
)
from courtsched.reassign import move_match, remove_competitor, remove_match, set_status
from courtsched.validator import validate

COURTS = build_courts(2)
SLOTS = build_time_slots([time(9), time(10), time(11)], 2, 45)


def _make_match(mid, a, b, slot_idx=0, court_idx=0):
    slot = SLOTS[slot_idx]
    return Match(
        id=mid, side_a=a, side_b=b, court_id=COURTS[court_idx].id,
        time_slot_id=slot.id, day=slot.day, start_time=slot.start_time,
        duration=45,
    )


def _schedule():
    return [
        _make_match("m1", "A", "B", 0, 0),
        _make_match("m2", "C", "D", 0, 1),
        _make_match("m3", "A", "C", 1, 0),
    ]


class TestMoveMatch:
    def test_syncs_denormalized_fields(self):
        moved = move_match(_schedule(), "m1", COURTS[1], SLOTS[4],
                           COURTS, SLOTS)
        m = moved[0]
        assert m.court_id == "court-2"
        assert m.time_slot_id == "day2-slot1"
        assert m.day == 2
        assert m.start_time == time(10, 0)

    def test_returns_new_list(self):
        original = _schedule()
        moved = move_match(original, "m1", COURTS[1], SLOTS[2],
                           COURTS, SLOTS)
        assert original[0].time_slot_id == "day1-slot0"
        assert moved is not original
        assert [m.id for m in moved] == ["m1", "m2", "m3"]

    def test_conflicting_move_allowed_then_flagged(self):
        competitors = [Competitor(id=c, name=c) for c in "ABCD"]
        config = TournamentConfig(3, 45, 15, False)
        assert validate(_schedule(), competitors, config) == []

        # put A's second match into the same slot as its first
        moved = move_match(_schedule(), "m3", COURTS[1], SLOTS[0],
                           COURTS, SLOTS)
        violations = validate(moved, competitors, config)
        assert {v.competitor_id for v in violations} == {"A", "C"}

    def test_unknown_match(self):
        with pytest.raises(ValueError, match="No match"):
            move_match(_schedule(), "nope", COURTS[0], SLOTS[0], COURTS, SLOTS)

    def test_court_off_grid(self):
        with pytest.raises(ValueError, match="Court 'court-99'"):
            move_match(_schedule(), "m1", Court("court-99", "Nowhere"), SLOTS[0],
                       COURTS, SLOTS)

    def test_slot_off_grid(self):
        stray = TimeSlot("day9-slotX", 9, time(3), 45)
        with pytest.raises(ValueError, match="Time slot 'day9-slotX'"):
            move_match(_schedule(), "m1", COURTS[0], stray, COURTS, SLOTS)

    def test_rejected_move_leaves_input(self):
        original = _schedule()
        with pytest.raises(ValueError):
            move_match(original, "m1", Court("court-3", "Court 3"), SLOTS[1],
                       COURTS, SLOTS)
        assert original[0].court_id == "court-1"
        assert original[0].time_slot_id == "day1-slot0"


class TestRemoveMatch:
    def test_removes(self):
        assert [m.id for m in remove_match(_schedule(), "m2")] == ["m1", "m3"]

    def test_unknown_match(self):
        with pytest.raises(ValueError):
            remove_match(_schedule(), "m9")


class TestRemoveCompetitor:
    def test_drops_matches(self):
        competitors = [Competitor(id=c, name=c) for c in "ABCD"]
        remaining, matches = remove_competitor(competitors, _schedule(), "A")
        assert [c.id for c in remaining] == ["B", "C", "D"]
        assert [m.id for m in matches] == ["m2"]


class TestSetStatus:
    def test_status_and_score(self):
        updated = set_status(_schedule(), "m1", MatchStatus.COMPLETED, score=(21, 18))
        assert updated[0].status == MatchStatus.COMPLETED
        assert updated[0].score == (21, 18)

    def test_keeps_existing_score(self):
        done = set_status(_schedule(), "m1", MatchStatus.COMPLETED, score=(3, 1))
        again = set_status(done, "m1", MatchStatus.IN_PROGRESS)
        assert again[0].score == (3, 1)
        assert again[0].status == MatchStatus.IN_PROGRESS
