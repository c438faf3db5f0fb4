"""Data models for the court scheduling core."""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Optional


INSUFFICIENT_ROSTER = "insufficient-roster"


class MatchStatus(Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def from_str(cls, s: str) -> "MatchStatus":
        return cls(s.strip().lower())


class ViolationKind(Enum):
    COMPETITOR_DOUBLE_BOOKED = "competitor-double-booked"
    INSUFFICIENT_REST = "insufficient-rest"
    COURT_DOUBLE_BOOKED = "court-double-booked"


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Competitor:
    """An entrant (team) that can be paired into matches."""
    id: str
    name: str
    age_group: Optional[str] = None
    grade_level: Optional[str] = None
    city: Optional[str] = None
    wins: int = 0
    losses: int = 0


@dataclass
class Court:
    """One parallel resource lane."""
    id: str
    name: str
    location: Optional[str] = None


@dataclass(frozen=True)
class TimeSlot:
    """A start time on a given day, shared by all courts."""
    id: str
    day: int
    start_time: time
    duration: int

    @property
    def start_minutes(self) -> int:
        return self.start_time.hour * 60 + self.start_time.minute

    @property
    def end_time(self) -> time:
        end = self.start_minutes + self.duration
        return time((end // 60) % 24, end % 60)


@dataclass
class Match:
    """A contest between two competitors at a (time slot, court) placement.

    day and start_time are copied from the referenced TimeSlot and must be
    updated together with time_slot_id (see reassign.move_match).
    """
    id: str
    side_a: str
    side_b: str
    court_id: str
    time_slot_id: str
    day: int
    start_time: time
    duration: int
    status: MatchStatus = MatchStatus.SCHEDULED
    score: Optional[tuple[int, int]] = None

    def __post_init__(self):
        if self.side_a == self.side_b:
            raise ValueError(
                f"Match {self.id}: {self.side_a} cannot play itself"
            )

    @property
    def placement(self) -> tuple[str, str]:
        return (self.time_slot_id, self.court_id)

    @property
    def start_minutes(self) -> int:
        return self.start_time.hour * 60 + self.start_time.minute

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration

    def involves(self, competitor_id: str) -> bool:
        return competitor_id in (self.side_a, self.side_b)

    def opponent(self, competitor_id: str) -> str:
        if competitor_id == self.side_a:
            return self.side_b
        return self.side_a


@dataclass
class Violation:
    """A scheduling rule breach found by the validator."""
    match_id: str
    kind: ViolationKind
    description: str
    severity: Severity
    competitor_id: Optional[str] = None
    related_match_id: Optional[str] = None  # earlier match of a rest pair


@dataclass(frozen=True)
class TournamentConfig:
    """Fully populated scheduling configuration (durations in minutes)."""
    matches_per_competitor: int
    match_duration: int
    min_rest_between_games: int
    avoid_back_to_back: bool
    check_court_conflicts: bool = False

    def __post_init__(self):
        errors = []
        if self.matches_per_competitor < 1:
            errors.append(
                f"matches_per_competitor must be >= 1, got {self.matches_per_competitor}"
            )
        if self.match_duration <= 0:
            errors.append(
                f"match_duration must be > 0, got {self.match_duration}"
            )
        if self.min_rest_between_games < 0:
            errors.append(
                f"min_rest_between_games must be >= 0, got {self.min_rest_between_games}"
            )
        if errors:
            raise ValueError("Invalid tournament config: " + "; ".join(errors))


@dataclass
class GenerationResult:
    """Matches produced by the generator plus any reported condition."""
    matches: list[Match] = field(default_factory=list)
    condition: Optional[str] = None  # INSUFFICIENT_ROSTER or None
    rounds: int = 0
    byes: dict[int, list[str]] = field(default_factory=dict)

    @property
    def insufficient_roster(self) -> bool:
        return self.condition == INSUFFICIENT_ROSTER
