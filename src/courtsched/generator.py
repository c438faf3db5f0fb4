"""Schedule generation: round-robin pairing plus sequential grid placement.

Generation is a single pass with no conflict avoidance. Placement collisions
are left for validator.validate to report.
"""

import logging

from courtsched.ids import IdFactory, random_ids
from courtsched.models import (
    INSUFFICIENT_ROSTER, Competitor, Court, GenerationResult, Match,
    MatchStatus, TimeSlot, TournamentConfig,
)
from courtsched.roundrobin import circle_pairings

logger = logging.getLogger(__name__)


def generate_schedule(competitors: list[Competitor], courts: list[Court],
                      time_slots: list[TimeSlot], config: TournamentConfig,
                      id_factory: IdFactory | None = None) -> GenerationResult:
    """Pair the roster and place each match on the (time slot, court) grid.

    Matches are produced round by round in pairing order. Placement index p
    goes to court p % len(courts) in slot p // len(courts), so every court in
    a slot is filled before moving to the next slot. If there are more
    matches than placements the walk wraps back to the first slot.

    With fewer than two competitors nothing is generated and the result
    carries condition INSUFFICIENT_ROSTER.
    """
    if len(competitors) < 2:
        logger.warning("Cannot generate schedule: %d competitor(s), need at least 2",
                       len(competitors))
        return GenerationResult(condition=INSUFFICIENT_ROSTER)

    if id_factory is None:
        id_factory = random_ids()

    n = len(competitors)
    rounds = min(config.matches_per_competitor, n - 1)
    pairing_rounds = circle_pairings([c.id for c in competitors], rounds)

    total = sum(len(r.pairings) for r in pairing_rounds)
    if total and (not courts or not time_slots):
        raise ValueError(
            f"Cannot place {total} matches on {len(courts)} court(s) "
            f"x {len(time_slots)} time slot(s)"
        )

    capacity = len(courts) * len(time_slots)
    if total > capacity:
        logger.warning("%d matches exceed %d placements; placements will repeat",
                       total, capacity)

    matches: list[Match] = []
    used_ids: set[str] = set()
    byes: dict[int, list[str]] = {}

    for rnd in pairing_rounds:
        if rnd.byes:
            byes[rnd.number] = list(rnd.byes)
        for side_a, side_b in rnd.pairings:
            p = len(matches)
            court = courts[p % len(courts)]
            slot = time_slots[(p // len(courts)) % len(time_slots)]

            match_id = id_factory()
            if match_id in used_ids:
                raise ValueError(f"Id factory returned duplicate id {match_id!r}")
            used_ids.add(match_id)

            matches.append(Match(
                id=match_id,
                side_a=side_a,
                side_b=side_b,
                court_id=court.id,
                time_slot_id=slot.id,
                day=slot.day,
                start_time=slot.start_time,
                duration=config.match_duration,
                status=MatchStatus.SCHEDULED,
            ))

    logger.debug("Generated %d matches over %d rounds for %d competitors",
                 len(matches), rounds, n)
    return GenerationResult(matches=matches, rounds=rounds, byes=byes)


def generate(competitors: list[Competitor], courts: list[Court],
             time_slots: list[TimeSlot], config: TournamentConfig,
             id_factory: IdFactory | None = None) -> list[Match]:
    """Like generate_schedule, returning only the matches."""
    return generate_schedule(competitors, courts, time_slots, config,
                             id_factory=id_factory).matches
