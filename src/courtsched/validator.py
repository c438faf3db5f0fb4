"""Conflict validation for generated or hand-edited schedules.

Violations are reported, never raised. A schedule with error-severity
violations is still a valid list of matches.
"""

import logging
from collections import defaultdict

from courtsched.models import (
    Competitor, Match, Severity, TournamentConfig, Violation, ViolationKind,
)

logger = logging.getLogger(__name__)


def _group_by_competitor(matches: list[Match]) -> dict[str, list[Match]]:
    """Map competitor id -> matches, in input order. Each match counts for both sides."""
    groups: dict[str, list[Match]] = defaultdict(list)
    for m in matches:
        groups[m.side_a].append(m)
        groups[m.side_b].append(m)
    return groups


def _double_bookings(competitor_id: str, name: str,
                     group: list[Match]) -> list[Violation]:
    by_slot: dict[str, list[Match]] = defaultdict(list)
    for m in group:
        by_slot[m.time_slot_id].append(m)

    violations = []
    for slot_id, bucket in by_slot.items():
        if len(bucket) < 2:
            continue
        ids = ", ".join(m.id for m in bucket)
        violations.append(Violation(
            match_id=bucket[-1].id,
            kind=ViolationKind.COMPETITOR_DOUBLE_BOOKED,
            description=(
                f"{name} is booked in {len(bucket)} matches in time slot "
                f"{slot_id} ({ids})"
            ),
            severity=Severity.ERROR,
            competitor_id=competitor_id,
        ))
    return violations


def _rest_shortfalls(competitor_id: str, name: str, group: list[Match],
                     min_rest: int) -> list[Violation]:
    # Sort on time values, not "HH:MM" strings
    ordered = sorted(group, key=lambda m: (m.day, m.start_time))

    violations = []
    for prev, curr in zip(ordered, ordered[1:]):
        if prev.day != curr.day:
            continue
        gap = curr.start_minutes - prev.end_minutes
        if gap < min_rest:
            violations.append(Violation(
                match_id=curr.id,
                kind=ViolationKind.INSUFFICIENT_REST,
                description=(
                    f"{name} gets {gap} min rest before match {curr.id} "
                    f"(after {prev.id}, minimum {min_rest} min)"
                ),
                severity=Severity.WARNING,
                competitor_id=competitor_id,
                related_match_id=prev.id,
            ))
    return violations


def _court_double_bookings(matches: list[Match]) -> list[Violation]:
    by_placement: dict[tuple[str, str], list[Match]] = defaultdict(list)
    for m in matches:
        by_placement[m.placement].append(m)

    violations = []
    for (slot_id, court_id), bucket in by_placement.items():
        if len(bucket) < 2:
            continue
        ids = ", ".join(m.id for m in bucket)
        violations.append(Violation(
            match_id=bucket[-1].id,
            kind=ViolationKind.COURT_DOUBLE_BOOKED,
            description=(
                f"Court {court_id} holds {len(bucket)} matches in time slot "
                f"{slot_id} ({ids})"
            ),
            severity=Severity.ERROR,
        ))
    return violations


def validate(matches: list[Match], competitors: list[Competitor],
             config: TournamentConfig) -> list[Violation]:
    """Check a match list for competitor double-booking and short rest.

    - competitor-double-booked (error): a competitor has more than one match
      in the same time slot. One violation per colliding slot, referencing
      the later match.
    - insufficient-rest (warning, only when config.avoid_back_to_back): two
      consecutive same-day matches of a competitor leave a gap shorter than
      config.min_rest_between_games. References the later match.
    - court-double-booked (error, only when config.check_court_conflicts):
      more than one match on the same court in the same time slot.

    The result order is unspecified; use sort_violations for display.
    """
    names = {c.id: c.name for c in competitors}
    violations: list[Violation] = []

    for competitor_id, group in _group_by_competitor(matches).items():
        name = names.get(competitor_id, competitor_id)
        violations.extend(_double_bookings(competitor_id, name, group))
        if config.avoid_back_to_back:
            violations.extend(_rest_shortfalls(
                competitor_id, name, group, config.min_rest_between_games
            ))

    if config.check_court_conflicts:
        violations.extend(_court_double_bookings(matches))

    logger.debug("Validated %d matches: %d violation(s)",
                 len(matches), len(violations))
    return violations


def sort_violations(violations: list[Violation]) -> list[Violation]:
    """Stable presentation order: (kind, match id, competitor id)."""
    return sorted(violations, key=lambda v: (
        v.kind.value, v.match_id, v.competitor_id or "",
    ))


def summarize(violations: list[Violation]) -> dict:
    """Split violations by severity.

    Returns dict with:
    - valid: bool (True if no error-severity violations)
    - errors: list of error Violations
    - warnings: list of warning Violations
    """
    ordered = sort_violations(violations)
    errors = [v for v in ordered if v.severity is Severity.ERROR]
    warnings = [v for v in ordered if v.severity is Severity.WARNING]
    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(violations: list[Violation]) -> str:
    """Format validation results as text."""
    result = summarize(violations)
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no error-severity violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for v in result["errors"]:
            lines.append(f"  ERROR [{v.kind.value}] {v.match_id}: {v.description}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for v in result["warnings"]:
            lines.append(f"  WARN [{v.kind.value}] {v.match_id}: {v.description}")

    return "\n".join(lines)
