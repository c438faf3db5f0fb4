"""Config loading and validation for the court scheduler."""

from datetime import date, time
from pathlib import Path

import yaml

from courtsched.grid import build_courts, build_time_slots
from courtsched.models import Competitor, TournamentConfig

DEFAULT_DAYS = 2
DEFAULT_MATCHES_PER_COMPETITOR = 3
DEFAULT_MATCH_DURATION = 45
DEFAULT_MIN_REST = 15
DEFAULT_AVOID_BACK_TO_BACK = True
DEFAULT_COURTS = 3
DEFAULT_TIME_SLOTS = ["09:00", "10:00", "11:00", "12:00",
                      "13:00", "14:00", "15:00", "16:00"]


def parse_time(s) -> time:
    """Parse time strings like '5:30pm', '10am', '17:00'.

    YAML 1.1 reads an unquoted 9:00 as the base-60 integer 540, which is
    minutes since midnight, so ints are accepted too.
    """
    if isinstance(s, int):
        return time(s // 60, s % 60)

    s_lower = str(s).strip().lower()

    is_pm = s_lower.endswith("pm")
    is_am = s_lower.endswith("am")

    # Strip am/pm suffix
    s_clean = s_lower
    if is_pm or is_am:
        s_clean = s_clean[:-2].strip()

    if ":" in s_clean:
        parts = s_clean.split(":")
        h = int(parts[0])
        m = int(parts[1])
    else:
        h = int(s_clean)
        m = 0

    if is_pm and h < 12:
        h += 12
    elif is_am and h == 12:
        h = 0

    return time(h, m)


def parse_date(s: str) -> date:
    """Parse date string YYYY-MM-DD."""
    parts = s.strip().split("-")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))


def _parse_competitors(raw_teams: list) -> list[Competitor]:
    competitors = []
    for i, entry in enumerate(raw_teams, 1):
        if isinstance(entry, dict):
            name = str(entry["name"])
            competitors.append(Competitor(
                id=str(entry.get("id", f"team-{i}")),
                name=name,
                age_group=entry.get("age_group"),
                grade_level=entry.get("grade_level"),
                city=entry.get("city"),
                wins=int(entry.get("wins", 0)),
                losses=int(entry.get("losses", 0)),
            ))
        else:
            competitors.append(Competitor(id=f"team-{i}", name=str(entry)))
    return competitors


def _get(raw: dict, key: str, default):
    # an empty `key:` line loads as None
    value = raw.get(key)
    return default if value is None else value


def _section(raw: dict, key: str) -> dict:
    value = _get(raw, key, {})
    if not isinstance(value, dict):
        raise ValueError(f"`{key}` must be a mapping, got {type(value).__name__}")
    return value


def load_config(path: str | Path) -> dict:
    """Load config YAML and apply defaults, returning structured data.

    Returns dict with:
    - tournament: {name, start_date, days}
    - config: TournamentConfig (every field populated)
    - courts: list[Court]
    - time_slots: list[TimeSlot], sorted by (day, start_time)
    - competitors: list[Competitor] from the optional inline `teams` list

    Raises ValueError on malformed values.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    # Tournament
    traw = _section(raw, "tournament")
    start_date = traw.get("start_date")
    tournament = {
        "name": traw.get("name", "Tournament"),
        "start_date": parse_date(str(start_date)) if start_date else None,
        "days": int(traw.get("days", DEFAULT_DAYS)),
    }

    # Scheduling rules
    sraw = _section(raw, "schedule")
    config = TournamentConfig(
        matches_per_competitor=int(sraw.get("matches_per_competitor",
                                             DEFAULT_MATCHES_PER_COMPETITOR)),
        match_duration=int(sraw.get("match_duration", DEFAULT_MATCH_DURATION)),
        min_rest_between_games=int(sraw.get("min_rest_between_games",
                                            DEFAULT_MIN_REST)),
        avoid_back_to_back=bool(sraw.get("avoid_back_to_back",
                                         DEFAULT_AVOID_BACK_TO_BACK)),
        check_court_conflicts=bool(sraw.get("check_court_conflicts", False)),
    )

    # Resource grid
    courts = build_courts(_get(raw, "courts", DEFAULT_COURTS))
    start_times = [parse_time(t) for t in _get(raw, "time_slots", DEFAULT_TIME_SLOTS)]
    slot_duration = int(raw.get("slot_duration", config.match_duration))
    time_slots = build_time_slots(start_times, tournament["days"], slot_duration)

    competitors = _parse_competitors(_get(raw, "teams", []))

    seen_ids = set()
    for c in competitors:
        if c.id in seen_ids:
            raise ValueError(f"Duplicate team id {c.id!r} in {path}")
        seen_ids.add(c.id)

    return {
        "tournament": tournament,
        "config": config,
        "courts": courts,
        "time_slots": time_slots,
        "competitors": competitors,
    }
