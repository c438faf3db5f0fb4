"""Output formatters and schedule CSV re-import."""

import csv
import logging
from io import StringIO
from pathlib import Path

from courtsched.config import parse_time
from courtsched.models import (
    Competitor, Court, Match, MatchStatus, TimeSlot, TournamentConfig,
)

logger = logging.getLogger(__name__)

CSV_HEADER = ["MatchID", "Day", "StartTime", "Court", "SideA", "SideB", "Status"]
UNKNOWN = "Unknown"


def _fmt_time(t) -> str:
    return t.strftime("%H:%M")


def format_schedule_csv(matches: list[Match], competitors: list[Competitor],
                        courts: list[Court]) -> str:
    """One row per match, in list order.

    Columns: MatchID, Day, StartTime, Court, SideA, SideB, Status
    Side names fall back to 'Unknown' when an id is not on the roster.
    """
    names = {c.id: c.name for c in competitors}
    court_names = {c.id: c.name for c in courts}

    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    for m in matches:
        writer.writerow([
            m.id,
            m.day,
            _fmt_time(m.start_time),
            court_names.get(m.court_id, m.court_id),
            names.get(m.side_a, UNKNOWN),
            names.get(m.side_b, UNKNOWN),
            m.status.value,
        ])
    return output.getvalue()


def format_schedule(matches: list[Match], competitors: list[Competitor],
                    courts: list[Court], title: str = "TOURNAMENT SCHEDULE") -> str:
    """Format schedule as human-readable text: by day and slot, then per competitor."""
    names = {c.id: c.name for c in competitors}
    court_names = {c.id: c.name for c in courts}

    def _name(cid: str) -> str:
        return names.get(cid, UNKNOWN)

    lines = []
    lines.append("=" * 72)
    lines.append(title)
    lines.append("=" * 72)

    by_day: dict[int, list[Match]] = {}
    for m in matches:
        by_day.setdefault(m.day, []).append(m)

    for day in sorted(by_day.keys()):
        lines.append(f"\n--- DAY {day} ---")
        day_matches = sorted(by_day[day], key=lambda m: (m.start_time, m.court_id))
        for m in day_matches:
            court = court_names.get(m.court_id, m.court_id)
            lines.append(
                f"  {_fmt_time(m.start_time)}  {court:<10} "
                f"{_name(m.side_a):<20} vs {_name(m.side_b):<20} [{m.status.value}]"
            )

    lines.append("\n" + "=" * 72)
    lines.append("PER-COMPETITOR SCHEDULES")
    lines.append("=" * 72)

    by_competitor: dict[str, list[Match]] = {}
    for m in matches:
        by_competitor.setdefault(m.side_a, []).append(m)
        by_competitor.setdefault(m.side_b, []).append(m)

    roster_order = [c.id for c in competitors if c.id in by_competitor]
    extra = sorted(cid for cid in by_competitor if cid not in names)
    for cid in roster_order + extra:
        own = sorted(by_competitor[cid], key=lambda m: (m.day, m.start_time))
        lines.append(f"\n{_name(cid)}:")
        for i, m in enumerate(own, 1):
            court = court_names.get(m.court_id, m.court_id)
            lines.append(
                f"  {i:>2}. Day {m.day} {_fmt_time(m.start_time)} "
                f"vs {_name(m.opponent(cid)):<20} @ {court}"
            )

    return "\n".join(lines)


def write_schedule(matches: list[Match], competitors: list[Competitor],
                   courts: list[Court], output_dir: str = "output",
                   title: str = "TOURNAMENT SCHEDULE"):
    """Write schedule.csv and schedule.txt into output_dir."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    csv_path = out_dir / "schedule.csv"
    csv_path.write_text(format_schedule_csv(matches, competitors, courts))
    print(f"Written: {csv_path}")

    text_path = out_dir / "schedule.txt"
    text_path.write_text(format_schedule(matches, competitors, courts, title=title))
    print(f"Written: {text_path}")


def parse_schedule_csv(text: str, competitors: list[Competitor],
                       courts: list[Court], time_slots: list[TimeSlot],
                       config: TournamentConfig,
                       skipped: list[int] | None = None) -> list[Match]:
    """Re-import an exported (possibly hand-edited) schedule CSV.

    Sides and courts are resolved by display name first, then by id. The
    time slot is looked up by (Day, StartTime); a time with no matching slot
    gets a synthetic id 'day{d}-{HH:MM}' so the match can still be validated.
    Rows that cannot be parsed are skipped with a warning; pass a list as
    'skipped' to collect their line numbers.
    """
    by_name: dict[str, str] = {}
    for c in competitors:
        by_name.setdefault(c.name, c.id)
    competitor_ids = {c.id for c in competitors}

    court_by_name = {c.name: c.id for c in courts}
    court_ids = {c.id for c in courts}
    slot_by_key = {(s.day, s.start_time): s for s in time_slots}

    def _side(value: str) -> str:
        if value in by_name:
            return by_name[value]
        if value in competitor_ids:
            return value
        logger.warning("Unknown competitor %r in schedule CSV", value)
        return value

    def _court(value: str) -> str:
        if value in court_by_name:
            return court_by_name[value]
        if value not in court_ids:
            logger.warning("Unknown court %r in schedule CSV", value)
        return value

    matches = []
    reader = csv.DictReader(StringIO(text))
    for line_no, row in enumerate(reader, 2):
        try:
            day = int(row["Day"])
            start = parse_time(row["StartTime"])
            slot = slot_by_key.get((day, start))
            slot_id = slot.id if slot else f"day{day}-{_fmt_time(start)}"
            status_text = (row.get("Status") or "").strip()
            status = (MatchStatus.from_str(status_text) if status_text
                      else MatchStatus.SCHEDULED)
            matches.append(Match(
                id=row["MatchID"].strip(),
                side_a=_side(row["SideA"].strip()),
                side_b=_side(row["SideB"].strip()),
                court_id=_court(row["Court"].strip()),
                time_slot_id=slot_id,
                day=day,
                start_time=start,
                duration=config.match_duration,
                status=status,
            ))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Schedule CSV line %d: %s, skipping row", line_no, e)
            if skipped is not None:
                skipped.append(line_no)

    return matches
