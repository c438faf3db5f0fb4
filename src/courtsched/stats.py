"""Statistics and balance reporting for a match list."""

from collections import defaultdict

from courtsched.models import Competitor, Match


def compute_stats(matches: list[Match], competitors: list[Competitor],
                  byes: dict[int, list[str]] | None = None) -> dict:
    """Compute per-competitor and per-resource counts for a schedule.

    Returns dict with:
    - matches_per_competitor: id -> match count (every roster id present)
    - matchup_counts: id -> opponent id -> count
    - matches_per_day: day -> match count
    - court_usage: court id -> match count
    - bye_counts: id -> number of byes
    """
    matches_per_competitor: dict[str, int] = {c.id: 0 for c in competitors}
    matchup_counts = defaultdict(lambda: defaultdict(int))
    matches_per_day: dict[int, int] = defaultdict(int)
    court_usage: dict[str, int] = defaultdict(int)
    bye_counts: dict[str, int] = defaultdict(int)

    for m in matches:
        a, b = m.side_a, m.side_b
        matches_per_competitor[a] = matches_per_competitor.get(a, 0) + 1
        matches_per_competitor[b] = matches_per_competitor.get(b, 0) + 1
        matchup_counts[a][b] += 1
        matchup_counts[b][a] += 1
        matches_per_day[m.day] += 1
        court_usage[m.court_id] += 1

    for ids in (byes or {}).values():
        for cid in ids:
            bye_counts[cid] += 1

    return {
        "matches_per_competitor": matches_per_competitor,
        "matchup_counts": {k: dict(v) for k, v in matchup_counts.items()},
        "matches_per_day": dict(matches_per_day),
        "court_usage": dict(court_usage),
        "bye_counts": dict(bye_counts),
    }


def format_stats_report(stats: dict, competitors: list[Competitor]) -> str:
    """Format statistics as text."""
    names = {c.id: c.name for c in competitors}
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 60)

    lines.append("\n--- MATCHES PER COMPETITOR ---")
    lines.append(f"{'Competitor':<24} {'Games':>5} {'Opp':>5} {'Bye':>5}")
    lines.append("-" * 42)
    for cid, count in stats["matches_per_competitor"].items():
        opponents = len(stats["matchup_counts"].get(cid, {}))
        byes = stats["bye_counts"].get(cid, 0)
        flag = " ***" if opponents < count else ""  # repeated opponent
        lines.append(f"{names.get(cid, cid):<24} {count:>5} {opponents:>5} {byes:>5}{flag}")

    lines.append("\n--- MATCHES PER DAY ---")
    for day in sorted(stats["matches_per_day"]):
        lines.append(f"  Day {day}: {stats['matches_per_day'][day]}")

    lines.append("\n--- COURT USAGE ---")
    for court_id in sorted(stats["court_usage"]):
        lines.append(f"  {court_id}: {stats['court_usage'][court_id]}")

    return "\n".join(lines)
