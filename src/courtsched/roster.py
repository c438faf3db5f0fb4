"""Roster import from delimited text and roster grouping helpers."""

import csv
import logging
from io import StringIO
from pathlib import Path

from courtsched.ids import IdFactory, random_ids
from courtsched.models import Competitor

logger = logging.getLogger(__name__)


def _find_column(headers: list[str], *needles: str) -> int | None:
    for i, h in enumerate(headers):
        if any(n in h for n in needles):
            return i
    return None


def _cell(values: list[str], idx: int | None) -> str | None:
    if idx is None or idx >= len(values):
        return None
    return values[idx].strip() or None


def _int_cell(values: list[str], idx: int | None) -> int:
    v = _cell(values, idx)
    try:
        return int(v) if v is not None else 0
    except ValueError:
        return 0


def parse_roster_csv(text: str, id_factory: IdFactory | None = None) -> list[Competitor]:
    """Parse a roster CSV whose first two columns are id and name.

    Optional columns are recognised by header text: age/group, grade, city,
    win(s), loss(es). Rows with fewer than two values or an empty name are
    skipped; rows with an empty id get a generated one. A repeated id raises
    ValueError.
    """
    if id_factory is None:
        id_factory = random_ids("team")

    rows = [r for r in csv.reader(StringIO(text)) if any(v.strip() for v in r)]
    if not rows:
        return []

    headers = [h.strip().lower() for h in rows[0]]
    age_idx = _find_column(headers, "age", "group")
    grade_idx = _find_column(headers, "grade")
    city_idx = _find_column(headers, "city")
    wins_idx = _find_column(headers, "win")
    losses_idx = _find_column(headers, "loss")

    competitors = []
    seen_ids = set()
    for line_no, values in enumerate(rows[1:], 2):
        if len(values) < 2:
            logger.warning("Roster line %d: expected id and name, skipping", line_no)
            continue
        name = values[1].strip()
        if not name:
            logger.warning("Roster line %d: empty name, skipping", line_no)
            continue

        competitor_id = values[0].strip() or id_factory()
        if competitor_id in seen_ids:
            raise ValueError(f"Duplicate team id {competitor_id!r} on roster line {line_no}")
        seen_ids.add(competitor_id)

        competitors.append(Competitor(
            id=competitor_id,
            name=name,
            age_group=_cell(values, age_idx),
            grade_level=_cell(values, grade_idx),
            city=_cell(values, city_idx),
            wins=_int_cell(values, wins_idx),
            losses=_int_cell(values, losses_idx),
        ))
    return competitors


def load_roster(path: str | Path) -> list[Competitor]:
    return parse_roster_csv(Path(path).read_text())


def age_groups(competitors: list[Competitor]) -> list[str]:
    return sorted({c.age_group for c in competitors if c.age_group})


def cities(competitors: list[Competitor]) -> list[str]:
    return sorted({c.city for c in competitors if c.city})
