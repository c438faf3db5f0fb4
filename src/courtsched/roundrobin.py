"""Round-robin pairing (circle method) for the schedule generator."""

from dataclasses import dataclass, field

_BYE = None


@dataclass
class Round:
    """A set of pairings where each competitor plays at most once."""
    number: int
    pairings: list[tuple[str, str]]
    byes: list[str] = field(default_factory=list)


def circle_pairings(competitor_ids: list[str], rounds: int) -> list[Round]:
    """Pair competitors over `rounds` rounds using the circle method.

    Position 0 stays fixed and the remaining positions rotate one step per
    round. Round r pairs position i with position n-1-i. An odd roster gets a
    placeholder, and whoever faces it sits out that round (a bye), so every
    round holds floor(n/2) pairings.

    `rounds` is clamped to n-1. Any prefix of the full n-1 round cycle meets
    each opponent at most once.
    """
    order = list(competitor_ids)
    n_real = len(order)
    if n_real < 2:
        return []

    rounds = min(rounds, n_real - 1)

    if n_real % 2 == 1:
        order.append(_BYE)
    n = len(order)

    result = []
    for r in range(rounds):
        pairings = []
        byes = []
        for i in range(n // 2):
            a = order[i]
            b = order[n - 1 - i]
            if a is _BYE:
                byes.append(b)
            elif b is _BYE:
                byes.append(a)
            else:
                pairings.append((a, b))

        result.append(Round(number=r + 1, pairings=pairings, byes=byes))

        # Rotate: keep position 0 fixed, shift others
        order = [order[0]] + [order[-1]] + order[1:-1]

    return result


def verify_pairings(rounds: list[Round], competitor_ids: list[str],
                    complete: bool = False) -> dict:
    """Verify round-robin pairings.

    Flags anyone paired twice in one round and any pair that meets more than
    once. With complete=True, also flags pairs that never meet.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - pair_counts: dict of sorted (a, b) -> count
    - matches_per_competitor: dict of id -> match count
    """
    errors = []
    pair_counts: dict[tuple[str, str], int] = {}
    matches_per_competitor: dict[str, int] = {c: 0 for c in competitor_ids}

    for rnd in rounds:
        seen = set()
        for a, b in rnd.pairings:
            if a in seen:
                errors.append(f"Round {rnd.number}: {a} appears twice")
            if b in seen:
                errors.append(f"Round {rnd.number}: {b} appears twice")
            seen.add(a)
            seen.add(b)

            key = tuple(sorted([a, b]))
            pair_counts[key] = pair_counts.get(key, 0) + 1
            matches_per_competitor[a] = matches_per_competitor.get(a, 0) + 1
            matches_per_competitor[b] = matches_per_competitor.get(b, 0) + 1

    for (a, b), count in sorted(pair_counts.items()):
        if count > 1:
            errors.append(f"{a} vs {b}: played {count} times (expected 1)")

    if complete:
        for i, a in enumerate(competitor_ids):
            for b in competitor_ids[i + 1:]:
                key = tuple(sorted([a, b]))
                if key not in pair_counts:
                    errors.append(f"{a} vs {b}: never played")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "pair_counts": pair_counts,
        "matches_per_competitor": matches_per_competitor,
    }
