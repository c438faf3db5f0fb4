#!/usr/bin/env python3
"""Court schedule builder.

Generate mode (default):
    courtsched [config.yaml] [--roster teams.csv] [-o OUTDIR]

    Pairs the roster round-robin, places matches on the court/time-slot grid,
    validates the result and writes:
      {OUTDIR}/schedule.csv  - MatchID, Day, StartTime, Court, SideA, SideB, Status
      {OUTDIR}/schedule.txt  - Human-readable day view + per-competitor schedule
      {OUTDIR}/stats.txt     - Validation report + statistics

Verify mode:
    courtsched [config.yaml] [--roster teams.csv] --verify schedule.csv

    Re-imports an exported (possibly hand-edited) CSV and re-runs validation.
    Exit code 0 if there are no error-severity violations, 1 otherwise.

Examples:
    courtsched                                # config.yaml, teams from config
    courtsched --roster teams.csv -o spring   # roster from CSV, custom dir
    courtsched --verify spring/schedule.csv --roster teams.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from courtsched.config import load_config
from courtsched.generator import generate_schedule
from courtsched.ids import random_ids, sequential_ids
from courtsched.output import parse_schedule_csv, write_schedule
from courtsched.roster import load_roster
from courtsched.stats import compute_stats, format_stats_report
from courtsched.validator import format_validation_report, summarize, validate


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Round-robin court schedule builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Exit codes:
  0  No error-severity violations
  1  Double-booked competitors (or court), too few competitors, bad input,
     or unreadable rows in a --verify CSV
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--roster", metavar="CSV",
        help="Roster CSV (id,name,...). Overrides the config's teams list."
    )
    parser.add_argument(
        "--output-dir", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--verify", metavar="CSV",
        help="Validate an existing schedule CSV instead of generating"
    )
    parser.add_argument(
        "--sequential-ids", action="store_true",
        help="Number matches match-1, match-2, ... instead of random ids"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    try:
        loaded = load_config(config_path)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    competitors = loaded["competitors"]
    if args.roster:
        if not Path(args.roster).exists():
            print(f"Error: roster file {args.roster} not found")
            sys.exit(1)
        print(f"Loading roster from {args.roster}...")
        try:
            competitors = load_roster(args.roster)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
    print(f"Loaded {len(competitors)} competitors")

    config = loaded["config"]
    courts = loaded["courts"]
    time_slots = loaded["time_slots"]

    if args.verify:
        if not Path(args.verify).exists():
            print(f"Error: {args.verify} not found")
            sys.exit(1)
        print(f"Verifying schedule from {args.verify}...")
        skipped: list[int] = []
        matches = parse_schedule_csv(
            Path(args.verify).read_text(), competitors, courts, time_slots, config,
            skipped=skipped,
        )
        print(f"Loaded {len(matches)} matches")
        if skipped:
            print(f"Error: skipped {len(skipped)} unreadable rows (lines "
                  f"{', '.join(str(n) for n in skipped)})")

        violations = validate(matches, competitors, config)
        print(format_validation_report(violations))
        print("\n" + format_stats_report(compute_stats(matches, competitors),
                                         competitors))
        sys.exit(0 if summarize(violations)["valid"] and not skipped else 1)

    # Generation mode
    if len(competitors) < 2:
        print(f"Error: need at least 2 competitors to schedule, have {len(competitors)}")
        sys.exit(1)

    id_factory = sequential_ids() if args.sequential_ids else random_ids()
    print(f"Generating schedule ({config.matches_per_competitor} matches per "
          f"competitor, {len(courts)} courts, {len(time_slots)} time slots)...")
    result = generate_schedule(competitors, courts, time_slots, config,
                               id_factory=id_factory)
    if result.condition:
        print(f"Error: {result.condition}")
        sys.exit(1)
    print(f"Generated {len(result.matches)} matches over {result.rounds} rounds")

    print("\nValidating...")
    violations = validate(result.matches, competitors, config)
    report = format_validation_report(violations)
    print(report)

    stats = compute_stats(result.matches, competitors, byes=result.byes)
    stats_text = format_stats_report(stats, competitors)
    print("\n" + stats_text)

    print("\nWriting output files...")
    write_schedule(result.matches, competitors, courts,
                   output_dir=args.output_dir,
                   title=loaded["tournament"]["name"].upper())

    stats_path = Path(args.output_dir) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text)
    print(f"Written: {stats_path}")

    summary = summarize(violations)
    if summary["valid"]:
        print("\nSchedule generated successfully!")
    else:
        print(f"\nSchedule has {len(summary['errors'])} conflicts.")
        print("Add courts or time slots, or move matches and re-run --verify.")
        sys.exit(1)


if __name__ == "__main__":
    main()
