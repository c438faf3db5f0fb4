"""Tests for config.py — parsing and loading."""

from datetime import date, time
from pathlib import Path

import pytest

from courtsched.config import load_config, parse_date, parse_time

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestParseTime:
    def test_am(self):
        assert parse_time("10am") == time(10, 0)
        assert parse_time("9am") == time(9, 0)

    def test_pm(self):
        assert parse_time("5pm") == time(17, 0)
        assert parse_time("12pm") == time(12, 0)
        assert parse_time("1pm") == time(13, 0)

    def test_with_minutes(self):
        assert parse_time("5:30pm") == time(17, 30)
        assert parse_time("10:15am") == time(10, 15)

    def test_24hour(self):
        assert parse_time("17:00") == time(17, 0)
        assert parse_time("09:30") == time(9, 30)

    def test_midnight(self):
        assert parse_time("12am") == time(0, 0)

    def test_case_insensitive(self):
        assert parse_time("5PM") == time(17, 0)

    def test_whitespace(self):
        assert parse_time("  5:30pm  ") == time(17, 30)

    def test_yaml_sexagesimal_int(self):
        # unquoted 9:30 in YAML 1.1 loads as 570
        assert parse_time(570) == time(9, 30)


class TestParseDate:
    def test_basic(self):
        assert parse_date("2026-11-07") == date(2026, 11, 7)

    def test_whitespace(self):
        assert parse_date(" 2026-11-07 ") == date(2026, 11, 7)


class TestLoadConfigDefaults:
    def test_empty_file(self, tmp_path):
        loaded = load_config(_write(tmp_path, ""))
        cfg = loaded["config"]
        assert cfg.matches_per_competitor == 3
        assert cfg.match_duration == 45
        assert cfg.min_rest_between_games == 15
        assert cfg.avoid_back_to_back is True
        assert cfg.check_court_conflicts is False
        assert loaded["tournament"]["days"] == 2
        assert loaded["tournament"]["start_date"] is None
        assert len(loaded["courts"]) == 3
        # 8 hourly slots x 2 days
        assert len(loaded["time_slots"]) == 16
        assert loaded["competitors"] == []

    def test_empty_sections(self, tmp_path):
        loaded = load_config(_write(tmp_path, "tournament:\nschedule:\nteams:\ncourts:\ntime_slots:\n"))
        assert loaded["tournament"]["name"] == "Tournament"
        assert loaded["tournament"]["days"] == 2
        assert loaded["config"].matches_per_competitor == 3
        assert len(loaded["courts"]) == 3
        assert len(loaded["time_slots"]) == 16
        assert loaded["competitors"] == []

    def test_slot_duration_follows_match_duration(self, tmp_path):
        loaded = load_config(_write(tmp_path, "schedule:\n  match_duration: 30\n"))
        assert all(s.duration == 30 for s in loaded["time_slots"])

    def test_explicit_slot_duration(self, tmp_path):
        loaded = load_config(_write(tmp_path, "slot_duration: 60\n"))
        assert all(s.duration == 60 for s in loaded["time_slots"])


class TestLoadConfigValues:
    def test_schedule_section(self, tmp_path):
        path = _write(tmp_path, """\
tournament:
  name: Spring Classic
  start_date: 2026-04-11
  days: 1
schedule:
  matches_per_competitor: 4
  match_duration: 40
  min_rest_between_games: 20
  avoid_back_to_back: false
  check_court_conflicts: true
courts: ["North", "South"]
time_slots: ["1pm", "9am", "11am"]
""")
        loaded = load_config(path)
        assert loaded["tournament"] == {
            "name": "Spring Classic", "start_date": date(2026, 4, 11), "days": 1,
        }
        cfg = loaded["config"]
        assert cfg.matches_per_competitor == 4
        assert cfg.avoid_back_to_back is False
        assert cfg.check_court_conflicts is True
        assert [c.name for c in loaded["courts"]] == ["North", "South"]
        assert [s.start_time for s in loaded["time_slots"]] == [
            time(9, 0), time(11, 0), time(13, 0),
        ]

    def test_unquoted_times(self, tmp_path):
        loaded = load_config(_write(tmp_path, "tournament: {days: 1}\ntime_slots: [9:00, 10:30]\n"))
        assert [s.start_time for s in loaded["time_slots"]] == [time(9, 0), time(10, 30)]

    def test_teams(self, tmp_path):
        path = _write(tmp_path, """\
teams:
  - {id: T1, name: Hawks, city: Edina, wins: 2}
  - Eagles
""")
        competitors = load_config(path)["competitors"]
        assert competitors[0].id == "T1"
        assert competitors[0].city == "Edina"
        assert competitors[0].wins == 2
        assert competitors[1].id == "team-2"
        assert competitors[1].name == "Eagles"

    def test_duplicate_team_ids(self, tmp_path):
        path = _write(tmp_path, "teams:\n  - {id: T1, name: A}\n  - {id: T1, name: B}\n")
        with pytest.raises(ValueError, match="Duplicate team id"):
            load_config(path)


class TestLoadConfigErrors:
    def test_bad_duration(self, tmp_path):
        with pytest.raises(ValueError, match="match_duration"):
            load_config(_write(tmp_path, "schedule:\n  match_duration: 0\n"))

    def test_negative_rest(self, tmp_path):
        with pytest.raises(ValueError, match="min_rest_between_games"):
            load_config(_write(tmp_path, "schedule:\n  min_rest_between_games: -1\n"))

    def test_zero_days(self, tmp_path):
        with pytest.raises(ValueError, match="days"):
            load_config(_write(tmp_path, "tournament:\n  days: 0\n"))

    def test_zero_courts(self, tmp_path):
        with pytest.raises(ValueError, match="court"):
            load_config(_write(tmp_path, "courts: 0\n"))

    def test_section_not_mapping(self, tmp_path):
        with pytest.raises(ValueError, match="`schedule` must be a mapping"):
            load_config(_write(tmp_path, "schedule: fast\n"))


class TestRepoConfig:
    def test_loads(self):
        loaded = load_config(REPO_CONFIG)
        assert loaded["tournament"]["name"] == "Basketball Tournament"
        assert loaded["tournament"]["start_date"] == date(2026, 11, 7)
        assert len(loaded["competitors"]) == 6
        assert len(loaded["courts"]) == 3
        assert len(loaded["time_slots"]) == 16
