import io
import random

import pytest

from apuec.scheduler import (
    MatchScheduler,
    MatchTeam,
    SchedulerError,
    read_teams,
    status_priority,
)


def _write_teams(path, rows):
    path.write_text("".join(f"{name},{status}\n" for name, status in rows), encoding="utf-8")


def _standard_rows(count=96):
    statuses = ["early bird", "normal", "wild card"]
    return [(f"Team{n:03d}", statuses[n % 3]) for n in range(count)]


def _scheduler(tmp_path, seed=1):
    out = io.StringIO()
    result = tmp_path / "result.csv"
    scheduler = MatchScheduler(result, random.Random(seed), out)
    return scheduler, result, out


def _rows(result):
    lines = result.read_text(encoding="utf-8").splitlines()
    return lines[0], [line.split(",") for line in lines[1:]]


def test_status_priority_ranks():
    assert status_priority("early bird") > status_priority("normal")
    assert status_priority("normal") > status_priority("wild card")
    assert status_priority("wild card") > status_priority("unknown")
    assert status_priority("unknown") == 0


def test_read_teams_orders_lowest_priority_first_latest_first(tmp_path):
    rows = (
        [(f"W{n}", "wild card") for n in range(10)]
        + [(f"N{n}", "normal") for n in range(20)]
        + [(f"E{n}", "early bird") for n in range(66)]
    )
    path = tmp_path / "teams.csv"
    _write_teams(path, rows)
    teams = read_teams(path)
    assert len(teams) == 96
    assert [t.name for t in teams[:10]] == [f"W{n}" for n in reversed(range(10))]
    assert [t.name for t in teams[10:30]] == [f"N{n}" for n in reversed(range(20))]
    assert [t.name for t in teams[30:]] == [f"E{n}" for n in reversed(range(66))]
    assert all(t.points == 0 for t in teams)


def test_read_teams_keeps_only_96_dropping_earliest_top_seeds(tmp_path):
    rows = (
        [(f"E{n}", "early bird") for n in range(70)]
        + [(f"N{n}", "normal") for n in range(20)]
        + [(f"W{n}", "wild card") for n in range(10)]
    )
    path = tmp_path / "teams.csv"
    _write_teams(path, rows)
    names = {t.name for t in read_teams(path)}
    assert {"E0", "E1", "E2", "E3"}.isdisjoint(names)
    assert "E4" in names and "E69" in names


def test_read_teams_skips_lines_without_comma_and_truncates(tmp_path):
    rows = _standard_rows()
    rows[0] = ("X" * 60, "normal")
    path = tmp_path / "teams.csv"
    path.write_text(
        "no comma here\n" + "".join(f"{n},{s}\n" for n, s in rows), encoding="utf-8"
    )
    teams = read_teams(path)
    assert len(teams) == 96
    assert "X" * 49 in {t.name for t in teams}
    assert all("no comma" not in t.name for t in teams)


def test_read_teams_too_few(tmp_path):
    path = tmp_path / "teams.csv"
    _write_teams(path, _standard_rows(95))
    with pytest.raises(SchedulerError, match="need at least 96"):
        read_teams(path)


def test_read_teams_missing_file(tmp_path):
    with pytest.raises(SchedulerError, match="Cannot open"):
        read_teams(tmp_path / "absent.csv")


def test_constructor_writes_header(tmp_path):
    _, result, _ = _scheduler(tmp_path)
    assert result.read_text(encoding="utf-8") == "Team A,Team B,Winner\n"


def test_knockout_round_halves_and_logs(tmp_path):
    scheduler, result, out = _scheduler(tmp_path)
    teams = [MatchTeam(f"T{n}") for n in range(8)]
    winners = scheduler.knockout_round(teams)
    assert len(winners) == 4
    for pair, winner in zip(zip(teams[::2], teams[1::2]), winners):
        assert winner in pair
    _, rows = _rows(result)
    assert len(rows) == 4
    assert "=== Knockout Round: 8 Teams ===" in out.getvalue()


def test_knockout_round_odd_team_passes(tmp_path):
    scheduler, result, _ = _scheduler(tmp_path)
    teams = [MatchTeam(f"T{n}") for n in range(5)]
    winners = scheduler.knockout_round(teams)
    assert len(winners) == 3
    assert winners[-1] is teams[-1]
    _, rows = _rows(result)
    assert len(rows) == 2


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_group_stage_finalists(tmp_path, seed):
    scheduler, result, _ = _scheduler(tmp_path, seed)
    teams = [MatchTeam(f"G{n}", points=7) for n in range(12)]
    finalists = scheduler.group_stage(teams)
    names = [t.name for t in finalists]
    assert len(finalists) == 6
    assert len(set(names)) == 6
    assert set(names) <= {t.name for t in teams}
    assert all(t.points == 3 for t in finalists)
    _, rows = _rows(result)
    for team_a, team_b, winner in rows:
        assert winner in (team_a, team_b)


def test_group_stage_wrong_size(tmp_path):
    scheduler, _, _ = _scheduler(tmp_path)
    with pytest.raises(ValueError):
        scheduler.group_stage([MatchTeam("A")] * 11)


def test_knockout_stage_plays_five_matches(tmp_path):
    scheduler, result, out = _scheduler(tmp_path)
    finalists = [MatchTeam(f"F{n}") for n in range(6)]
    champion = scheduler.knockout_stage(finalists)
    assert champion in finalists
    _, rows = _rows(result)
    assert len(rows) == 5
    assert rows[-1][2] == champion.name
    assert f"=== TOURNAMENT WINNER: {champion.name} ===" in out.getvalue()
    assert "gets a BYE to the Final!" in out.getvalue()


def test_knockout_stage_wrong_size(tmp_path):
    scheduler, _, _ = _scheduler(tmp_path)
    with pytest.raises(ValueError):
        scheduler.knockout_stage([MatchTeam("A")] * 5)


def test_start_tournament_full_run(tmp_path):
    scheduler, result, out = _scheduler(tmp_path, seed=7)
    path = tmp_path / "teams.csv"
    rows = _standard_rows()
    _write_teams(path, rows)
    champion = scheduler.start_tournament(path)
    assert champion.name in {name for name, _ in rows}
    header, matches = _rows(result)
    assert header == "Team A,Team B,Winner"
    assert len(matches) >= 48 + 24 + 12 + 5
    assert matches[-1][2] == champion.name
    for team_a, team_b, winner in matches:
        assert winner in (team_a, team_b)
    assert f"=== TOURNAMENT WINNER: {champion.name} ===" in out.getvalue()


def test_start_tournament_stops_logging_afterwards(tmp_path):
    scheduler, result, _ = _scheduler(tmp_path, seed=3)
    path = tmp_path / "teams.csv"
    _write_teams(path, _standard_rows())
    scheduler.start_tournament(path)
    before = result.read_text(encoding="utf-8")
    scheduler.start_tournament(path)
    assert result.read_text(encoding="utf-8") == before


def test_start_tournament_without_teams(tmp_path):
    scheduler, result, out = _scheduler(tmp_path)
    assert scheduler.start_tournament(tmp_path / "missing.csv") is None
    assert "No teams available to start tournament." in out.getvalue()
    assert result.read_text(encoding="utf-8") == "Team A,Team B,Winner\n"