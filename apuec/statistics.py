"""Match history and per-team statistics read from the results log."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

_HISTORY_LIMIT = 1000


@dataclass(frozen=True)
class MatchResult:
    """One logged match and its winner."""

    team_a: str
    team_b: str
    winner: str


@dataclass(frozen=True)
class TeamStats:
    """Win and loss totals of one team."""

    team_name: str
    total_matches: int
    wins: int
    losses: int

    def win_rate(self) -> float | None:
        """Return the win percentage, or None when the team has played no match."""
        if self.total_matches == 0:
            return None
        return self.wins / self.total_matches * 100.0


def read_results(path) -> list[MatchResult]:
    """Read match results from a CSV file, skipping its header line.

    Raises OSError if the file cannot be opened.
    """
    results: list[MatchResult] = []
    with open(path, encoding="utf-8") as handle:
        handle.readline()
        for raw in handle:
            fields = (raw.rstrip("\n").split(",") + ["", "", ""])[:3]
            results.append(MatchResult(*fields))
    return results


def team_matches(results: Iterable[MatchResult], team_name: str) -> list[MatchResult]:
    """Return the matches in which the team played, in log order."""
    return [r for r in results if team_name in (r.team_a, r.team_b)]


def team_stats(results: Iterable[MatchResult], team_name: str) -> TeamStats:
    played = team_matches(results, team_name)
    wins = sum(1 for r in played if r.winner == team_name)
    return TeamStats(team_name, len(played), wins, len(played) - wins)


def format_all_matches(results: Iterable[MatchResult]) -> str:
    """List matches latest first; only the first 1000 logged matches are kept."""
    kept = list(results)[:_HISTORY_LIMIT]
    lines = ["All Matches (latest first):\n", "Team A vs Team B -> Winner\n"]
    lines.extend(f"{r.team_a} vs {r.team_b} -> {r.winner}\n" for r in reversed(kept))
    return "".join(lines)


def format_team_matches(results: Iterable[MatchResult], team_name: str) -> str:
    played = team_matches(results, team_name)
    lines = [f"Matches for {team_name}:\n"]
    lines.extend(f"{r.team_a} vs {r.team_b} -> Winner: {r.winner}\n" for r in played)
    if not played:
        lines.append(f"No matches found for team {team_name}.\n")
    return "".join(lines)


def format_team_stats(stats: TeamStats) -> str:
    rate = stats.win_rate()
    rate_line = (
        "Win Rate: N/A (no matches played)\n" if rate is None else f"Win Rate: {rate:.2f}%\n"
    )
    return (
        f"Statistics for {stats.team_name}:\n"
        f"Total Matches: {stats.total_matches}\n"
        f"Wins: {stats.wins}\n"
        f"Losses: {stats.losses}\n"
        + rate_line
    )