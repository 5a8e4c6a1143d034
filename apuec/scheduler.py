"""Tournament scheduling: knockout rounds, group stage and final bracket."""

from __future__ import annotations

import random
import sys
from collections import deque
from dataclasses import dataclass, replace
from typing import Iterable, TextIO

MAX_TEAMS = 128
TOURNAMENT_SIZE = 96
GROUP_STAGE_SIZE = 12
GROUP_COUNT = 3
GROUP_SIZE = 4
FINALIST_COUNT = 6
POINTS_TO_ADVANCE = 3

_NAME_LIMIT = 49
_STATUS_LIMIT = 19

_STATUS_PRIORITIES = {"early bird": 3, "normal": 2, "wild card": 1}


@dataclass
class MatchTeam:
    """A team taking part in the tournament."""

    name: str
    status: str = ""
    points: int = 0


class SchedulerError(Exception):
    """Raised when the teams for a tournament cannot be prepared."""


def status_priority(status: str) -> int:
    """Return the seeding priority of a registration status; unknown ones rank 0."""
    return _STATUS_PRIORITIES.get(status, 0)


def read_teams(path) -> list[MatchTeam]:
    """Read up to 128 ``name,status`` lines and pick 96 teams in seeding order.

    Teams leave the seeding queue lowest priority first; among equal
    priorities the team read last leaves first.
    Raises SchedulerError if the file cannot be opened or holds fewer than 96 teams.
    """
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise SchedulerError(f"Error: Cannot open {path}") from exc

    entries: list[MatchTeam] = []
    with handle:
        for raw in handle:
            if len(entries) >= MAX_TEAMS:
                break
            name, sep, status = raw.rstrip("\n").partition(",")
            if not sep:
                continue
            entries.append(MatchTeam(name[:_NAME_LIMIT], status[:_STATUS_LIMIT]))

    seeded = sorted(entries, key=lambda team: status_priority(team.status), reverse=True)
    selected = list(reversed(seeded))[:TOURNAMENT_SIZE]
    if len(selected) < TOURNAMENT_SIZE:
        raise SchedulerError(
            f"Not enough teams in {path} (need at least {TOURNAMENT_SIZE})"
        )
    return selected


class MatchScheduler:
    """Runs a whole tournament, printing each match and logging it to a CSV file."""

    def __init__(
        self,
        result_path="result.csv",
        rng: random.Random | None = None,
        out: TextIO | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._out = out if out is not None else sys.stdout
        self._result_path = result_path
        try:
            with open(result_path, "w", encoding="utf-8") as handle:
                handle.write("Team A,Team B,Winner\n")
        except OSError:
            self._out.write("Error opening result.csv for logging.\n")
            self._logging = False
        else:
            self._logging = True

    def _pick_winner(self, first: MatchTeam, second: MatchTeam) -> MatchTeam:
        return first if self._rng.randrange(2) == 0 else second

    def _log(self, team_a: str, team_b: str, winner: str) -> None:
        if not self._logging:
            return
        with open(self._result_path, "a", encoding="utf-8") as handle:
            handle.write(f"{team_a},{team_b},{winner}\n")

    def _play(self, first: MatchTeam, second: MatchTeam) -> MatchTeam:
        winner = self._pick_winner(first, second)
        self._out.write(
            f"Match: [{first.name}] VS [{second.name}] --> Winner: [{winner.name}]\n"
        )
        self._log(first.name, second.name, winner.name)
        return winner

    def _rotate_randomly(self, pool: deque, times: int) -> None:
        size = len(pool)
        for _ in range(times):
            pool.rotate(-self._rng.randrange(size))

    def knockout_round(self, teams: Iterable[MatchTeam]) -> list[MatchTeam]:
        """Pair teams in order and return the winners; an odd last team goes through."""
        teams = list(teams)
        self._out.write(f"\n=== Knockout Round: {len(teams)} Teams ===\n")
        winners: list[MatchTeam] = []
        remaining = iter(teams)
        for first in remaining:
            second = next(remaining, None)
            if second is None:
                winners.append(first)
                break
            winners.append(self._play(first, second))
        return winners

    def group_stage(self, teams: Iterable[MatchTeam]) -> list[MatchTeam]:
        """Shuffle 12 teams into 3 groups of 4 and return the 6 that reach 3 points."""
        pool = deque(teams)
        if len(pool) != GROUP_STAGE_SIZE:
            raise ValueError(f"group stage needs {GROUP_STAGE_SIZE} teams, got {len(pool)}")
        self._out.write("\n=== Group Stage ===\n")
        self._rotate_randomly(pool, 2 * GROUP_STAGE_SIZE)

        groups = [
            [replace(pool.popleft(), points=0) for _ in range(GROUP_SIZE)]
            for _ in range(GROUP_COUNT)
        ]
        for number, group in enumerate(groups, start=1):
            self._out.write(f"\nGroup {number}:\n")
            for team in group:
                self._out.write(f"  - {team.name}\n")

        finalists: list[MatchTeam] = []
        for number, group in enumerate(groups, start=1):
            self._out.write(f"\n-- Group {number} Matches --\n")
            finalists.extend(self._play_group(group))

        self._out.write("\n=== Finalists advancing to Knockout Stage ===\n")
        for rank, team in enumerate(finalists, start=1):
            self._out.write(f"{rank}. {team.name} (Points: {team.points})\n")
        return finalists

    def _play_group(self, group: list[MatchTeam]) -> list[MatchTeam]:
        advanced: list[int] = []
        pairs = [(i, j) for i in range(GROUP_SIZE - 1) for j in range(i + 1, GROUP_SIZE)]
        qualified: list[MatchTeam] = []
        while len(qualified) < 2:
            for i, j in pairs:
                if i in advanced or j in advanced:
                    continue
                winner = self._play(group[i], group[j])
                winner.points += 1
                index = i if winner is group[i] else j
                if winner.points == POINTS_TO_ADVANCE and index not in advanced:
                    advanced.append(index)
                    qualified.append(replace(winner))
                    self._out.write(
                        f" >> {winner.name} advances with {POINTS_TO_ADVANCE} points!\n"
                    )
                    if len(qualified) == 2:
                        break
        return qualified

    def knockout_stage(self, finalists: Iterable[MatchTeam]) -> MatchTeam:
        """Play quarterfinals, a semifinal with one bye, and the final; return the champion."""
        pool = deque(finalists)
        if len(pool) != FINALIST_COUNT:
            raise ValueError(f"knockout stage needs {FINALIST_COUNT} teams, got {len(pool)}")
        self._out.write("\n=== Knockout Stage ===\n")
        self._rotate_randomly(pool, 12)

        quarter_winners = deque(
            self._play(pool.popleft(), pool.popleft()) for _ in range(3)
        )
        semi1 = quarter_winners.popleft()
        semi2 = quarter_winners.popleft()
        bye_team = quarter_winners.popleft()

        finalist = self._play(semi1, semi2)
        self._out.write(f">> {bye_team.name} gets a BYE to the Final!\n")

        champion = self._play(finalist, bye_team)
        self._out.write(f"\n=== TOURNAMENT WINNER: {champion.name} ===\n")
        return champion

    def start_tournament(self, path) -> MatchTeam | None:
        """Run the whole tournament from a teams file and return the champion.

        Returns None, after reporting why, when no teams could be read.
        """
        try:
            teams = read_teams(path)
        except SchedulerError as exc:
            self._out.write(f"{exc}\n")
            self._out.write("No teams available to start tournament.\n")
            return None

        for _ in range(3):
            teams = self.knockout_round(teams)
        finalists = self.group_stage(teams[:GROUP_STAGE_SIZE])
        champion = self.knockout_stage(finalists)
        self._logging = False
        return champion