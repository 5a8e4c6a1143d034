"""Team registration: early-bird, normal and wild-card entries kept in a CSV file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

EARLY_BIRD = "early bird"
NORMAL = "normal"
WILD_CARD = "wild card"

QUEUE_CAPACITY = 200
EARLY_BIRD_SLOTS = 20
SELECTION_SIZE = 96

_NAME_LIMIT = 99
_CATEGORY_ORDER = (EARLY_BIRD, NORMAL, WILD_CARD)


@dataclass
class Team:
    """A registered team and its registration status."""

    name: str
    status: str


class RegistrationType(IntEnum):
    """How a team registers, numbered as in the registration menu."""

    NORMAL = 1
    WILD_CARD = 2


class RegistrationError(Exception):
    """Raised when a registration file cannot be used or a request cannot be met."""


def _parse_line(raw: str) -> Team | None:
    name, sep, status = raw.rstrip("\n").partition(",")
    if not sep:
        return None
    return Team(name, status)


def read_registrations(path) -> list[Team]:
    """Read ``name,status`` lines; lines without a comma are skipped.

    Raises RegistrationError if the file cannot be opened.
    """
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise RegistrationError(f"Cannot open {path}") from exc
    with handle:
        return [team for team in map(_parse_line, handle) if team is not None]


def write_registrations(path, teams: Iterable[Team]) -> None:
    """Write teams as ``name,status`` lines, replacing the file.

    Raises RegistrationError if the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(f"{team.name},{team.status}\n" for team in teams)
    except OSError as exc:
        raise RegistrationError(f"Failed to write to {path}") from exc


class TeamRegistry:
    """Normal and wild-card registration queues backed by a registration file."""

    def __init__(self, registration_path="registration.csv") -> None:
        self.registration_path = registration_path
        self.normal: list[Team] = []
        self.wild_card: list[Team] = []

    def register(self, name: str, registration_type) -> Team:
        """Queue a new team and save the registration file.

        The first 20 normal registrations are marked as early birds.
        Raises ValueError for an unknown registration type and
        RegistrationError when the queue is full.
        """
        kind = RegistrationType(registration_type)
        if kind is RegistrationType.NORMAL:
            queue = self.normal
            status = EARLY_BIRD if len(queue) < EARLY_BIRD_SLOTS else NORMAL
        else:
            queue = self.wild_card
            status = WILD_CARD
        if len(queue) >= QUEUE_CAPACITY:
            raise RegistrationError("Registration queue is full")
        team = Team(name[:_NAME_LIMIT], status)
        queue.append(team)
        self.save()
        return team

    def save(self, path=None) -> None:
        """Write normal registrations, then wild cards, to the given or default file."""
        target = self.registration_path if path is None else path
        write_registrations(target, [*self.normal, *self.wild_card])

    def end_registration(self, output_path="teams.csv") -> list[Team]:
        """Select the top 96 teams from the registration file and write them out.

        Early birds come first, then normal entries, then wild cards, each in
        file order; lines with any other status are ignored.
        Raises RegistrationError when fewer than 96 teams qualify.
        """
        by_status: dict[str, list[Team]] = {status: [] for status in _CATEGORY_ORDER}
        for team in read_registrations(self.registration_path):
            bucket = by_status.get(team.status)
            if bucket is not None:
                bucket.append(team)

        ordered = [team for status in _CATEGORY_ORDER for team in by_status[status]]
        if len(ordered) < SELECTION_SIZE:
            raise RegistrationError(
                f"Cannot end registration: only {len(ordered)} teams registered "
                f"(need {SELECTION_SIZE})"
            )
        selected = ordered[:SELECTION_SIZE]
        write_registrations(output_path, selected)
        return selected

    def withdraw(self, team_name: str) -> None:
        """Remove every entry with this name from the registration file.

        Raises RegistrationError if the team is not registered.
        """
        teams = read_registrations(self.registration_path)
        kept = [team for team in teams if team.name != team_name]
        if len(kept) == len(teams):
            raise RegistrationError(f'Team "{team_name}" not found.')
        write_registrations(self.registration_path, kept[:QUEUE_CAPACITY])

    def replace(self, old_name: str, new_name: str) -> None:
        """Rename every entry called ``old_name`` in the registration file, keeping its status.

        Raises RegistrationError if the team is not registered.
        """
        teams = read_registrations(self.registration_path)
        if not any(team.name == old_name for team in teams):
            raise RegistrationError(f'Team "{old_name}" not found.')
        renamed = [
            Team(new_name[:_NAME_LIMIT], team.status) if team.name == old_name else team
            for team in teams
        ]
        write_registrations(self.registration_path, renamed[:QUEUE_CAPACITY])