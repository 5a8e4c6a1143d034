# apuec

A library for running a university esports championship. It has four
modules:

- `apuec.teams`: team registration. `TeamRegistry.register` queues a team
  as `RegistrationType.NORMAL` or `RegistrationType.WILD_CARD`. The first
  20 normal registrations are marked "early bird". Each registration saves
  the queues to `registration.csv`. `TeamRegistry.withdraw` and
  `TeamRegistry.replace` edit that file. `TeamRegistry.end_registration`
  writes the top 96 teams to `teams.csv`, early birds first, then normal
  entries, then wild cards. It raises `RegistrationError` when fewer than
  96 teams qualify.
- `apuec.scheduler`: match scheduling. `MatchScheduler.start_tournament`
  reads a teams file with `read_teams`. The teams play three knockout
  rounds, and the first 12 remaining teams play a group stage in three
  groups of four. The two teams in each group that reach 3 points go on,
  and these 6 finalists play a knockout stage with one semifinal bye. The
  method returns the champion. Every match is printed and logged to
  `result.csv`. Pass a `random.Random` as `rng` to get a repeatable
  tournament.
- `apuec.spectators`: spectator seating. `SpectatorManager` holds VIP,
  Influencer and General sections, and spectators wait in a
  `SpectatorQueue`. `allocate_seating` seats them by type priority, then by
  earlier arrival. Influencers get a General seat when the Influencer
  section is full. `save` and `load` use a CSV file.
  `SpectatorManager.run` is an interactive text menu for all of this.
- `apuec.statistics`: match history. `read_results` reads the results log.
  `team_matches` and `team_stats` filter and count it.
  `format_all_matches` (latest first), `format_team_matches` and
  `format_team_stats` render text reports.

## Installation

```
pip install .
```

## Examples

```python
from apuec.teams import TeamRegistry, RegistrationType

registry = TeamRegistry()  # keeps registration.csv in the current directory
registry.register("Team01", RegistrationType.NORMAL)
registry.register("Team02", RegistrationType.WILD_CARD)
```

```python
import random
from apuec.scheduler import MatchScheduler

scheduler = MatchScheduler(result_path="result.csv", rng=random.Random(7))
champion = scheduler.start_tournament("teams.csv")
```

```python
from apuec.spectators import SpectatorManager

manager = SpectatorManager(vip=2, influencer=1, general=5)
manager.register("Ana", "ana@example.com", "VIP", 100)
manager.register("Ben", "ben@example.com", "General", 50)
manager.allocate_seating()
print(manager.render_venue_status())
manager.save("spectators.csv")
```

```python
from apuec.statistics import read_results, team_stats, format_team_stats

results = read_results("result.csv")
print(format_team_stats(team_stats(results, "Team01")))
```

## What it does not do

- No command is installed. The package has no combined main menu that
  links registration, scheduling, spectators and statistics. Call the
  modules from Python. The only interactive menu is
  `SpectatorManager.run`.
- There is no player registration: no player queues, check-in or
  wildcard replacement of individual players, and no `players.csv`. The
  package also writes no system report file.

## Running the tests

```
pip install .[test]
pytest
```