"""The changing state of a game: grid, cities, paths, units, owners and scores."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace

from pandemic.structs import Cell, Pos, Unit


@dataclass
class Path:
    """A path joining two cities, with the positions it covers."""

    origin: int = 0
    destination: int = 0
    cells: list[Pos] = field(default_factory=list)


def _warn(message: str) -> None:
    print(f"warning: {message}", file=sys.stderr)


class State:
    """Everything about a game that changes from round to round."""

    def __init__(self):
        self.cities: list[list[Pos]] = []
        self.paths: list[Path] = []
        self.grid: list[list[Cell]] = []
        self.city_owners: list[int] = []
        self.path_owners: list[int] = []
        self.units: list[Unit] = []
        self.player_units: list[list[int]] = []
        self.masks: list[Pos] = []
        self.round = 0
        self.total_scores: list[int] = []
        # -1 means the player is dead; 0..1 is the share of the cpu time limit used.
        self.cpu_status: list[float] = []

    def total_score(self, pl: int) -> int:
        """Return the total score of player ``pl``, or -1 for an unknown player."""
        if 0 <= pl < len(self.total_scores):
            return self.total_scores[pl]
        _warn(f"total score requested for player {pl}")
        return -1

    def status(self, pl: int) -> float:
        """Return the share of cpu time player ``pl`` used last round, or -2 if unknown."""
        if 0 <= pl < len(self.cpu_status):
            return self.cpu_status[pl]
        _warn(f"status requested for player {pl}")
        return -2

    def cell(self, pos: Pos) -> Cell:
        """Return a copy of the cell at ``pos``; an empty cell when outside the grid."""
        if 0 <= pos.i < len(self.grid) and 0 <= pos.j < len(self.grid[pos.i]):
            return replace(self.grid[pos.i][pos.j])
        _warn(f"cell requested for position {pos}")
        return Cell()

    def total_units(self) -> int:
        """Return the number of units in the game."""
        return len(self.units)

    def unit(self, unit_id: int) -> Unit:
        """Return a copy of unit ``unit_id``; an empty unit for an unknown id."""
        if self.unit_ok(unit_id):
            return replace(self.units[unit_id])
        _warn(f"unit requested for identifier {unit_id}")
        return Unit()

    def nb_cities(self) -> int:
        """Return the number of cities."""
        return len(self.cities)

    def city(self, city_id: int) -> list[Pos]:
        """Return the positions of city ``city_id``; an empty list for an unknown id."""
        if self.city_ok(city_id):
            return list(self.cities[city_id])
        _warn(f"city requested for identifier {city_id}")
        return []

    def city_owner(self, city_id: int) -> int:
        """Return who last conquered city ``city_id``, -1 if nobody or unknown."""
        if self.city_ok(city_id):
            return self.city_owners[city_id]
        _warn(f"city owner requested for identifier {city_id}")
        return -1

    def nb_paths(self) -> int:
        """Return the number of paths."""
        return len(self.paths)

    def path(self, path_id: int) -> Path:
        """Return a copy of path ``path_id``; an empty path for an unknown id."""
        if self.path_ok(path_id):
            p = self.paths[path_id]
            return Path(p.origin, p.destination, list(p.cells))
        _warn(f"path requested for identifier {path_id}")
        return Path()

    def path_owner(self, path_id: int) -> int:
        """Return who last conquered path ``path_id``, -1 if nobody or unknown."""
        if self.path_ok(path_id):
            return self.path_owners[path_id]
        _warn(f"path owner requested for identifier {path_id}")
        return -1

    def my_units(self, pl: int) -> list[int]:
        """Return the ids of the units of player ``pl``."""
        if 0 <= pl < len(self.player_units):
            return list(self.player_units[pl])
        _warn(f"units requested for player {pl}")
        return []

    def unit_ok(self, unit_id: int) -> bool:
        """Return whether ``unit_id`` is a valid unit identifier."""
        return 0 <= unit_id < self.total_units()

    def city_ok(self, city_id: int) -> bool:
        """Return whether ``city_id`` is a valid city identifier."""
        return 0 <= city_id < self.nb_cities()

    def path_ok(self, path_id: int) -> bool:
        """Return whether ``path_id`` is a valid path identifier."""
        return 0 <= path_id < self.nb_paths()

    def copy_state_from(self, other: State) -> None:
        """Make this state an independent copy of ``other``'s state."""
        self.cities = [list(city) for city in other.cities]
        self.paths = [Path(p.origin, p.destination, list(p.cells)) for p in other.paths]
        self.grid = [[replace(c) for c in row] for row in other.grid]
        self.city_owners = list(other.city_owners)
        self.path_owners = list(other.path_owners)
        self.units = [replace(u) for u in other.units]
        self.player_units = [list(ids) for ids in other.player_units]
        self.masks = list(other.masks)
        self.round = other.round
        self.total_scores = list(other.total_scores)
        self.cpu_status = list(other.cpu_status)