"""Game information: the settings and state, with grid reading and invariant checks."""

from __future__ import annotations

import sys
from collections import Counter

from pandemic.settings import Settings
from pandemic.state import Path, State
from pandemic.structs import (
    Cell,
    CellType,
    GameError,
    Pos,
    TokenStream,
    char_to_cell_type,
)

_CELL_TYPES = frozenset(CellType)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise GameError(message)


def _parse_cell(c: str) -> Cell:
    if "a" <= c <= "d":
        return Cell(type=CellType.GRASS, virus=ord(c) - ord("a") + 1)
    if "A" <= c <= "J":
        return Cell(type=CellType.CITY, virus=ord(c) - ord("A") + 1)
    if "0" <= c <= "9":
        return Cell(type=CellType.PATH, virus=ord(c) - ord("0") + 1)
    return Cell(type=char_to_cell_type(c))


class Info(State):
    """The settings and current state of a game."""

    def __init__(self, settings: Settings | None):
        State.__init__(self)
        self.settings = settings

    def _read_positions(self, tokens: TokenStream, count: int, message: str) -> list[Pos]:
        positions = []
        for _ in range(count):
            pos = Pos(tokens.integer(), tokens.integer())
            _require(self.settings.pos_ok(pos), message)
            positions.append(pos)
        return positions

    def read_grid(self, tokens: TokenStream) -> None:
        """Read the grid, cities, paths and masks as a board prints them."""
        settings = self.settings
        tokens.word()  # first line of column labels
        tokens.word()  # second line of column labels
        grid = []
        for _ in range(settings.rows):
            tokens.word()  # row label
            line = tokens.word()
            _require(len(line) == settings.cols,
                     "The read map has a line with incorrect length.")
            grid.append([_parse_cell(c) for c in line])
        self.grid = grid

        _require(tokens.word() == "cities", "Expected 'cities'.")
        nb_cities = tokens.integer()
        self.cities = [
            self._read_positions(tokens, tokens.integer(), "Position of city is not ok.")
            for _ in range(nb_cities)
        ]

        _require(tokens.word() == "paths", "Expected 'paths'.")
        nb_paths = tokens.integer()
        paths = []
        for _ in range(nb_paths):
            a, b, size = tokens.integer(), tokens.integer(), tokens.integer()
            cells = self._read_positions(tokens, size, "Position of path is not ok.")
            paths.append(Path(a, b, cells))
        self.paths = paths

        for k, city in enumerate(self.cities):
            for p in city:
                c = grid[p.i][p.j]
                _require(c.type == CellType.CITY, "Should be city.")
                c.city_id = k

        for k, path in enumerate(self.paths):
            for p in path.cells:
                c = grid[p.i][p.j]
                _require(c.type == CellType.PATH, "Should be path.")
                c.path_id = k

        _require(tokens.word() == "masks", "Expected 'masks'.")
        nb_masks = tokens.integer()
        masks = []
        for _ in range(nb_masks):
            pos = Pos(tokens.integer(), tokens.integer())
            _require(settings.pos_ok(pos), "Position of mask is not ok.")
            c = grid[pos.i][pos.j]
            _require(c.type == CellType.GRASS, "Should be grass.")
            c.mask = True
            masks.append(pos)
        self.masks = masks

    def ok(self) -> bool:
        """Return whether the invariants hold, reporting the first broken one."""
        problem = next(self._problems(), None)
        if problem is None:
            return True
        print(f"error: {problem}", file=sys.stderr)
        return False

    def _problems(self):
        settings = self.settings
        rows, cols = settings.rows, settings.cols
        grid = self.grid

        for k in range(rows):
            for j in (0, cols - 1):
                if grid[k][j].type != CellType.WALL:
                    yield f"cell at position {Pos(k, j)} is not a wall"
        for k in range(cols):
            for i in (0, rows - 1):
                if grid[i][k].type != CellType.WALL:
                    yield f"cell at position {Pos(i, k)} is not a wall"

        for i, row in enumerate(grid):
            for j, c in enumerate(row):
                if c.type not in _CELL_TYPES:
                    yield f"cell at position {Pos(i, j)} contains invalid cell type"

        city_counts = Counter()
        for i, row in enumerate(grid):
            for j, c in enumerate(row):
                if c.type == CellType.CITY and c.city_id == -1:
                    yield f"CITY cell at position {Pos(i, j)} has invalid city identifier"
                if c.type != CellType.CITY and c.city_id != -1:
                    yield f"non-CITY cell at position {Pos(i, j)} has valid city identifier"
                if c.city_id != -1:
                    city_counts[c.city_id] += 1
        for k, city in enumerate(self.cities):
            if city_counts[k] != len(city):
                yield f"mismatch in the number of cells of city {k}"
            for p in city:
                if grid[p.i][p.j].city_id != k:
                    yield f"CITY cell at position {p} has a mismatched city identifier"

        path_counts = Counter()
        for i, row in enumerate(grid):
            for j, c in enumerate(row):
                if c.type == CellType.PATH and c.path_id == -1:
                    yield f"PATH cell at position {Pos(i, j)} has invalid path identifier"
                if c.type != CellType.PATH and c.path_id != -1:
                    yield f"non-PATH cell at position {Pos(i, j)} has valid path identifier"
                if c.path_id != -1:
                    path_counts[c.path_id] += 1
        for k, path in enumerate(self.paths):
            if path_counts[k] != len(path.cells):
                yield f"mismatch in the number of cells of path {k}"
            for p in path.cells:
                if grid[p.i][p.j].path_id != k:
                    yield f"PATH cell at position {p} has a mismatched path identifier"

        for k, path in enumerate(self.paths):
            if not self.city_ok(path.origin):
                yield f"path {k} has invalid city identifiers (1)"
            if not self.city_ok(path.destination):
                yield f"path {k} has invalid city identifiers (2)"

        seen = set()
        for row in grid:
            for c in row:
                if c.unit_id == -1:
                    continue
                if c.type == CellType.WALL:
                    yield "WALL cells cannot have units"
                if not self.unit_ok(c.unit_id):
                    yield f"unit {c.unit_id} is not a valid unit"
                if c.unit_id in seen:
                    yield f"unit {c.unit_id} appears twice"
                seen.add(c.unit_id)
        if len(seen) != self.total_units():
            yield (f"mismatch with units. Cnt is {len(seen)} "
                   f"and should be {self.total_units()}")

        for row in grid:
            for c in row:
                if c.mask and c.type != CellType.GRASS:
                    yield "masks can only be in GRASS cels"

        for unit_id, u in enumerate(self.units):
            if u.id != unit_id:
                yield "mismatch with unit identifiers (1)"
            if not settings.player_ok(u.player):
                yield "player of unit is not valid"
            if not settings.pos_ok(u.pos) or grid[u.pos.i][u.pos.j].unit_id != unit_id:
                yield "mismatch with unit identifiers (2)"
            if u.health < 0:
                yield "health cannot be negative"

        owned = set()
        for pl, ids in enumerate(self.player_units):
            for unit_id in ids:
                owned.add(unit_id)
                if not self.unit_ok(unit_id):
                    yield "mismatch with players (1)"
                elif self.units[unit_id].player != pl:
                    yield "mismatch with players (2)"
        if len(owned) != self.total_units():
            yield "number of units does not match"

        for row in grid:
            for c in row:
                if c.virus < 0:
                    yield "amount of virus should be >= 0"
                if c.type == CellType.GRASS and c.virus > 4:
                    yield "amount of virus should be <= 4 in GRASS"
                if c.type in (CellType.CITY, CellType.PATH) and c.virus > 10:
                    yield "amount of virus should be <= 10 in CITY and PATH"