"""Random generation of game maps: cities, paths joining them and walls."""

from __future__ import annotations

from collections import deque
from typing import Callable

from pandemic.rng import RandomGenerator
from pandemic.state import Path
from pandemic.structs import (
    CITY_CHAR,
    GRASS_CHAR,
    PATH_CHAR,
    WALL_CHAR,
    Cell,
    CellType,
    GameError,
    Pos,
    char_to_cell_type,
)

# Marks cells of old cities; they become walls once generation is over.
_TEMP_CHAR = "t"
_UNDEF_CHAR = GRASS_CHAR

# S, E, N, W
_DIRI4 = (1, 0, -1, 0)
_DIRJ4 = (0, 1, 0, -1)

# SW, S, SE, E, NE, N, NW, W
_DIRI8 = (1, 1, 1, 0, -1, -1, -1, 0)
_DIRJ8 = (-1, 0, 1, 1, 1, 0, -1, -1)


def distance(a, b, p=2.0) -> float:
    """Return the L^p distance between the points ``a`` and ``b``."""
    first = abs(a[0] - b[0]) ** p
    second = abs(a[1] - b[1]) ** p
    return (first + second) ** (1.0 / p)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise GameError(message)


class MapGenerator:
    """Builds a random map of the given size, drawing from ``rng``."""

    # Min and max number of attempts to place cities, walls and old cities.
    MIN_NUM_CITIES = 8
    MAX_NUM_CITIES = 22
    MIN_NUM_WALLS = 4
    MAX_NUM_WALLS = 7
    MIN_NUM_OLD_CITIES = 5
    MAX_NUM_OLD_CITIES = 9

    # Minimum distances between objects of the same kind.
    MIN_DISTANCE_OF_PATHS = 2
    MIN_DISTANCE_OF_CITIES = 3
    MIN_DISTANCE_OF_WALLS = 2

    # Sides of the rectangles that make cities.
    MIN_CITY_HOR_SIDE = 2
    MIN_CITY_VER_SIDE = 2
    MAX_CITY_HOR_SIDE = 6
    MAX_CITY_VER_SIDE = 6

    MIN_WALL_LENGTH = 5
    MAX_WALL_LENGTH = 10

    MAX_ATTEMPTS = 100

    def __init__(self, rows: int, cols: int, rng: RandomGenerator):
        self.rows = rows
        self.cols = cols
        self.rng = rng
        self.margin = min(rows, cols) // 5
        self._m = [[_UNDEF_CHAR] * cols for _ in range(rows)]
        # Cells of old cities; kept across failed attempts, as walls join them.
        self._old_city_cells: list[Pos] = []
        self.cities: list[list[Pos]] = []
        self.paths: list[Path] = []

    # ----------------------------------------------------------------- helpers

    def _inside(self, i: int, j: int) -> bool:
        return 0 <= i < self.rows and 0 <= j < self.cols

    def _box(self, i: int, j: int, d: int):
        for ii in range(max(0, i - d), min(self.rows - 1, i + d) + 1):
            for jj in range(max(0, j - d), min(self.cols - 1, j + d) + 1):
                yield ii, jj

    def _neighbour_one_of(self, table, i: int, j: int, d: int, c) -> bool:
        return any(table[ii][jj] == c for ii, jj in self._box(i, j, d))

    def _neighbour_none_of(self, table, i: int, j: int, d: int, a: int, b: int) -> bool:
        return any(
            table[ii][jj] not in (-1, a, b) for ii, jj in self._box(i, j, d)
        )

    def _decreasing_prob(self, i0: int, j0: int, prob: float) -> Callable[[int, int], bool]:
        """True less often as (i, j) moves away from (i0, j0)."""

        def test(i: int, j: int) -> bool:
            return self.rng.bernoulli(prob / distance((i, j), (i0, j0)))

        return test

    def _far_decreasing_prob(self, i0: int, j0: int, prob: float) -> Callable[[int, int], bool]:
        """True less often as (i, j) moves away from (i0, j0), once far enough."""

        def test(i: int, j: int) -> bool:
            p = self.rng.random(20, 40) / 10.0
            d = distance((i, j), (i0, j0), p)
            if d <= min(self.rows, self.cols) // 2:
                d = 1
            return self.rng.bernoulli(prob / d)

        return test

    @staticmethod
    def _moving_away(i0: int, j0: int):
        """True if (i, j) is closer to (i0, j0) than (ii, jj)."""

        def test(i: int, j: int, ii: int, jj: int) -> bool:
            return distance((i0, j0), (i, j)) < distance((i0, j0), (ii, jj))

        return test

    @staticmethod
    def _moving_towards(i0: int, j0: int):
        """True if (ii, jj) is closer to (i0, j0) than (i, j)."""

        def test(i: int, j: int, ii: int, jj: int) -> bool:
            return distance((i0, j0), (i, j)) > distance((i0, j0), (ii, jj))

        return test

    # ----------------------------------------------------------- shape drawing

    def mark_area_around(self, i0: int, j0: int, prob, allow_diags=True) -> list[list[bool]]:
        """Return a matrix marking an area grown from (i0, j0) where ``prob`` accepts."""
        diri, dirj = (_DIRI8, _DIRJ8) if allow_diags else (_DIRI4, _DIRJ4)
        rows, cols = self.rows, self.cols
        mkd = [[False] * cols for _ in range(rows)]
        queue = deque([(i0, j0)])
        mkd[i0][j0] = True
        while queue:
            i, j = queue.popleft()
            for di, dj in zip(diri, dirj):
                ii, jj = i + di, j + dj
                if self._inside(ii, jj) and not mkd[ii][jj] and prob(ii, jj):
                    queue.append((ii, jj))
                    mkd[ii][jj] = True

        # Fill small gaps.
        changed = True
        while changed:
            changed = False
            for i in range(2, rows - 2):
                for j in range(2, cols - 2):
                    if mkd[i - 1][j] and not mkd[i][j] and mkd[i + 1][j]:
                        mkd[i][j] = True
                        changed = True
                    if mkd[i][j - 1] and not mkd[i][j] and mkd[i][j + 1]:
                        mkd[i][j] = True
                        changed = True
                    if (mkd[i - 1][j] and not mkd[i][j]
                            and not mkd[i + 1][j] and mkd[i + 2][j]):
                        mkd[i][j] = mkd[i + 1][j] = True
                        changed = True
                    if (mkd[i][j - 1] and not mkd[i][j]
                            and not mkd[i][j + 1] and mkd[i][j + 2]):
                        mkd[i][j] = mkd[i][j + 1] = True
                        changed = True
        return mkd

    def curve_from(self, i0: int, j0: int, prob, allow_diags=True) -> list[Pos]:
        """Return a smooth self-avoiding curve starting at (i0, j0)."""
        diri, dirj = (_DIRI8, _DIRJ8) if allow_diags else (_DIRI4, _DIRJ4)
        n_dirs = len(diri)
        curve: list[Pos] = []
        mkd = [[False] * self.cols for _ in range(self.rows)]
        i, j = i0, j0
        k = self.rng.random(0, n_dirs - 1)
        while True:
            curve.append(Pos(i, j))
            mkd[i][j] = True
            for s in (-2, -1, 0, 1):
                if s < -1:
                    kk = k + self.rng.random(-1, 1)  # first try at random,
                else:
                    kk = k + s  # then try exhaustively.
                kk %= n_dirs
                ii, jj = i + diri[kk], j + dirj[kk]
                if self._inside(ii, jj) and not mkd[ii][jj] and prob(i, j, ii, jj):
                    break
            else:
                return curve
            i, j, k = ii, jj, kk

    # -------------------------------------------------------------- generation

    def _fill_borders_with_walls(self) -> None:
        m = self._m
        for k in range(self.rows):
            m[k][0] = m[k][self.cols - 1] = WALL_CHAR
        for k in range(self.cols):
            m[0][k] = m[self.rows - 1][k] = WALL_CHAR

    def _area_clear(self, i: int, j: int, di: int, dj: int, forbidden) -> bool:
        d = self.MIN_DISTANCE_OF_CITIES
        m = self._m
        for ii in range(max(0, i - d), min(self.rows, i + di + d - 1)):
            for jj in range(max(0, j - d), min(self.cols, j + dj + d - 1)):
                if m[ii][jj] in forbidden:
                    return False
        return True

    def _find_rectangle(self, min_ver: int, min_hor: int, forbidden):
        rng = self.rng
        for _ in range(self.MAX_ATTEMPTS):
            i = rng.random(0, self.rows - 1)
            j = rng.random(0, self.cols - 1)
            di = rng.random(min_ver, self.MAX_CITY_VER_SIDE)
            dj = rng.random(min_hor, self.MAX_CITY_HOR_SIDE)
            if self._area_clear(i, j, di, dj, forbidden):
                return [
                    Pos(ii, jj)
                    for ii in range(i, min(self.rows, i + di))
                    for jj in range(j, min(self.cols, j + dj))
                ]
        return []

    def _place_cities(self) -> None:
        n_cities = self.rng.random(self.MIN_NUM_CITIES, self.MAX_NUM_CITIES)
        for _ in range(n_cities):
            city = self._find_rectangle(
                self.MIN_CITY_VER_SIDE, self.MIN_CITY_HOR_SIDE, (WALL_CHAR, CITY_CHAR)
            )
            for p in city:
                self._m[p.i][p.j] = CITY_CHAR
            if city:
                self.cities.append(city)

    def _place_old_cities(self) -> None:
        n_old = self.rng.random(self.MIN_NUM_OLD_CITIES, self.MAX_NUM_OLD_CITIES)
        forbidden = (WALL_CHAR, CITY_CHAR, PATH_CHAR, _TEMP_CHAR)
        for _ in range(n_old):
            cells = self._find_rectangle(
                self.MIN_CITY_VER_SIDE + 1, self.MIN_CITY_HOR_SIDE + 1, forbidden
            )
            for p in cells:
                self._m[p.i][p.j] = _TEMP_CHAR
                self._old_city_cells.append(p)

    def _path_valid(self, curve, a: int, b: int, owners) -> bool:
        d = self.MIN_DISTANCE_OF_PATHS
        m = self._m
        return not any(
            self._neighbour_one_of(m, x.i, x.j, d, PATH_CHAR)
            or self._neighbour_one_of(m, x.i, x.j, d, _TEMP_CHAR)
            or self._neighbour_none_of(owners, x.i, x.j, d, a, b)
            for x in curve
        )

    def _place_paths(self) -> None:
        rng = self.rng
        m = self._m
        owners = [[-1] * self.cols for _ in range(self.rows)]
        for k, city in enumerate(self.cities):
            for p in city:
                owners[p.i][p.j] = k

        n_cities = len(self.cities)
        for _ in range(3 * n_cities * n_cities):
            a = rng.random(0, n_cities - 1)
            b = rng.random(0, n_cities - 1)
            if a == b:
                continue
            start = self.cities[a][rng.random(0, len(self.cities[a]) - 1)]
            end = self.cities[b][rng.random(0, len(self.cities[b]) - 1)]
            curve = self.curve_from(
                start.i, start.j, self._moving_towards(end.i, end.j), False
            )
            if curve[-1] == end and self._path_valid(curve, a, b, owners):
                cells = []
                for x in curve:
                    # Skip the cells of the curve that belong to cities.
                    if m[x.i][x.j] != CITY_CHAR:
                        m[x.i][x.j] = PATH_CHAR
                        cells.append(x)
                self.paths.append(Path(a, b, cells))

    def _wall_valid(self, cells) -> bool:
        d = self.MIN_DISTANCE_OF_WALLS
        m = self._m
        return not any(
            self._neighbour_one_of(m, x.i, x.j, d, WALL_CHAR)
            or self._neighbour_one_of(m, x.i, x.j, d, PATH_CHAR)
            for x in cells
        )

    def _place_walls(self) -> None:
        rng = self.rng
        old = self._old_city_cells
        if not old:
            return
        count = 0
        limit = 2 * self.MAX_CITY_HOR_SIDE * self.MAX_CITY_VER_SIDE
        for k in range(self.MAX_ATTEMPTS):
            if count >= self.MAX_NUM_WALLS:
                break
            # Join two old cities, or an old city with a city.
            p1 = old[rng.random(0, len(old) - 1)]
            if k % 2 == 0:
                p2 = old[rng.random(0, len(old) - 1)]
            else:
                if not self.cities:
                    continue
                a = rng.random(0, len(self.cities) - 1)
                p2 = self.cities[a][rng.random(0, len(self.cities[a]) - 1)]
            di, dj = p1.i - p2.i, p1.j - p2.j
            if di * di + dj * dj <= limit:
                continue
            curve = self.curve_from(p2.i, p2.j, self._moving_towards(p1.i, p1.j), False)
            p = rng.random(55, 75) / 100.0
            cells = []
            remaining = 5
            up = False
            for x in curve:
                if remaining == 0:
                    # Decide whether the next segment of the wall stands or not.
                    up = rng.bernoulli(p)
                    remaining = rng.random(3, 6)
                if up:
                    cells.append(x)
                remaining -= 1
            if self._wall_valid(cells):
                for x in cells:
                    if self._m[x.i][x.j] == GRASS_CHAR:
                        self._m[x.i][x.j] = WALL_CHAR
                count += 1

    def _recode_temp(self) -> None:
        for row in self._m:
            for j, c in enumerate(row):
                if c == _TEMP_CHAR:
                    row[j] = WALL_CHAR

    def is_connected(self) -> bool:
        """Return whether every non-wall cell is reachable from the centre."""
        m = self._m
        mkd = [[False] * self.cols for _ in range(self.rows)]
        stack = [(self.rows // 2, self.cols // 2)]
        while stack:
            i, j = stack.pop()
            if mkd[i][j]:
                continue
            mkd[i][j] = True
            for di, dj in zip(_DIRI4, _DIRJ4):
                ii, jj = i + di, j + dj
                if self._inside(ii, jj) and m[ii][jj] != WALL_CHAR and not mkd[ii][jj]:
                    stack.append((ii, jj))
        return all(
            c == WALL_CHAR or mkd[i][j]
            for i, row in enumerate(m)
            for j, c in enumerate(row)
        )

    def _valid(self) -> bool:
        return len(self.cities) >= self.MIN_NUM_CITIES and self.is_connected()

    def generate(self, params=()):
        """Generate a map; return its grid of cells, its cities and its paths."""
        _require(not list(params), "GENERATOR1 requires no parameter.")
        while True:
            self._m = [[_UNDEF_CHAR] * self.cols for _ in range(self.rows)]
            self.cities = []
            self.paths = []
            self._fill_borders_with_walls()
            self._place_cities()
            self._place_old_cities()
            self._place_paths()
            self._place_walls()
            self._recode_temp()
            if self._valid():
                break

        grid = [[Cell(type=char_to_cell_type(c)) for c in row] for row in self._m]
        for k, city in enumerate(self.cities):
            for p in city:
                _require(grid[p.i][p.j].type == CellType.CITY, "Mismatch with cities.")
                grid[p.i][p.j].city_id = k
        for k, path in enumerate(self.paths):
            for p in path.cells:
                _require(grid[p.i][p.j].type == CellType.PATH, "Mismatch with paths.")
                grid[p.i][p.j].path_id = k
        return grid, self.cities, self.paths