"""The board that referees a game: it owns the state, applies moves and keeps scores."""

from __future__ import annotations

import math
import sys

from pandemic.action import Action, Command, format_commands
from pandemic.info import Info
from pandemic.mapgen import MapGenerator
from pandemic.rng import RandomGenerator
from pandemic.settings import read_settings
from pandemic.structs import (
    CITY_CHAR,
    GRASS_CHAR,
    PATH_CHAR,
    CellType,
    Dir,
    GameError,
    Pos,
    TokenStream,
    Unit,
    cell_type_to_char,
    dir_ok,
)

_NOWHERE = Pos(-1, -1)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise GameError(message)


def _ratio(a: float, b: float) -> float:
    """Divide as real numbers do, giving inf or nan instead of raising on zero."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a)
    return a / b


def _warn(message: str) -> None:
    print(f"warning: {message}", file=sys.stderr)


class Board(Info, RandomGenerator):
    """All game information plus the player names and the game's random generator."""

    def __init__(self, tokens: TokenStream, seed: int):
        Info.__init__(self, None)
        RandomGenerator.__init__(self, seed)
        self.settings = read_settings(tokens)
        self.names = [""] * self.settings.nb_players
        self._read_generator_and_grid(tokens)

        nb_players = self.settings.nb_players
        self.round = 0
        self.total_scores = [0] * nb_players
        self.cpu_status = [0.0] * nb_players
        self.city_owners = [-1] * len(self.cities)
        self.path_owners = [-1] * len(self.paths)
        self._generate_units()
        _require(self.ok(), "Invariants are not satisfied.")

    # ------------------------------------------------------------ construction

    def _read_generator_and_grid(self, tokens: TokenStream) -> None:
        generator = tokens.word()
        if generator == "FIXED":
            self.read_grid(tokens)
            return
        params = []
        while True:
            try:
                params.append(tokens.integer())
            except GameError:
                break
        _require(generator == "GENERATOR1", "Unknown grid generator.")
        mapgen = MapGenerator(self.settings.rows, self.settings.cols, self)
        self.grid, self.cities, self.paths = mapgen.generate(params)
        self.masks = []

    def _generate_units(self) -> None:
        s = self.settings
        self.units = []
        self.player_units = []
        for pl in range(s.nb_players):
            ids = []
            for u in range(s.nb_units):
                unit_id = len(self.units)
                infected = u < 3
                self.units.append(Unit(
                    id=unit_id,
                    player=pl,
                    health=s.initial_health,
                    damage=u + 1 if infected else 0,
                    turns=1 if infected else 0,
                ))
                ids.append(unit_id)
            self.player_units.append(ids)
        for ids in self.player_units:
            self._spawn(ids)

    # ----------------------------------------------------------------- queries

    def name(self, player: int) -> str:
        """Return the name of ``player``."""
        _require(self.settings.player_ok(player), "Player is not ok.")
        return self.names[player]

    # ---------------------------------------------------------------- printing

    def format_settings(self) -> str:
        """Return the settings in the configuration-file layout."""
        return self.settings.format()

    def format_names(self) -> str:
        """Return the line that lists the player names."""
        return "names         " + "".join(f" {n}" for n in self.names) + "\n"

    @staticmethod
    def _cell_char(c) -> str:
        if c.type == CellType.WALL:
            return cell_type_to_char(c.type)
        if c.type == CellType.GRASS:
            return GRASS_CHAR if c.virus == 0 else chr(ord("a") + c.virus - 1)
        if c.type == CellType.PATH:
            return PATH_CHAR if c.virus == 0 else chr(ord("0") + c.virus - 1)
        if c.type == CellType.CITY:
            return CITY_CHAR if c.virus == 0 else chr(ord("A") + c.virus - 1)
        return ""

    def format_state(self) -> str:
        """Return the state in the layout that players read back each round."""
        s = self.settings
        out = ["\n\n"]
        out.append("   " + "".join(str(j // 10) for j in range(s.cols)) + "\n")
        out.append("   " + "".join(str(j % 10) for j in range(s.cols)) + "\n")
        for i, row in enumerate(self.grid):
            out.append(f"{i // 10}{i % 10} " + "".join(self._cell_char(c) for c in row) + "\n")

        out.append(f"\ncities {len(self.cities)}\n")
        for city in self.cities:
            out.append(f"\n{len(city)}\n")
            out.extend(f"{p.i} {p.j}\n" for p in city)

        out.append(f"\npaths {len(self.paths)}\n")
        for path in self.paths:
            out.append(f"\n{path.origin} {path.destination} {len(path.cells)}\n")
            out.extend(f"{p.i} {p.j}\n" for p in path.cells)

        out.append(f"\nmasks {len(self.masks)}\n")
        out.extend(f"{p.i} {p.j} \n" for p in self.masks)

        out.append(f"\nround {self.round}\n")
        out.append("total_score" + "".join(f" {ts}" for ts in self.total_scores) + "\n")
        out.append("status" + "".join(f" {st:g}" for st in self.cpu_status) + "\n")

        out.append("\ncity_owners\n" + "".join(f" {o}" for o in self.city_owners) + "\n")
        out.append("\npath_owners\n" + "".join(f" {o}" for o in self.path_owners) + "\n")

        out.append("\nunits\n")
        for u in self.units:
            out.append(
                f"{u.player} {u.pos.i} {u.pos.j} {u.health} {u.damage} {u.turns} "
                f"{int(u.immune)} {int(u.mask)} \n"
            )
        out.append("\n")
        return "".join(out)

    def print_results(self, stream=None) -> None:
        """Write each player's score and the players with the top score."""
        stream = sys.stderr if stream is None else stream
        max_score = 0
        best: list[int] = []
        for pl in range(self.settings.nb_players):
            score = self.total_score(pl)
            stream.write(f"info: player {self.name(pl)} got score {score}\n")
            if score > max_score:
                max_score = score
                best = [pl]
            elif score == max_score:
                best.append(pl)
        stream.write(
            "info: player(s)" + "".join(f" {self.name(pl)}" for pl in best)
            + " got top score\n"
        )

    # ------------------------------------------------------------------ rounds

    def next(self, actions, out) -> None:
        """Apply one round of ``actions`` and write the commands performed to ``out``."""
        _require(self.ok(), "Invariants are not satisfied.")
        s = self.settings
        _require(len(actions) == s.nb_players, "Wrong number of actions.")
        self.round += 1
        nu = self.total_units()

        seen = [False] * nu
        requested: list[Command] = []
        for pl, action in enumerate(actions):
            for m in action.commands:
                unit_id, direction = m.unit_id, m.direction
                if not self.unit_ok(unit_id):
                    _warn(f"id out of range : {unit_id}")
                elif self.units[unit_id].player != pl:
                    _warn(f"unit {unit_id} of player {self.units[unit_id].player} "
                          f"not owned by {pl}")
                else:
                    _require(not seen[unit_id], "More than one command for the same unit.")
                    seen[unit_id] = True
                    if not dir_ok(direction):
                        _warn(f"direction not valid: {direction}")
                    elif direction != Dir.NONE:
                        requested.append(Command(unit_id, Dir(direction)))

        killed = [False] * nu
        done = []
        for k in self.random_permutation(len(requested)):
            m = requested[k]
            if not killed[m.unit_id] and self._move(m.unit_id, m.direction, killed):
                done.append(m)
        out.write("commands\n")
        out.write(format_commands(done))

        self._propagate(killed)

        for ids in self.player_units:
            ids.sort()

        self._spawn([unit_id for unit_id, dead in enumerate(killed) if dead])

        if self.round % 5 == 0 and self.round < s.nb_rounds:
            self._spawn_mask()

        self._compute_total_scores()
        _require(self.ok(), "Invariants are not satisfied.")

    # ------------------------------------------------------------- unit moves

    def _move(self, unit_id: int, direction: Dir, killed: list[bool]) -> bool:
        """Try to move a unit; return whether it moved."""
        _require(self.unit_ok(unit_id), "Invalid identifier.")
        _require(dir_ok(direction) and direction != Dir.NONE, "Invalid direction")
        u = self.units[unit_id]
        _require(u.health >= 0, "Health cannot be negative.")
        p1 = u.pos
        _require(self.settings.pos_ok(p1), "Initial position in movement is not ok.")
        c1 = self.grid[p1.i][p1.j]
        _require(c1.type != CellType.WALL, "Initial position cannot be wall.")

        p2 = p1 + direction
        if not self.settings.pos_ok(p2):
            return False
        c2 = self.grid[p2.i][p2.j]
        if c2.type == CellType.WALL:
            return False

        other_id = c2.unit_id
        if other_id != -1:
            _require(self.unit_ok(other_id), "Invalid identifier.")
            other = self.units[other_id]
            _require(other.health >= 0, "Health cannot be negative.")
            if other.player == u.player:
                return False
            other.health -= self.random(25, 40)
            if other.health >= 0:
                return False
            self._kill(other_id, u.player, killed)

        c1.unit_id = -1
        c2.unit_id = unit_id
        u.pos = p2
        if c2.mask and not u.mask:
            u.mask = True
            c2.mask = False
            k = self.masks.index(p2)
            self.masks[k], self.masks[-1] = self.masks[-1], self.masks[k]
            self.masks.pop()
        return True

    def _kill(self, unit_id: int, pl: int, killed: list[bool]) -> None:
        _require(self.unit_ok(unit_id), "Invalid identifier.")
        _require(self.settings.player_ok(pl), "Invalid player.")
        _require(not killed[unit_id], "Cannot already be dead.")
        killed[unit_id] = True

        u = self.units[unit_id]
        self.grid[u.pos.i][u.pos.j].unit_id = -1

        if pl != u.player:
            owned = self.player_units[u.player]
            _require(unit_id in owned, "Cannot find id to kill.")
            k = owned.index(unit_id)
            owned[k], owned[-1] = owned[-1], owned[k]
            owned.pop()
            self.player_units[pl].append(unit_id)
            u.player = pl

        u.pos = _NOWHERE
        u.health = self.settings.initial_health
        u.immune = False
        u.mask = False
        if self.random(0, 4):
            u.damage = 0
            u.turns = 0
        else:
            u.damage = self.random(2, 4)
            u.turns = 1

    # ---------------------------------------------------------------- spawning

    def _valid_to_spawn(self, pos: Pos) -> bool:
        if self.grid[pos.i][pos.j].type in (CellType.WALL, CellType.CITY, CellType.PATH):
            return False
        for d in Dir:
            p = pos + d
            if self.settings.pos_ok(p) and self.grid[p.i][p.j].unit_id != -1:
                return False
        return True

    def _place(self, unit_id: int, pos: Pos) -> None:
        _require(self.unit_ok(unit_id), "Invalid identifier.")
        _require(self.settings.pos_ok(pos), "Invalid position.")
        self.units[unit_id].pos = pos
        self.grid[pos.i][pos.j].unit_id = unit_id

    def _spawn(self, ids) -> None:
        rows, cols = self.settings.rows, self.settings.cols
        candidates = set()
        for i in range(1, rows - 1):
            candidates.update((Pos(i, 1), Pos(i, cols - 2)))
        for j in range(1, cols - 1):
            candidates.update((Pos(1, j), Pos(rows - 2, j)))
        ordered = sorted(candidates)

        for unit_id in ids:
            pos = None
            while pos is None and ordered:
                cand = ordered.pop(self.random(0, len(ordered) - 1))
                if self._valid_to_spawn(cand):
                    pos = cand
            if pos is None:
                pos = next(
                    (Pos(i, j) for i in range(rows) for j in range(cols)
                     if self._valid_to_spawn(Pos(i, j))),
                    None,
                )
            _require(pos is not None, "Cannot find a cell to regenerate units")
            self._place(unit_id, pos)

    def _mask_allowed(self, i: int, j: int) -> bool:
        c = self.grid[i][j]
        return c.type == CellType.GRASS and c.unit_id == -1 and not c.mask

    def _put_mask(self, i: int, j: int) -> None:
        self.grid[i][j].mask = True
        self.masks.append(Pos(i, j))

    def _spawn_mask(self) -> None:
        """Put a mask on a free grass cell with no unit and no mask."""
        rows, cols = self.settings.rows, self.settings.cols
        inner = [(i, j) for i in range(2, rows - 2) for j in range(2, cols - 2)]
        if any(self._mask_allowed(i, j) for i, j in inner):
            # Draw cells at random until a free one turns up.
            while True:
                i = self.random(2, rows - 3)
                j = self.random(2, cols - 3)
                if self._mask_allowed(i, j):
                    self._put_mask(i, j)
                    return
        for i in range(rows):
            for j in range(cols):
                if self._mask_allowed(i, j):
                    self._put_mask(i, j)
                    return

    # ------------------------------------------------------------------- virus

    def _same(self, i1: int, j1: int, i2: int, j2: int) -> bool:
        """Return whether both cells are outdoors, or both are indoors."""
        pos_ok = self.settings.pos_ok
        if not pos_ok(Pos(i1, j1)) or not pos_ok(Pos(i2, j2)):
            return False
        t1, t2 = self.grid[i1][j1].type, self.grid[i2][j2].type
        if t1 == CellType.WALL or t2 == CellType.WALL:
            return False
        if t1 == CellType.GRASS:
            return t2 == CellType.GRASS
        return t2 != CellType.GRASS

    def _propagate(self, killed: list[bool]) -> None:
        s = self.settings
        grid = self.grid

        for unit_id, u in enumerate(self.units):
            if not killed[unit_id] and u.damage > 0 and not u.mask:
                grid[u.pos.i][u.pos.j].virus += 3

        new_virus = [[c.virus for c in row] for row in grid]
        for i, row in enumerate(grid):
            for j, c in enumerate(row):
                if c.type == CellType.WALL:
                    continue
                vir = max(0, c.virus - 1)
                for ii, jj in ((i + 1, j), (i - 1, j), (i, j + 1), (i, j - 1)):
                    if self._same(i, j, ii, jj):
                        vir = max(vir, grid[ii][jj].virus - 1)
                new_virus[i][j] = min(vir, 4 if c.type == CellType.GRASS else 10)
        for row, values in zip(grid, new_virus):
            for c, v in zip(row, values):
                c.virus = v

        for unit_id, u in enumerate(self.units):
            if killed[unit_id]:
                continue
            if u.damage == 0 and not u.immune:
                p = _ratio(grid[u.pos.i][u.pos.j].virus, s.infection_factor)
                if u.mask:
                    p = _ratio(p, s.mask_protection)
                if self.bernoulli(p):
                    u.damage = self.random(2, 5)
                    u.turns = 1
            elif not u.immune:
                u.turns += 1
                p = 0.001 * (u.turns * u.turns / 16.0 + 1)
                if self.bernoulli(p):
                    u.damage = 0
                    u.immune = True

        for unit_id, u in enumerate(self.units):
            u.health -= u.damage
            if u.health < 0:
                self._kill(unit_id, self.random(0, 3), killed)

    # ------------------------------------------------------------------ scores

    def _score_region(self, bonus: int, cells, owner: int) -> int:
        """Score a city or path; return its owner afterwards."""
        counts = [0] * self.settings.nb_players
        for p in cells:
            uid = self.grid[p.i][p.j].unit_id
            if uid != -1:
                counts[self.units[uid].player] += 1
        max_sc, max_pl = 0, -1  # max_pl is the only player with the top count
        for pl, sc in enumerate(counts):
            if sc > max_sc:
                max_sc, max_pl = sc, pl
            elif sc == max_sc:
                max_pl = -1
        if max_pl != -1:
            self.total_scores[max_pl] += bonus * len(cells)
            return max_pl
        if owner != -1:
            self.total_scores[owner] += bonus * len(cells)
        return owner

    def _score_graph(self, pl: int) -> None:
        owned = [k for k, o in enumerate(self.city_owners) if o == pl]
        index = {k: n for n, k in enumerate(owned)}
        adjacency: list[list[int]] = [[] for _ in owned]
        for path, owner in zip(self.paths, self.path_owners):
            a, b = path.origin, path.destination
            if owner == pl and self.city_owners[a] == pl and self.city_owners[b] == pl:
                adjacency[index[a]].append(index[b])
                adjacency[index[b]].append(index[a])

        marked = [False] * len(owned)
        for start in range(len(owned)):
            if marked[start]:
                continue
            marked[start] = True
            stack = [start]
            size = 0
            while stack:
                node = stack.pop()
                size += 1
                for nxt in adjacency[node]:
                    if not marked[nxt]:
                        marked[nxt] = True
                        stack.append(nxt)
            _require(0 <= size <= 25, "Unexpected size of connected component.")
            self.total_scores[pl] += self.settings.factor_connected_component * (1 << size)

    def _compute_total_scores(self) -> None:
        s = self.settings
        for k, city in enumerate(self.cities):
            self.city_owners[k] = self._score_region(
                s.bonus_per_city_cell, city, self.city_owners[k])
        for k, path in enumerate(self.paths):
            self.path_owners[k] = self._score_region(
                s.bonus_per_path_cell, path.cells, self.path_owners[k])
        for pl in range(s.nb_players):
            self._score_graph(pl)


__all__ = ["Board", "Action"]