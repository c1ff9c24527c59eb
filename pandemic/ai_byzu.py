"""A player that steers each unit by breadth-first searches for nearby goals."""

from __future__ import annotations

from collections import deque
from typing import Callable

from pandemic.player import Player
from pandemic.registry import register_player
from pandemic.structs import Cell, CellType, Dir, Pos, Unit

_DIRECTIONS = (Dir.BOTTOM, Dir.RIGHT, Dir.TOP, Dir.LEFT)
_OPPOSITE = {
    Dir.BOTTOM: Dir.TOP,
    Dir.TOP: Dir.BOTTOM,
    Dir.LEFT: Dir.RIGHT,
    Dir.RIGHT: Dir.LEFT,
}


@register_player("PedroSanchez")
class ByzuPlayer(Player):
    """Attacks adjacent enemies, picks up masks, hunts weak enemies and conquers land."""

    @staticmethod
    def _first_step(came_from: dict, start: Pos, target: Pos) -> Dir:
        pos = target
        while True:
            d = came_from[pos]
            if pos == start + d:
                return d
            pos = pos + _OPPOSITE[d]

    def bfs(self, start: Pos, condition: Callable[[Cell], bool]) -> tuple[Dir, int]:
        """Return the first step and distance to the nearest cell meeting
        ``condition``, or (Dir.NONE, -1) when none can be reached."""
        came_from = {start: Dir.NONE}
        queue = deque([(start, 0)])
        while queue:
            here, dist = queue.popleft()
            for d in _DIRECTIONS:
                nxt = here + d
                if not self.settings.pos_ok(nxt) or nxt in came_from:
                    continue
                c = self.cell(nxt)
                if c.type == CellType.WALL:
                    continue
                came_from[nxt] = d
                if condition(c):
                    return self._first_step(came_from, start, nxt), dist + 1
                queue.append((nxt, dist + 1))
        return Dir.NONE, -1

    def nearest_city(self, start: Pos) -> tuple[Dir, int]:
        """Search for a city cell not owned by this player."""
        me = self.me()
        return self.bfs(
            start, lambda c: c.type == CellType.CITY and self.city_owner(c.city_id) != me
        )

    def nearest_path(self, start: Pos) -> tuple[Dir, int]:
        """Search for a path cell not owned by this player."""
        me = self.me()
        return self.bfs(
            start, lambda c: c.type == CellType.PATH and self.path_owner(c.path_id) != me
        )

    def _is_enemy(self, c: Cell) -> bool:
        return c.unit_id != -1 and self.unit(c.unit_id).player != self.me()

    def nearest_enemy(self, start: Pos) -> tuple[Dir, int]:
        """Search for a cell holding an enemy unit."""
        return self.bfs(start, self._is_enemy)

    def nearest_weak_enemy(self, start: Pos, unit: Unit) -> tuple[Dir, int]:
        """Search for an enemy with little health, much weaker than ``unit``."""

        def weak(c: Cell) -> bool:
            if not self._is_enemy(c):
                return False
            enemy = self.unit(c.unit_id)
            return enemy.health <= 40 and unit.health > enemy.health + 40

        return self.bfs(start, weak)

    def nearest_mask(self, start: Pos) -> tuple[Dir, int]:
        """Search for a cell holding a mask."""
        return self.bfs(start, lambda c: c.mask)

    def _choose(self, u: Unit) -> tuple[Dir, int]:
        p = u.pos
        enemy = self.nearest_enemy(p)
        weak = self.nearest_weak_enemy(p, u)
        city = self.nearest_city(p)
        path = self.nearest_path(p)
        mask = self.nearest_mask(p)

        if enemy[1] == 1:
            return enemy[0], 100
        if not u.immune and mask[1] == 1:
            return mask[0], 90
        if 0 < weak[1] <= 3:
            return weak[0], 80
        if city[1] > 0 and (path[1] == -1 or city[1] <= path[1]):
            return city[0], 60
        if path[1] > 0:
            return path[0], 50
        return Dir.NONE, 0

    def play(self) -> None:
        """Give every unit a move, most urgent units first."""
        me = self.me()
        ids = self.my_units(me)
        plans = []
        for unit_id in ids:
            direction, priority = self._choose(self.unit(unit_id))
            plans.append((priority, unit_id, direction))
        plans.sort(key=lambda plan: plan[0], reverse=True)

        occupied = {self.unit(unit_id).pos for unit_id in ids}
        for _, unit_id, direction in plans:
            here = self.unit(unit_id).pos
            target = here + direction
            moved = False
            if (direction != Dir.NONE and self.settings.pos_ok(target)
                    and target not in occupied):
                self.move(unit_id, direction)
                occupied.add(target)
                moved = True
            if not moved:
                for d in _DIRECTIONS:
                    np = here + d
                    if (self.settings.pos_ok(np)
                            and self.cell(np).type != CellType.WALL
                            and self.cell(np).unit_id == -1
                            and np not in occupied):
                        if not moved:
                            self.move(unit_id, d)
                            moved = True
                        occupied.add(np)
            if self.status(me) >= 0.90:
                return