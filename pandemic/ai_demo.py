"""A demonstration player showing how the player interface is used."""

from __future__ import annotations

from pandemic.player import Player
from pandemic.registry import register_player
from pandemic.structs import CellType, Dir, Pos


@register_player("Demo")
class DemoPlayer(Player):
    """Moves its units in mostly arbitrary ways."""

    def winning(self) -> bool:
        """Return whether this player has a strictly higher score than everybody else."""
        me = self.me()
        return all(
            pl == me or self.total_score(me) > self.total_score(pl)
            for pl in range(self.settings.nb_players)
        )

    def move_units(self) -> None:
        """Give a command to the units, visited in random order."""
        me = self.me()
        ids = self.my_units(me)
        for k in self.random_permutation(len(ids)):
            unit_id = ids[k]
            u = self.unit(unit_id)

            if self.random(0, 3):
                self.move(unit_id, Dir(self.random(0, len(Dir) - 1)))
            elif u.damage > 0:
                # Infected: go for a mask next to the unit, if any.
                for d in (Dir.BOTTOM, Dir.RIGHT, Dir.TOP, Dir.LEFT):
                    p1 = u.pos + d
                    if self.settings.pos_ok(p1) and self.cell(p1).mask:
                        self.move(unit_id, d)
                        break
                else:
                    self.move(unit_id, Dir.NONE)
            elif u.immune:
                self.move(unit_id, Dir.LEFT)
            elif self.cell(u.pos).type == CellType.CITY:
                c = self.cell(u.pos)
                if self.city_owner(c.city_id) != me:
                    self.move(unit_id, Dir.TOP)
                elif c.virus >= 3:
                    self.move(unit_id, Dir.RIGHT)
                else:
                    self.move(unit_id, Dir.BOTTOM)
            elif self.cell(Pos(3, 4)).type == CellType.WALL:
                self.move(unit_id, Dir.NONE)
            elif u.health < 30:
                self.move(unit_id, Dir.BOTTOM)
            elif self.cell(u.pos + Dir.TOP).unit_id != -1:
                other = self.unit(self.cell(u.pos + Dir.TOP).unit_id)
                if other.player == me:
                    self.move(unit_id, Dir.RIGHT)
                elif other.turns >= 15:
                    self.move(unit_id, Dir.NONE)
                elif other.mask:
                    self.move(unit_id, Dir.LEFT)
                else:
                    self.move(unit_id, Dir.TOP)
            elif self.random(0, 1):
                self.move(unit_id, Dir(self.random(0, 2)))

    def play(self) -> None:
        """Move the units unless late in the game, winning or short of time."""
        if self.round > self.settings.nb_rounds // 2:
            return
        if self.winning():
            return
        if self.status(self.me()) >= 0.9:
            return
        self.move_units()