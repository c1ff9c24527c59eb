"""A player that does nothing."""

from __future__ import annotations

from pandemic.player import Player
from pandemic.registry import register_player


@register_player("Null")
class NullPlayer(Player):
    """Never gives any command."""

    def play(self) -> None:
        """Do nothing this round."""