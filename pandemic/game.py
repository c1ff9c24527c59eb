"""Running a whole game: load the board, create the players and play every round."""

from __future__ import annotations

import sys

from pandemic.board import Board
from pandemic.registry import new_player
from pandemic.structs import GameError, TokenStream


def _info(message: str) -> None:
    print(f"info: {message}", file=sys.stderr)


def run(names, instream, outstream, seed: int) -> None:
    """Play a game between the players ``names``, reading the configuration
    from ``instream`` and writing the game record to ``outstream``."""
    _info(f"seed {seed}")

    _info("loading game")
    board = Board(TokenStream(instream), seed)
    _info("loaded game")

    settings = board.settings
    names = list(names)
    if len(names) != settings.nb_players:
        raise GameError("Wrong number of players.")

    players = []
    for pl, name in enumerate(names):
        board.names[pl] = name
        _info(f"loading player {name}")
        player = new_player(name)
        player.setup(pl, settings, seed + pl + 1)
        players.append(player)
    _info("players loaded")

    outstream.write(f"Game\n\nSeed {seed}\n\n")
    outstream.write(board.format_settings())
    outstream.write(board.format_names())
    outstream.write(board.format_state())

    for rnd in range(settings.nb_rounds):
        _info(f"start round {rnd}")
        for pl, player in enumerate(players):
            _info(f"    start player {pl}")
            player.reset(board)
            player.play()
            _info(f"    end player {pl}")
        board.next(players, outstream)
        outstream.write(board.format_state())
        _info(f"end round {rnd}")

    board.print_results(sys.stderr)
    _info("game played")