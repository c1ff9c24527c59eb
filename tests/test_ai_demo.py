import io

from pandemic.ai_demo import DemoPlayer
from pandemic.board import Board
from pandemic.registry import new_player, player_names
from pandemic.structs import Dir, TokenStream


def _config():
    lines = [
        "Pandemic 1.0", "nb_players 4", "rows 20", "cols 20", "nb_rounds 5",
        "initial_health 100", "nb_units 2", "bonus_per_city_cell 1",
        "bonus_per_path_cell 1", "factor_connected_component 1",
        "infection_factor 10", "mask_protection 2", "FIXED",
        "".join(str(j // 10) for j in range(20)),
        "".join(str(j % 10) for j in range(20)),
    ]
    for i in range(20):
        if i in (0, 19):
            row = "W" * 20
        elif i == 9:
            row = "W" + "." * 8 + ";;,,,;;" + "." * 3 + "W"
        elif i == 10:
            row = "W" + "." * 8 + ";;...;;" + "." * 3 + "W"
        else:
            row = "W" + "." * 18 + "W"
        lines.append(f"{i:02d} {row}")
    lines += [
        "cities 2",
        "4", "9 9", "9 10", "10 9", "10 10",
        "4", "9 14", "9 15", "10 14", "10 15",
        "paths 1",
        "0 1 3", "9 11", "9 12", "9 13",
        "masks 0",
    ]
    return "\n".join(lines) + "\n"


def _setup(seed=3, me=0):
    board = Board(TokenStream(_config()), seed)
    player = DemoPlayer()
    player.setup(me, board.settings, seed + me + 1)
    player.reset(board)
    return board, player


def test_registered_as_demo():
    assert "Demo" in player_names()
    assert type(new_player("Demo")) is DemoPlayer


def test_not_winning_when_scores_tie():
    _, player = _setup()
    assert player.winning() is False


def test_winning_with_top_score():
    _, player = _setup()
    player.total_scores = [5, 0, 0, 0]
    assert player.winning() is True
    player.total_scores = [5, 5, 0, 0]
    assert player.winning() is False


def test_does_nothing_late_in_game():
    _, player = _setup()
    player.round = 3
    player.play()
    assert player.commands == []


def test_does_nothing_when_winning():
    _, player = _setup()
    player.total_scores = [9, 1, 1, 1]
    player.play()
    assert player.commands == []


def test_does_nothing_when_short_of_time():
    _, player = _setup()
    player.cpu_status = [0.95, 0.0, 0.0, 0.0]
    player.play()
    assert player.commands == []


def test_commands_are_for_own_units_once_each():
    for seed in range(1, 6):
        _, player = _setup(seed=seed, me=2)
        player.play()
        ids = [c.unit_id for c in player.commands]
        assert len(ids) == len(set(ids))
        assert set(ids) <= set(player.my_units(2))
        assert all(c.direction in set(Dir) for c in player.commands)


def test_board_accepts_demo_commands():
    board, _ = _setup(seed=8)
    players = []
    for pl in range(4):
        p = DemoPlayer()
        p.setup(pl, board.settings, 9 + pl)
        p.reset(board)
        p.play()
        players.append(p)
    out = io.StringIO()
    board.next(players, out)
    assert board.round == 1
    assert out.getvalue().startswith("commands\n")
    assert out.getvalue().endswith("-1\n")