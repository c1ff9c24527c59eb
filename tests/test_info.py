import pytest

from pandemic.info import Info
from pandemic.settings import Settings
from pandemic.structs import CellType, GameError, Pos, TokenStream, Unit

GRID = """
  00000
  01234
00 WWWWW
01 W;,.W
02 W;,aW
03 Wb..W
04 WWWWW
cities 1
2
1 1
2 1
paths 1
0 0 2
1 2
2 2
masks 1
3 3
"""


def small_settings():
    return Settings(
        nb_players=4,
        rows=5,
        cols=5,
        nb_rounds=10,
        initial_health=100,
        nb_units=1,
        bonus_per_city_cell=1,
        bonus_per_path_cell=1,
        factor_connected_component=1,
        infection_factor=1.0,
        mask_protection=2.0,
    )


def loaded(text=GRID):
    info = Info(small_settings())
    info.read_grid(TokenStream(text))
    return info


def test_read_grid_cell_types():
    info = loaded()
    assert info.cell(Pos(0, 0)).type == CellType.WALL
    assert info.cell(Pos(1, 1)).type == CellType.CITY
    assert info.cell(Pos(1, 1)).city_id == 0
    assert info.cell(Pos(2, 2)).type == CellType.PATH
    assert info.cell(Pos(2, 2)).path_id == 0
    assert info.cell(Pos(1, 3)).type == CellType.GRASS


def test_read_grid_virus_letters():
    info = loaded()
    assert info.cell(Pos(2, 3)).virus == 1
    assert info.cell(Pos(3, 1)).virus == 2
    assert info.cell(Pos(1, 3)).virus == 0


def test_read_grid_structures():
    info = loaded()
    assert info.city(0) == [Pos(1, 1), Pos(2, 1)]
    p = info.path(0)
    assert (p.origin, p.destination) == (0, 0)
    assert p.cells == [Pos(1, 2), Pos(2, 2)]
    assert info.masks == [Pos(3, 3)]
    assert info.cell(Pos(3, 3)).mask is True


def test_ok_on_fresh_grid():
    assert loaded().ok() is True


def test_ok_detects_missing_border(capsys):
    info = loaded()
    info.grid[0][2].type = CellType.GRASS
    assert info.ok() is False
    assert "is not a wall" in capsys.readouterr().err


def test_ok_detects_too_much_virus_on_grass(capsys):
    info = loaded()
    info.grid[1][3].virus = 5
    assert info.ok() is False
    assert "<= 4 in GRASS" in capsys.readouterr().err


def test_ok_detects_mask_outside_grass():
    info = loaded()
    info.grid[1][2].mask = True
    assert info.ok() is False


def test_ok_with_consistent_unit_and_negative_health(capsys):
    info = loaded()
    info.units = [Unit(id=0, player=0, pos=Pos(3, 2), health=10)]
    info.grid[3][2].unit_id = 0
    info.player_units = [[0], [], [], []]
    assert info.ok() is True
    info.units[0].health = -1
    assert info.ok() is False
    assert "health cannot be negative" in capsys.readouterr().err


def test_ok_detects_unit_missing_from_grid():
    info = loaded()
    info.units = [Unit(id=0, player=0, pos=Pos(3, 2), health=10)]
    info.player_units = [[0], [], [], []]
    assert info.ok() is False


def test_wrong_line_length_raises():
    text = GRID.replace("01 W;,.W", "01 W;,.WW")
    with pytest.raises(GameError, match="incorrect length"):
        loaded(text)


def test_missing_cities_keyword_raises():
    with pytest.raises(GameError, match="cities"):
        loaded(GRID.replace("cities 1", "towns 1"))


def test_city_on_non_city_cell_raises():
    with pytest.raises(GameError, match="Should be city"):
        loaded(GRID.replace("1 1\n2 1", "1 3\n2 1"))


def test_mask_on_non_grass_raises():
    with pytest.raises(GameError, match="Should be grass"):
        loaded(GRID.replace("masks 1\n3 3", "masks 1\n1 1"))


def test_unknown_grid_character_raises():
    with pytest.raises(GameError):
        loaded(GRID.replace("03 Wb..W", "03 Wb.?W"))